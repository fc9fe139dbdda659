from .base import VoiceInputInterface
from .mock import MockVoiceInput

__all__ = ["VoiceInputInterface", "MockVoiceInput"]
