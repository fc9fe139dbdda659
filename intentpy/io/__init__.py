from .console import ConsoleInput, ConsoleOutput, InputHandler, OutputHandler
from .voice import MockVoiceInput, VoiceInputInterface

__all__ = [
    "ConsoleInput",
    "ConsoleOutput",
    "InputHandler",
    "OutputHandler",
    "MockVoiceInput",
    "VoiceInputInterface",
]
