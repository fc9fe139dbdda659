"""Natural language understanding: normalization, history and resolution."""

from .types import CORRECTION_SUGGESTION, Intent, ParseResult, clamp_confidence
from .history import HistoryStore, DEFAULT_HISTORY_LIMIT
from .normalizer import detect_language, has_sensitive_content, normalize_input
from .resolver import IntentResolver

__all__ = [
    "CORRECTION_SUGGESTION",
    "Intent",
    "ParseResult",
    "clamp_confidence",
    "HistoryStore",
    "DEFAULT_HISTORY_LIMIT",
    "detect_language",
    "has_sensitive_content",
    "normalize_input",
    "IntentResolver",
]
