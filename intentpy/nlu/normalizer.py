"""Input clean-up applied before a command reaches the model."""

from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

_WHITESPACE = re.compile(r"\s+")
_POLITENESS = re.compile(
    r"^(please|can you|could you|i want to|i would like to)\s+", re.IGNORECASE
)

# Leading phrase -> canonical verb. Only the first matching phrase is applied.
ACTION_SYNONYMS: List[Tuple[str, str]] = [
    ("show me", "show"),
    ("go to", "navigate to"),
    ("take me to", "navigate to"),
    ("open", "navigate to"),
    ("navigate", "navigate to"),
    ("bring up", "show"),
    ("display", "show"),
    ("find", "search for"),
    ("look for", "search for"),
    ("search", "search for"),
    ("filter by", "filter"),
    ("sort by", "sort"),
    ("order by", "sort"),
]

TYPO_CORRECTIONS: Dict[str, str] = {
    "dasboard": "dashboard",
    "dashbord": "dashboard",
    "setting": "settings",
    "setings": "settings",
    "report": "reports",
    "statistic": "statistics",
    "analytic": "analytics",
    "notifcation": "notification",
    "acount": "account",
    "proflie": "profile",
}

_SYNONYM_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(rf"^{re.escape(phrase)}\s+", re.IGNORECASE), canonical)
    for phrase, canonical in ACTION_SYNONYMS
]
_TYPO_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(rf"\b{re.escape(typo)}\b", re.IGNORECASE), fix)
    for typo, fix in TYPO_CORRECTIONS.items()
]

SENSITIVE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\b(password|credit card|social security|ssn|private key)\b", re.IGNORECASE),
]

_LANGUAGE_MARKERS: Dict[str, Pattern[str]] = {
    "en": re.compile(r"\b(the|and|is|in|to|you|for)\b", re.IGNORECASE),
    "es": re.compile(r"\b(el|la|los|las|y|es|en|para|tu)\b", re.IGNORECASE),
    "fr": re.compile(r"\b(le|la|les|et|est|dans|pour|vous)\b", re.IGNORECASE),
    "de": re.compile(r"\b(der|die|das|und|ist|in|für|sie)\b", re.IGNORECASE),
    "pt": re.compile(r"\b(o|a|os|as|e|é|em|para|você)\b", re.IGNORECASE),
}


def normalize_input(text: str) -> str:
    """Trim, collapse whitespace, and canonicalize a user command.

    Steps run in a fixed order: whitespace clean-up, removal of one leading
    politeness phrase, rewrite of the first matching leading synonym to its
    canonical verb, then word-level typo correction.
    """
    if not text:
        return ""

    normalized = _WHITESPACE.sub(" ", text.strip())
    normalized = _POLITENESS.sub("", normalized, count=1)

    for pattern, canonical in _SYNONYM_PATTERNS:
        if pattern.match(normalized):
            normalized = pattern.sub(f"{canonical} ", normalized, count=1)
            break

    for pattern, fix in _TYPO_PATTERNS:
        normalized = pattern.sub(fix, normalized)

    return normalized


def has_sensitive_content(text: str) -> bool:
    return any(pattern.search(text) for pattern in SENSITIVE_PATTERNS)


def detect_language(text: str) -> str:
    """Guess the language of ``text`` from common function words.

    Returns the ISO code with the most marker hits, ``"en"`` when nothing
    matches. Ties go to the language listed first.
    """
    best, best_score = "en", 0
    for lang, pattern in _LANGUAGE_MARKERS.items():
        score = len(pattern.findall(text))
        if score > best_score:
            best, best_score = lang, score
    return best
