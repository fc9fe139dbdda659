"""Prompt construction for intent parsing."""

from .types import PromptContext, PromptHistoryItem, PromptOptions
from .templates import build_intent_prompt, INTENT_SCHEMA

__all__ = [
    "PromptContext",
    "PromptHistoryItem",
    "PromptOptions",
    "build_intent_prompt",
    "INTENT_SCHEMA",
]
