from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import List, Optional


@dataclass
class GenerateOptions:
    """Per-client defaults and per-request overrides for text generation."""

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    stop_sequences: Optional[List[str]] = None
    api_key: Optional[str] = None
    endpoint: Optional[str] = None

    def merged_with(self, override: Optional["GenerateOptions"]) -> "GenerateOptions":
        """Return a copy where every field set on ``override`` wins."""
        if override is None:
            return replace(self)
        updates = {
            f.name: getattr(override, f.name)
            for f in fields(override)
            if getattr(override, f.name) is not None
        }
        return replace(self, **updates)


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class LLMResponse:
    """Text returned by a model, or an error in place of it."""

    content: str
    usage: Optional[TokenUsage] = None
    error: Optional[str] = None
    raw: Optional[dict] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> "LLMResponse":
        return cls(content="", error=message)
