from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import os

from dotenv import load_dotenv

from ..prompt.types import PromptContext, PromptOptions


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


@dataclass
class IntentConfig:
    """Configuration options for :class:`~intentpy.nlu.resolver.IntentResolver`."""

    ai_provider: str = field(
        default_factory=lambda: os.getenv("INTENTPY_PROVIDER", "mock")
    )
    api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("INTENTPY_API_KEY")
    )
    model: Optional[str] = field(default_factory=lambda: os.getenv("INTENTPY_MODEL"))
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    endpoint: Optional[str] = None
    request_timeout: float = 30.0

    # Resolution loop
    max_retries: int = 1
    min_confidence: float = 0.6
    retry_on_low_confidence: bool = True
    keep_history: bool = True
    history_limit: int = 10

    # Backoff between attempts
    retry_base_delay: float = 0.0
    retry_max_delay: float = 10.0
    retry_exponential_base: float = 2.0

    prompt: PromptOptions = field(default_factory=PromptOptions)
    default_context: PromptContext = field(default_factory=PromptContext)
    verbose: bool = field(
        default_factory=lambda: os.getenv("INTENTPY_VERBOSE", "false").lower() == "true"
    )

    def resolved_api_key(self) -> Optional[str]:
        """Return the configured key, falling back to the provider's env var."""
        if self.api_key:
            return self.api_key
        provider = self.ai_provider.lower()
        if provider == "openai":
            return os.getenv("OPENAI_API_KEY")
        if provider == "anthropic":
            return os.getenv("ANTHROPIC_API_KEY")
        return None

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "IntentConfig":
        """Build a config after loading variables from a ``.env`` file."""
        load_dotenv(dotenv_path)
        return cls(
            max_retries=_env_int("INTENTPY_MAX_RETRIES", 1),
            min_confidence=_env_float("INTENTPY_MIN_CONFIDENCE", 0.6),
            history_limit=_env_int("INTENTPY_HISTORY_LIMIT", 10),
            request_timeout=_env_float("INTENTPY_REQUEST_TIMEOUT", 30.0),
            retry_base_delay=_env_float("INTENTPY_RETRY_BASE_DELAY", 0.0),
        )
