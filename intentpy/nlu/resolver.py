# nlu/resolver.py

from __future__ import annotations

import asyncio
import inspect
import time
from typing import Any, Awaitable, Dict, List, Optional, Union

from ..ai_clients import AIClientFactory, BaseAIClient, ProviderType
from ..core.config import IntentConfig
from ..core.errors import (
    DecodeError,
    ErrorResponse,
    FailureKind,
    IntentError,
    LowConfidenceError,
    ModelError,
    RETRYABLE_KINDS,
    SensitiveContentError,
)
from ..logging import IntentLogger
from ..prompt import PromptContext, PromptHistoryItem, build_intent_prompt
from ..utils import RetryPolicy, extract_json_from_text
from .history import HistoryStore
from .normalizer import has_sensitive_content, normalize_input
from .types import CORRECTION_SUGGESTION, Intent, ParseResult


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class IntentResolver:
    """Turns raw user commands into structured intents.

    Each call normalizes the input, asks the configured language model for
    an intent, validates the answer and retries within a fixed budget when
    the model fails, returns something undecodable, or reports a
    confidence below the floor. Successful resolutions are remembered in a
    bounded history that can be fed back into later prompts.

    Concurrent calls on one instance are allowed. History entries are
    recorded in completion order; callers needing invocation order must
    serialize their calls.
    """

    def __init__(
        self,
        config: Optional[IntentConfig] = None,
        ai_client: Optional[BaseAIClient] = None,
        logger: Optional[IntentLogger] = None,
    ) -> None:
        self.config = config or IntentConfig()
        self.logger = logger or IntentLogger(verbose=self.config.verbose)
        self.ai_client = ai_client or AIClientFactory.from_config(self.config, logger=self.logger)
        self.retry_policy = RetryPolicy(
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_base_delay,
            max_delay=self.config.retry_max_delay,
            exponential_base=self.config.retry_exponential_base,
        )
        self.history = HistoryStore(self.config.history_limit)
        self.default_context = self.config.default_context
        self.logger.log(
            "INFO",
            "Intent resolver initialized",
            {"provider": self.ai_client.name, "max_retries": self.retry_policy.max_retries},
        )

    async def resolve(
        self, input: str, context: Optional[PromptContext] = None
    ) -> ParseResult:
        """Resolve ``input`` into an intent. Never raises."""
        start = time.perf_counter()
        attempts = 0
        try:
            normalized = normalize_input(input)

            if has_sensitive_content(normalized):
                raise SensitiveContentError("Input contains sensitive content")

            merged_context = self.default_context.merged_with(context)
            last: Optional[ParseResult] = None

            for attempt in range(self.retry_policy.max_attempts):
                if attempt:
                    delay = self.retry_policy.get_delay(attempt - 1)
                    if delay:
                        await asyncio.sleep(delay)
                attempts = attempt + 1

                try:
                    intent, raw = await self._attempt(normalized, merged_context)
                except LowConfidenceError as exc:
                    if self.config.retry_on_low_confidence and attempt < self.retry_policy.max_retries:
                        self.logger.log(
                            "WARNING",
                            "Low confidence intent, retrying",
                            {"confidence": exc.details.get("confidence"), "attempt": attempts},
                        )
                        continue
                    return ParseResult.failed(
                        FailureKind.LOW_CONFIDENCE,
                        exc.message,
                        _elapsed_ms(start),
                        retries=attempt,
                        raw_model_output=exc.details.get("raw_output"),
                        correction_suggestion=CORRECTION_SUGGESTION,
                    )
                except IntentError as exc:
                    if exc.kind not in RETRYABLE_KINDS:
                        raise
                    last = ParseResult.failed(
                        exc.kind,
                        exc.message,
                        _elapsed_ms(start),
                        retries=attempt,
                        raw_model_output=exc.details.get("raw_output"),
                    )
                    self.logger.log(
                        "WARNING",
                        "Intent attempt failed",
                        {"kind": exc.kind.value, "error": exc.message, "attempt": attempts},
                    )
                    continue

                if self.config.keep_history:
                    self.history.record(normalized, intent)
                return ParseResult.succeeded(
                    intent,
                    _elapsed_ms(start),
                    retries=attempt,
                    raw_model_output=raw if self.config.verbose else None,
                )

            assert last is not None
            last.processing_time = _elapsed_ms(start)
            return last

        except IntentError as exc:
            self.logger.log("WARNING", "Intent resolution failed", exc.to_response().to_dict())
            return ParseResult.failed(
                exc.kind,
                exc.message,
                _elapsed_ms(start),
                retries=max(attempts - 1, 0),
                raw_model_output=exc.details.get("raw_output"),
            )
        except Exception as exc:
            self.logger.log(
                "ERROR",
                "Unexpected error while resolving intent",
                ErrorResponse.from_exception(exc).to_dict(),
            )
            return ParseResult.failed(
                FailureKind.UNEXPECTED_ERROR,
                f"Unexpected error: {exc}",
                _elapsed_ms(start),
                retries=max(attempts - 1, 0),
            )

    async def _attempt(self, normalized: str, context: PromptContext) -> tuple[Intent, str]:
        """Run one model round trip and validate its answer."""
        prompt = build_intent_prompt(
            normalized,
            None if context.is_empty() else context,
            self.history.all() if self.config.keep_history else None,
            self.config.prompt,
        )
        self.logger.log("DEBUG", "Intent prompt", prompt)

        response = await self.ai_client.generate(prompt)
        if response.error is not None:
            raise ModelError(
                f"LLM error: {response.error}",
                details={"raw_output": response.content},
            )

        raw = response.content
        data = extract_json_from_text(raw) if raw else None
        if data is None:
            raise DecodeError(
                "Failed to parse intent: model output is not valid JSON",
                details={"raw_output": raw},
            )
        try:
            intent = Intent.from_dict(data)
        except DecodeError as exc:
            raise DecodeError(
                f"Failed to parse intent: {exc.message}",
                details={**exc.details, "raw_output": raw},
            ) from exc

        if intent.confidence is not None and intent.confidence < self.config.min_confidence:
            raise LowConfidenceError(
                f"Low confidence intent ({intent.confidence})",
                details={"confidence": intent.confidence, "raw_output": raw},
            )
        return intent, raw

    async def resolve_voice(
        self,
        voice_input: Union[str, Awaitable[str]],
        context: Optional[PromptContext] = None,
    ) -> ParseResult:
        """Resolve text captured by a voice front end.

        ``voice_input`` is either the transcript itself or an awaitable
        producing it; a failure while awaiting it is reported as a
        ``VOICE_ERROR`` result.
        """
        start = time.perf_counter()
        try:
            text = await voice_input if inspect.isawaitable(voice_input) else voice_input
        except Exception as exc:
            self.logger.log("WARNING", "Voice input failed", str(exc))
            return ParseResult.failed(
                FailureKind.VOICE_ERROR,
                f"Voice processing error: {exc}",
                _elapsed_ms(start),
            )
        return await self.resolve(text, context)

    def get_history(self) -> List[PromptHistoryItem]:
        """Return a copy of the conversation history, oldest first."""
        return self.history.all()

    def clear_history(self) -> None:
        self.history.clear()

    def set_provider(self, provider: Union[str, ProviderType], **options: Any) -> None:
        """Switch to another language model backend."""
        self.ai_client = AIClientFactory.from_config(
            self.config, provider=provider, logger=self.logger, **options
        )
        self.logger.log("INFO", "Intent provider changed", {"provider": self.ai_client.name})

    def update_default_context(
        self, context: Union[PromptContext, Dict[str, Any]]
    ) -> None:
        """Merge ``context`` into the default context used by future calls."""
        if isinstance(context, dict):
            context = PromptContext.from_dict(context)
        self.default_context = self.default_context.merged_with(context)
