"""Resolve a command and route the resulting intent in one call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Dict, Optional, Union

from .core.config import IntentConfig
from .core.errors import ErrorResponse, FailureKind
from .executors import create_default_registry
from .logging import IntentLogger
from .nlu import Intent, IntentResolver, ParseResult
from .prompt import PromptContext
from .router import ExecutorResponse, IntentRouter


@dataclass
class PipelineResult:
    success: bool
    intent: Optional[Intent] = None
    execution: Optional[ExecutorResponse] = None
    error: Optional[str] = None
    error_kind: Optional[FailureKind] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.intent is not None:
            result["intent"] = self.intent.to_dict()
        if self.execution is not None:
            result["execution"] = self.execution.to_dict()
        if self.error is not None:
            result["error"] = self.error
        if self.error_kind is not None:
            result["error_kind"] = self.error_kind.value
        return result


class IntentPipeline:
    """Facade tying an :class:`IntentResolver` to an :class:`IntentRouter`.

    When no router is supplied one is built over the stock executors.
    """

    def __init__(
        self,
        config: Optional[IntentConfig] = None,
        resolver: Optional[IntentResolver] = None,
        router: Optional[IntentRouter] = None,
        logger: Optional[IntentLogger] = None,
    ) -> None:
        self.config = config or IntentConfig()
        self.logger = logger or IntentLogger(verbose=self.config.verbose)
        self.resolver = resolver or IntentResolver(self.config, logger=self.logger)
        self.router = router or IntentRouter(create_default_registry(), logger=self.logger)

    async def process(
        self,
        input: str,
        nlu_context: Optional[PromptContext] = None,
        executor_context: Optional[Dict[str, Any]] = None,
    ) -> PipelineResult:
        try:
            parsed = await self.resolver.resolve(input, nlu_context)
            return await self._route(parsed, executor_context)
        except Exception as exc:
            return self._unexpected(exc)

    async def process_voice(
        self,
        voice_input: Union[str, Awaitable[str]],
        nlu_context: Optional[PromptContext] = None,
        executor_context: Optional[Dict[str, Any]] = None,
    ) -> PipelineResult:
        try:
            parsed = await self.resolver.resolve_voice(voice_input, nlu_context)
            return await self._route(parsed, executor_context)
        except Exception as exc:
            return self._unexpected(exc)

    async def _route(
        self, parsed: ParseResult, executor_context: Optional[Dict[str, Any]]
    ) -> PipelineResult:
        if not parsed.success or parsed.intent is None:
            return PipelineResult(
                success=False,
                error=parsed.error or "Failed to parse intent",
                error_kind=parsed.error_kind,
            )

        execution = await self.router.route(parsed.intent, executor_context)
        return PipelineResult(
            success=execution.success,
            intent=parsed.intent,
            execution=execution,
            error=None if execution.success else execution.message,
            error_kind=execution.error_kind,
        )

    def _unexpected(self, exc: Exception) -> PipelineResult:
        self.logger.log("ERROR", "Pipeline error", ErrorResponse.from_exception(exc).to_dict())
        return PipelineResult(
            success=False,
            error=str(exc) or "Unknown error",
            error_kind=FailureKind.UNEXPECTED_ERROR,
        )
