from __future__ import annotations

import inspect
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..core.errors import (
    ErrorResponse,
    ExecutorFailureError,
    FailureKind,
    IntentError,
    MiddlewareRejectedError,
    UnknownActionError,
)
from ..core.registry import ExecutorRegistry
from ..logging import IntentLogger
from ..nlu.types import Intent
from .middleware import Middleware
from .response import ExecutorResponse

MIDDLEWARE_REJECTION = "rejected by middleware"
DEFAULT_ERROR_MESSAGE = "Action execution failed"


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass
class RouterOptions:
    """Routing behaviour.

    Options passed to :meth:`IntentRouter.route` are layered over the
    router's own field by field; a field left as ``None`` keeps the
    router's value. A per-call ``middleware`` list replaces the router's
    chain for that call.
    """

    default_error_message: Optional[str] = None
    fallback_action: Optional[str] = None
    middleware: Optional[List[Middleware]] = None

    def merged_with(self, override: Optional["RouterOptions"]) -> "RouterOptions":
        if override is None:
            return self
        return RouterOptions(
            default_error_message=(
                override.default_error_message
                if override.default_error_message is not None
                else self.default_error_message
            ),
            fallback_action=(
                override.fallback_action
                if override.fallback_action is not None
                else self.fallback_action
            ),
            middleware=(
                override.middleware if override.middleware is not None else self.middleware
            ),
        )


class IntentRouter:
    """Dispatch resolved intents to registered executors.

    The router owns its :class:`ExecutorRegistry`. Routing never raises:
    rejections, unknown actions and executor failures all come back as an
    unsuccessful :class:`ExecutorResponse`.
    """

    def __init__(
        self,
        registry: Optional[ExecutorRegistry] = None,
        options: Optional[RouterOptions] = None,
        logger: Optional[IntentLogger] = None,
    ) -> None:
        self.registry = registry if registry is not None else ExecutorRegistry()
        self.options = options or RouterOptions()
        if self.options.middleware is None:
            self.options.middleware = []
        self.logger = logger or IntentLogger()

    def use(self, middleware: Middleware) -> "IntentRouter":
        """Append ``middleware`` to the chain; returns self for chaining."""
        self.options.middleware.append(middleware)
        return self

    async def route(
        self,
        intent: Intent,
        context: Optional[Dict[str, Any]] = None,
        options: Optional[RouterOptions] = None,
    ) -> ExecutorResponse:
        opts = self.options.merged_with(options)
        try:
            self.logger.log("DEBUG", "Routing intent", intent.to_dict())

            current = intent
            for middleware in opts.middleware or ():
                result = await _maybe_await(middleware(current))
                if result is None:
                    raise MiddlewareRejectedError(
                        MIDDLEWARE_REJECTION, details={"action": current.action}
                    )
                current = result

            executor = self.registry.get(current.action)
            if executor is None and opts.fallback_action:
                fallback = self.registry.get(opts.fallback_action)
                if fallback is not None:
                    response = await self._execute(fallback, current, context, opts)
                    if response.success:
                        response = replace(
                            response,
                            message=f"executed fallback action: {opts.fallback_action}",
                        )
                    return response

            if executor is None:
                raise UnknownActionError(
                    f"unknown action: {current.action}", details={"action": current.action}
                )

            return await self._execute(executor, current, context, opts)

        except IntentError as exc:
            level = "INFO" if exc.kind == FailureKind.MIDDLEWARE_REJECTED else "WARNING"
            self.logger.log(level, "Intent not routed", exc.to_response().to_dict())
            return ExecutorResponse.from_error(exc)
        except Exception as exc:
            self.logger.log("ERROR", "Router error", ErrorResponse.from_exception(exc).to_dict())
            return ExecutorResponse.failure(FailureKind.UNEXPECTED_ERROR, f"router error: {exc}")

    async def _execute(
        self,
        executor: Any,
        intent: Intent,
        context: Optional[Dict[str, Any]],
        opts: RouterOptions,
    ) -> ExecutorResponse:
        try:
            data = await _maybe_await(executor(intent, context))
        except Exception as exc:
            raise ExecutorFailureError(
                str(exc) or opts.default_error_message or DEFAULT_ERROR_MESSAGE,
                details={"action": intent.action, "exception_type": exc.__class__.__name__},
            ) from exc

        if isinstance(data, ExecutorResponse):
            return data
        self.logger.log("DEBUG", "Execution result", {"action": intent.action, "data": data})
        return ExecutorResponse(success=True, data=data)
