"""Route resolved intents to application executors."""

from .response import ExecutorResponse
from .middleware import (
    Middleware,
    create_defaults_middleware,
    create_logging_middleware,
    create_transform_middleware,
    create_validation_middleware,
)
from .router import DEFAULT_ERROR_MESSAGE, IntentRouter, RouterOptions, MIDDLEWARE_REJECTION

__all__ = [
    "ExecutorResponse",
    "Middleware",
    "create_defaults_middleware",
    "create_logging_middleware",
    "create_transform_middleware",
    "create_validation_middleware",
    "IntentRouter",
    "RouterOptions",
    "MIDDLEWARE_REJECTION",
    "DEFAULT_ERROR_MESSAGE",
]
