"""Core configuration, registry and error types."""

from .config import IntentConfig
from .registry import BaseRegistry, ExecutorRegistry, ExecutorFunction
from .errors import (
    ConfigurationError,
    DecodeError,
    ErrorResponse,
    ExecutorFailureError,
    FailureKind,
    IntentError,
    LowConfidenceError,
    MiddlewareRejectedError,
    ModelError,
    RETRYABLE_KINDS,
    SensitiveContentError,
    UnknownActionError,
    VoiceInputError,
    wrap_transport_error,
)

__all__ = [
    "IntentConfig",
    "BaseRegistry",
    "ExecutorRegistry",
    "ExecutorFunction",
    "ConfigurationError",
    "DecodeError",
    "ErrorResponse",
    "ExecutorFailureError",
    "FailureKind",
    "IntentError",
    "LowConfidenceError",
    "MiddlewareRejectedError",
    "ModelError",
    "RETRYABLE_KINDS",
    "SensitiveContentError",
    "UnknownActionError",
    "VoiceInputError",
    "wrap_transport_error",
]
