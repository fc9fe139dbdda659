"""Standardized error handling for intent resolution and routing.

This module provides the failure taxonomy shared by the resolver, the
router and the language model clients, plus a consistent response format
for reporting those failures to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class FailureKind(Enum):
    """Kinds of failure surfaced by resolution and routing."""

    SENSITIVE_CONTENT = "sensitive_content"
    MODEL_ERROR = "model_error"
    DECODE_ERROR = "decode_error"
    LOW_CONFIDENCE = "low_confidence"
    MIDDLEWARE_REJECTED = "middleware_rejected"
    UNKNOWN_ACTION = "unknown_action"
    EXECUTOR_FAILURE = "executor_failure"
    VOICE_ERROR = "voice_error"
    UNEXPECTED_ERROR = "unexpected_error"


# Failures the resolution loop retries while attempts remain.
RETRYABLE_KINDS = frozenset({FailureKind.MODEL_ERROR, FailureKind.DECODE_ERROR})


class IntentError(Exception):
    """Base exception for all intent-related errors.

    All custom exceptions should inherit from this class so that the
    resolver and router can convert them into structured results.
    """

    kind: FailureKind = FailureKind.UNEXPECTED_ERROR

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def error_type(self) -> str:
        """Return the error type name."""
        return self.__class__.__name__

    def to_response(self) -> "ErrorResponse":
        """Convert exception to standardized ErrorResponse."""
        return ErrorResponse(
            error_type=self.error_type,
            kind=self.kind,
            message=self.message,
            details=self.details,
        )


class SensitiveContentError(IntentError):
    """Raised when input is rejected before any model call."""

    kind = FailureKind.SENSITIVE_CONTENT


class ModelError(IntentError):
    """Raised when the language model backend fails.

    Covers transport failures, authentication problems, rate limiting and
    non-2xx responses from a provider.
    """

    kind = FailureKind.MODEL_ERROR


class DecodeError(IntentError):
    """Raised when model output is not a valid intent structure."""

    kind = FailureKind.DECODE_ERROR


class LowConfidenceError(IntentError):
    """Raised when a decoded intent falls below the confidence floor."""

    kind = FailureKind.LOW_CONFIDENCE


class MiddlewareRejectedError(IntentError):
    kind = FailureKind.MIDDLEWARE_REJECTED


class UnknownActionError(IntentError):
    kind = FailureKind.UNKNOWN_ACTION


class ExecutorFailureError(IntentError):
    """Raised when a registered executor fails while handling an intent."""

    kind = FailureKind.EXECUTOR_FAILURE


class VoiceInputError(IntentError):
    kind = FailureKind.VOICE_ERROR


class ConfigurationError(IntentError):
    """Raised when configuration is missing or invalid.

    This includes unsupported provider names and invalid option values.
    """


@dataclass
class ErrorResponse:
    """Standardized error response format.

    Attributes:
        error_type: The type/class of error that occurred
        kind: The failure kind from the shared taxonomy
        message: Human-readable error message
        details: Additional context about the error (optional)
    """

    error_type: str
    kind: FailureKind
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert error response to dictionary format."""
        result = {
            "error_type": self.error_type,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    @classmethod
    def from_exception(cls, exc: Exception) -> "ErrorResponse":
        """Create ErrorResponse from any exception."""
        if isinstance(exc, IntentError):
            return exc.to_response()

        return cls(
            error_type=exc.__class__.__name__,
            kind=FailureKind.UNEXPECTED_ERROR,
            message=str(exc),
            details={"original_exception": exc.__class__.__name__},
        )


def wrap_transport_error(exc: Exception, context: str = "") -> ModelError:
    """Wrap an HTTP client exception into a :class:`ModelError`.

    Args:
        exc: The exception raised while talking to a provider
        context: Additional context about where the error occurred

    Returns:
        A ModelError whose details describe the transport failure
    """
    import httpx

    message = f"{context}: {exc}" if context else str(exc)

    if isinstance(exc, httpx.TimeoutException):
        return ModelError(message, details={"exception_type": "TimeoutException"})

    if isinstance(exc, httpx.ConnectError):
        return ModelError(message, details={"exception_type": "ConnectError"})

    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        if status_code in (401, 403):
            reason = "unauthorized"
        elif status_code == 429:
            reason = "rate_limited"
        elif status_code >= 500:
            reason = "server_error"
        else:
            reason = "bad_request"
        return ModelError(message, details={"status_code": status_code, "reason": reason})

    return ModelError(message, details={"original_type": exc.__class__.__name__})
