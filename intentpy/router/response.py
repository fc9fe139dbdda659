"""Uniform response returned by the intent router."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.errors import FailureKind, IntentError


@dataclass
class ExecutorResponse:
    """Result of routing an intent to an executor.

    Attributes:
        success: Whether the executor ran and succeeded
        data: Value returned by the executor (optional)
        message: Human-readable note or error message (optional)
        error_kind: Failure classification when ``success`` is False
    """

    success: bool
    data: Any = None
    message: Optional[str] = None
    error_kind: Optional[FailureKind] = None

    @classmethod
    def failure(cls, kind: FailureKind, message: str) -> "ExecutorResponse":
        return cls(success=False, message=message, error_kind=kind)

    @classmethod
    def from_error(cls, error: IntentError) -> "ExecutorResponse":
        response = error.to_response()
        return cls.failure(response.kind, response.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.message is not None:
            result["message"] = self.message
        if self.error_kind is not None:
            result["error_kind"] = self.error_kind.value
        return result
