"""Data types produced by intent resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.errors import DecodeError, FailureKind

CORRECTION_SUGGESTION = "Can you rephrase or clarify your command?"


def clamp_confidence(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass
class Intent:
    """Structured representation of a user's requested action."""

    action: str
    target: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    confidence: Optional[float] = None

    def __post_init__(self) -> None:
        if self.confidence is not None:
            self.confidence = clamp_confidence(self.confidence)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire shape, omitting unset optional fields."""
        result: Dict[str, Any] = {"action": self.action}
        if self.target is not None:
            result["target"] = self.target
        if self.params:
            result["params"] = dict(self.params)
        if self.confidence is not None:
            result["confidence"] = self.confidence
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Intent":
        """Validate decoded model output and build an Intent from it.

        Raises:
            DecodeError: if ``data`` is not an object with a non-empty
                string ``action`` or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise DecodeError(
                "Intent must be a JSON object",
                details={"received_type": type(data).__name__},
            )
        action = data.get("action")
        if not isinstance(action, str) or not action.strip():
            raise DecodeError('Missing required "action" field in intent')

        target = data.get("target")
        if target is not None and not isinstance(target, str):
            target = str(target)

        params = data.get("params")
        if params is None:
            params = {}
        elif not isinstance(params, dict):
            raise DecodeError('"params" must be an object', details={"params": params})

        confidence = data.get("confidence")
        if confidence is not None:
            if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
                raise DecodeError(
                    '"confidence" must be a number', details={"confidence": confidence}
                )
            try:
                confidence = float(confidence)
            except OverflowError:
                raise DecodeError(
                    '"confidence" is out of range', details={"confidence": str(confidence)}
                ) from None
            if not math.isfinite(confidence):
                raise DecodeError(
                    '"confidence" must be a finite number',
                    details={"confidence": str(confidence)},
                )

        return cls(action=action.strip(), target=target, params=params, confidence=confidence)


@dataclass
class ParseResult:
    """Outcome of one resolution call.

    Exactly one of ``intent`` (on success) or ``error`` (on failure) is set.
    ``processing_time`` is in milliseconds and covers every attempt.
    """

    success: bool
    intent: Optional[Intent] = None
    error: Optional[str] = None
    error_kind: Optional[FailureKind] = None
    raw_model_output: Optional[str] = None
    processing_time: float = 0.0
    retries: int = 0
    correction_suggestion: Optional[str] = None

    @classmethod
    def succeeded(
        cls,
        intent: Intent,
        processing_time: float,
        retries: int,
        raw_model_output: Optional[str] = None,
    ) -> "ParseResult":
        return cls(
            success=True,
            intent=intent,
            raw_model_output=raw_model_output,
            processing_time=processing_time,
            retries=retries,
        )

    @classmethod
    def failed(
        cls,
        kind: FailureKind,
        error: str,
        processing_time: float,
        retries: int = 0,
        raw_model_output: Optional[str] = None,
        correction_suggestion: Optional[str] = None,
    ) -> "ParseResult":
        return cls(
            success=False,
            error=error,
            error_kind=kind,
            raw_model_output=raw_model_output,
            processing_time=processing_time,
            retries=retries,
            correction_suggestion=correction_suggestion,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "success": self.success,
            "processing_time": self.processing_time,
            "retries": self.retries,
        }
        if self.intent is not None:
            result["intent"] = self.intent.to_dict()
        if self.error is not None:
            result["error"] = self.error
        if self.error_kind is not None:
            result["error_kind"] = self.error_kind.value
        if self.raw_model_output is not None:
            result["raw_model_output"] = self.raw_model_output
        if self.correction_suggestion is not None:
            result["correction_suggestion"] = self.correction_suggestion
        return result
