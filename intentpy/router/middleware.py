"""Middleware factories for :class:`~intentpy.router.IntentRouter`.

A middleware receives the current intent and returns the intent to pass
on (possibly a modified copy) or ``None`` to reject it. Middleware may be
plain functions or coroutines.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Union

from ..logging import IntentLogger
from ..nlu.types import Intent

Middleware = Callable[[Intent], Union[Optional[Intent], Awaitable[Optional[Intent]]]]


def create_validation_middleware(
    valid_actions: Optional[Iterable[str]] = None,
    valid_targets: Optional[Iterable[str]] = None,
    logger: Optional[IntentLogger] = None,
) -> Middleware:
    """Reject intents whose action or target is outside the allowed sets.

    An empty or missing set disables that check. Intents without a target
    pass the target check.
    """
    actions = set(valid_actions or ())
    targets = set(valid_targets or ())

    def validate(intent: Intent) -> Optional[Intent]:
        if actions and intent.action not in actions:
            if logger:
                logger.log("WARNING", "Invalid action", {"action": intent.action, "valid": sorted(actions)})
            return None
        if targets and intent.target and intent.target not in targets:
            if logger:
                logger.log("WARNING", "Invalid target", {"target": intent.target, "valid": sorted(targets)})
            return None
        return intent

    return validate


def create_logging_middleware(logger: IntentLogger, level: str = "INFO") -> Middleware:
    def log_intent(intent: Intent) -> Intent:
        logger.log(level, "Processing intent", intent.to_dict())
        return intent

    return log_intent


def create_defaults_middleware(
    target: Optional[str] = None, params: Optional[Dict[str, Any]] = None
) -> Middleware:
    """Fill in a default target and default params; intent values win."""

    def apply_defaults(intent: Intent) -> Intent:
        return replace(
            intent,
            target=intent.target or target,
            params={**(params or {}), **intent.params},
        )

    return apply_defaults


def create_transform_middleware(transform: Callable[[Intent], Intent]) -> Middleware:
    return transform
