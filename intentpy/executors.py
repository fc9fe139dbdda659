"""Stock executors for common UI commands.

These describe what an application would do for each action and return a
summary of it. Real applications register their own executors on top of
(or instead of) this set.
"""

from __future__ import annotations

import inspect
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from .core.registry import ExecutorFunction, ExecutorRegistry
from .nlu.types import Intent


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def navigate_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    page = intent.target or intent.params.get("page") or "home"
    return {"destination": page, "success": True}


def filter_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"target": intent.target or "data", "filters": dict(intent.params), "success": True}


def sort_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "target": intent.target or "data",
        "sort_field": intent.params.get("field", "default"),
        "sort_direction": intent.params.get("direction", "asc"),
        "success": True,
    }


def export_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "target": intent.target or "current",
        "format": intent.params.get("format", "pdf"),
        "timestamp": _now(),
        "success": True,
    }


def search_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    query = intent.params.get("query") or intent.params.get("term") or ""
    return {
        "query": query,
        "success": bool(query),
        "message": "Search initiated" if query else "No search query provided",
    }


def submit_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "form": intent.target or "form",
        "data": dict(intent.params),
        "timestamp": _now(),
        "success": True,
    }


def greet_executor(intent: Intent, context: Optional[Dict[str, Any]] = None) -> str:
    return f"Hello, {intent.params.get('name') or 'world'}!"


def default_executor_map() -> Dict[str, ExecutorFunction]:
    """Build the mapping of action names to stock executors."""
    return {
        "navigate": navigate_executor,
        "filter": filter_executor,
        "sort": sort_executor,
        "export": export_executor,
        "search": search_executor,
        "submit": submit_executor,
        "greet": greet_executor,
        # Aliases kept for older front ends
        "sayHello": greet_executor,
        "goToPage": navigate_executor,
        "open": navigate_executor,
        "show": filter_executor,
    }


def create_default_registry() -> ExecutorRegistry:
    return ExecutorRegistry(default_executor_map())


async def execute_chain(
    intents: Sequence[Intent],
    registry: ExecutorRegistry,
    context: Optional[Dict[str, Any]] = None,
) -> List[Any]:
    """Run ``intents`` in order, one result per intent.

    Intents without a registered executor produce a failure entry instead
    of stopping the chain. Executor exceptions propagate.
    """
    results: List[Any] = []
    for intent in intents:
        executor = registry.get(intent.action)
        if executor is None:
            results.append(
                {"success": False, "error": f"No executor found for action: {intent.action}"}
            )
            continue
        result = executor(intent, context)
        if inspect.isawaitable(result):
            result = await result
        results.append(result)
    return results
