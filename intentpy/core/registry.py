from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Generic, Optional, Set, TypeVar, Union

T = TypeVar("T")

# (intent, context) -> result, sync or async
ExecutorFunction = Callable[..., Union[Any, Awaitable[Any]]]


class BaseRegistry(Generic[T]):
    """Generic registry storing items by name."""

    def __init__(self, initial_map: Optional[Dict[str, T]] = None) -> None:
        self._items: Dict[str, T] = dict(initial_map or {})

    @property
    def items(self) -> Dict[str, T]:
        """Return the underlying mapping."""
        return self._items

    @property
    def keys(self) -> Set[str]:
        """Return the registry keys."""
        return set(self._items.keys())

    def get(self, name: str) -> Optional[T]:
        """Retrieve a registered item by name."""
        return self._items.get(name)

    def has(self, name: str) -> bool:
        """Check if the registry contains an item."""
        return name in self._items

    def add(self, name: str, item: T) -> None:
        """Add an item to the registry, replacing any existing entry."""
        self._items[name] = item

    def remove(self, name: str) -> bool:
        """Remove an item from the registry."""
        if name in self._items:
            del self._items[name]
            return True
        return False

    def clear(self) -> None:
        self._items.clear()


class ExecutorRegistry(BaseRegistry[ExecutorFunction]):
    """Registry mapping action names to executor callables."""

    @property
    def actions(self) -> Set[str]:
        return self.keys

    def register(self, action: str, executor: ExecutorFunction) -> None:
        if not action:
            raise ValueError("action name must be a non-empty string")
        self.add(action, executor)

    def unregister(self, action: str) -> bool:
        return self.remove(action)

    def reset(self, initial_map: Optional[Dict[str, ExecutorFunction]] = None) -> None:
        """Drop every registration, optionally reinstalling ``initial_map``."""
        self._items = dict(initial_map or {})

    def snapshot(self) -> Dict[str, ExecutorFunction]:
        """Return a copy of the current registrations."""
        return dict(self._items)
