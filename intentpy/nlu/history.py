from __future__ import annotations

import time
from collections import deque
from typing import Deque, List

from ..prompt.types import PromptHistoryItem
from .types import Intent

DEFAULT_HISTORY_LIMIT = 10


class HistoryStore:
    """Bounded log of resolved inputs, oldest first.

    Appends are synchronous so that an append and its eviction happen
    without yielding to the event loop; entries therefore appear in the
    order resolutions complete.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be >= 1")
        self.limit = limit
        self._items: Deque[PromptHistoryItem] = deque(maxlen=limit)

    def append(self, item: PromptHistoryItem) -> None:
        self._items.append(item)

    def record(self, input: str, intent: Intent) -> PromptHistoryItem:
        """Append ``input`` and the intent it resolved to."""
        item = PromptHistoryItem(input=input, intent=intent, timestamp=time.time())
        self.append(item)
        return item

    def all(self) -> List[PromptHistoryItem]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
