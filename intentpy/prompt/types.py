from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..nlu.types import Intent


@dataclass
class PromptOptions:
    """Controls which optional sections the intent prompt carries."""

    include_context: bool = True
    include_history: bool = False
    history_limit: int = 3
    max_length: Optional[int] = None


@dataclass
class PromptContext:
    """Ambient application state injected into the prompt."""

    page: Optional[str] = None
    available_actions: Optional[List[str]] = None
    available_targets: Optional[List[str]] = None
    # Any application state that could help with intent understanding
    app_state: Optional[Dict[str, Any]] = None

    def merged_with(self, override: Optional["PromptContext"]) -> "PromptContext":
        """Return a shallow merge where set fields of ``override`` win."""
        if override is None:
            return PromptContext(
                page=self.page,
                available_actions=self.available_actions,
                available_targets=self.available_targets,
                app_state=self.app_state,
            )
        return PromptContext(
            page=override.page if override.page is not None else self.page,
            available_actions=(
                override.available_actions
                if override.available_actions is not None
                else self.available_actions
            ),
            available_targets=(
                override.available_targets
                if override.available_targets is not None
                else self.available_targets
            ),
            app_state=override.app_state if override.app_state is not None else self.app_state,
        )

    def is_empty(self) -> bool:
        return (
            self.page is None
            and self.available_actions is None
            and self.available_targets is None
            and self.app_state is None
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptContext":
        return cls(
            page=data.get("page"),
            available_actions=data.get("available_actions"),
            available_targets=data.get("available_targets"),
            app_state=data.get("app_state"),
        )


@dataclass
class PromptHistoryItem:
    """A previously resolved input and the intent it produced.

    ``intent`` is an :class:`~intentpy.nlu.types.Intent`; a plain dict in
    the same wire shape is also accepted when rendering prompts.
    """

    input: str
    intent: Union["Intent", Dict[str, Any]]
    timestamp: float = field(default=0.0)
