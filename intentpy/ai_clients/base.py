from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .types import GenerateOptions, LLMResponse


class BaseAIClient(ABC):
    """Abstract base class defining the interface for text-completion models.

    Implementations must not raise for expected failures such as HTTP
    errors or network problems; those are reported through
    :attr:`LLMResponse.error` with empty content.
    """

    name: str = "base"

    @abstractmethod
    async def generate(
        self, prompt: str, options: Optional[GenerateOptions] = None
    ) -> LLMResponse:
        """Complete ``prompt`` and return the model's text."""
        raise NotImplementedError
