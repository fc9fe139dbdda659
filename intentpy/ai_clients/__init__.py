"""AI client implementations and factory."""

from .base import BaseAIClient
from .types import GenerateOptions, LLMResponse, TokenUsage
from .http_client import HTTPAIClient
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient
from .mock_client import MockAIClient
from .factory import AIClientFactory, ProviderType

__all__ = [
    "BaseAIClient",
    "GenerateOptions",
    "LLMResponse",
    "TokenUsage",
    "HTTPAIClient",
    "OpenAIClient",
    "AnthropicClient",
    "MockAIClient",
    "AIClientFactory",
    "ProviderType",
]
