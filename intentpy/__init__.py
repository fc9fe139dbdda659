"""Natural-language command to intent resolution and routing."""

from .core import (
    ConfigurationError,
    ExecutorRegistry,
    FailureKind,
    IntentConfig,
    IntentError,
)
from .logging import IntentLogger
from .ai_clients import (
    AIClientFactory,
    AnthropicClient,
    BaseAIClient,
    GenerateOptions,
    LLMResponse,
    MockAIClient,
    OpenAIClient,
    ProviderType,
    TokenUsage,
)
from .prompt import PromptContext, PromptHistoryItem, PromptOptions, build_intent_prompt
from .nlu import (
    HistoryStore,
    Intent,
    IntentResolver,
    ParseResult,
    detect_language,
    normalize_input,
)
from .router import ExecutorResponse, IntentRouter, RouterOptions
from .executors import create_default_registry, execute_chain
from .pipeline import IntentPipeline, PipelineResult

__all__ = [
    "ConfigurationError",
    "ExecutorRegistry",
    "FailureKind",
    "IntentConfig",
    "IntentError",
    "IntentLogger",
    "AIClientFactory",
    "AnthropicClient",
    "BaseAIClient",
    "GenerateOptions",
    "LLMResponse",
    "MockAIClient",
    "OpenAIClient",
    "ProviderType",
    "TokenUsage",
    "PromptContext",
    "PromptHistoryItem",
    "PromptOptions",
    "build_intent_prompt",
    "HistoryStore",
    "Intent",
    "IntentResolver",
    "ParseResult",
    "detect_language",
    "normalize_input",
    "ExecutorResponse",
    "IntentRouter",
    "RouterOptions",
    "create_default_registry",
    "execute_chain",
    "IntentPipeline",
    "PipelineResult",
]
