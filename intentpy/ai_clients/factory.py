from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING, Union

from .base import BaseAIClient
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient
from .mock_client import MockAIClient
from ..core.errors import ConfigurationError

if TYPE_CHECKING:
    from ..core.config import IntentConfig
    from ..logging import IntentLogger

ClientBuilder = Callable[..., BaseAIClient]


class ProviderType(str, Enum):
    """Providers shipped with intentpy."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MOCK = "mock"


_BUILTIN: Dict[ProviderType, ClientBuilder] = {
    ProviderType.OPENAI: OpenAIClient,
    ProviderType.ANTHROPIC: AnthropicClient,
    ProviderType.MOCK: MockAIClient,
}
_BUILTIN_NAMES = frozenset(p.value for p in ProviderType)


class AIClientFactory:
    """Factory to create AI clients based on provider name.

    Built-in providers are the members of :class:`ProviderType`. Additional
    providers are added at startup with :meth:`register`.
    """

    _extra: Dict[str, ClientBuilder] = {}

    @classmethod
    def register(cls, name: str, builder: ClientBuilder) -> None:
        key = name.lower()
        if key in _BUILTIN_NAMES:
            raise ConfigurationError(
                f"Cannot override built-in AI provider: {name}",
                details={"provider": name},
            )
        cls._extra[key] = builder

    @classmethod
    def unregister(cls, name: str) -> bool:
        return cls._extra.pop(name.lower(), None) is not None

    @classmethod
    def providers(cls) -> list[str]:
        return [p.value for p in ProviderType] + sorted(cls._extra)

    @classmethod
    def create(cls, provider: Union[str, ProviderType], **options: Any) -> BaseAIClient:
        key = provider.value if isinstance(provider, ProviderType) else provider.lower()
        if key in _BUILTIN_NAMES:
            builder = _BUILTIN[ProviderType(key)]
        elif key in cls._extra:
            builder = cls._extra[key]
        else:
            raise ConfigurationError(
                f"Unsupported AI provider: {provider}",
                details={"provider": str(provider), "available": cls.providers()},
            )
        if builder is MockAIClient:
            # Network options have no meaning for the stub.
            options = {k: v for k, v in options.items() if k in {"rules", "latency"}}
        return builder(**options)

    @classmethod
    def from_config(
        cls,
        config: "IntentConfig",
        provider: Union[str, ProviderType, None] = None,
        logger: Optional["IntentLogger"] = None,
        **overrides: Any,
    ) -> BaseAIClient:
        """Create the client described by ``config``.

        ``provider`` switches to another backend while keeping the rest of
        the configuration; ``overrides`` replace individual options.
        """
        name = provider if provider is not None else config.ai_provider
        key_source = config
        if provider is not None and not config.api_key:
            key_source = replace(config, ai_provider=str(getattr(name, "value", name)))
        options: Dict[str, Any] = {
            "api_key": key_source.resolved_api_key(),
            "model": config.model,
            "temperature": config.temperature,
            "max_tokens": config.max_tokens,
            "endpoint": config.endpoint,
            "timeout": config.request_timeout,
            "logger": logger,
        }
        options.update(overrides)
        return cls.create(name, **{k: v for k, v in options.items() if v is not None})
