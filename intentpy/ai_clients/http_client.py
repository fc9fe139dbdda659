"""Shared plumbing for providers reached over HTTPS with ``httpx``."""

from __future__ import annotations

import os
from abc import abstractmethod
from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx

from .base import BaseAIClient
from .types import GenerateOptions, LLMResponse, TokenUsage
from ..core.errors import wrap_transport_error

if TYPE_CHECKING:
    from ..logging import IntentLogger


class HTTPAIClient(BaseAIClient):
    """Base for clients that POST a JSON prompt to a completion endpoint.

    Subclasses describe the wire format; this class owns the transport and
    folds every expected failure into :meth:`LLMResponse.failure`.
    """

    default_endpoint: str = ""
    default_model: str = ""
    api_key_env: str = ""
    failure_message: str = "API request failed"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 1024,
        endpoint: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: Optional["IntentLogger"] = None,
    ) -> None:
        self.options = GenerateOptions(
            model=model or self.default_model,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=api_key or os.environ.get(self.api_key_env),
            endpoint=endpoint or self.default_endpoint,
        )
        self.timeout = timeout
        self.transport = transport
        self.logger = logger

    @abstractmethod
    def build_headers(self, options: GenerateOptions) -> Dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def build_payload(self, prompt: str, options: GenerateOptions) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def parse_content(self, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    @abstractmethod
    def parse_usage(self, data: Dict[str, Any]) -> Optional[TokenUsage]:
        raise NotImplementedError

    def _error_message(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"{self.failure_message} (HTTP {response.status_code})"
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return f"{self.failure_message} (HTTP {response.status_code})"

    async def generate(
        self, prompt: str, options: Optional[GenerateOptions] = None
    ) -> LLMResponse:
        merged = self.options.merged_with(options)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    merged.endpoint,
                    headers=self.build_headers(merged),
                    json=self.build_payload(prompt, merged),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            error = wrap_transport_error(exc, f"{self.name} request rejected")
            message = self._error_message(exc.response)
            if self.logger:
                self.logger.log(
                    "WARNING",
                    "Model request rejected",
                    {"provider": self.name, **error.details, "message": message},
                )
            return LLMResponse.failure(message)
        except httpx.HTTPError as exc:
            error = wrap_transport_error(exc, f"{self.name} request failed")
            if self.logger:
                self.logger.log("WARNING", "Model transport failure", error.to_response().to_dict())
            return LLMResponse.failure(error.message)

        try:
            data = response.json()
            content = self.parse_content(data)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            return LLMResponse.failure(f"{self.name} returned an unexpected body: {exc}")

        return LLMResponse(content=content, usage=self._usage(data), raw=data)

    def _usage(self, data: Any) -> Optional[TokenUsage]:
        # A malformed usage block is dropped.
        try:
            return self.parse_usage(data)
        except (ValueError, TypeError, AttributeError) as exc:
            if self.logger:
                self.logger.log(
                    "DEBUG", "Ignoring malformed usage block", {"provider": self.name, "error": str(exc)}
                )
            return None
