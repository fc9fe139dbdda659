from __future__ import annotations

from typing import Any, Dict, Optional

from .http_client import HTTPAIClient
from .types import GenerateOptions, TokenUsage

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicClient(HTTPAIClient):
    """AI client that delegates requests to Anthropic's messages API."""

    name = "anthropic"
    default_endpoint = "https://api.anthropic.com/v1/messages"
    default_model = "claude-3-haiku-20240307"
    api_key_env = "ANTHROPIC_API_KEY"
    failure_message = "Anthropic API request failed"

    def build_headers(self, options: GenerateOptions) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": options.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def build_payload(self, prompt: str, options: GenerateOptions) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": options.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
        }
        if options.stop_sequences:
            payload["stop_sequences"] = options.stop_sequences
        return payload

    def parse_content(self, data: Dict[str, Any]) -> str:
        # A non-object block raises AttributeError, reported as an unexpected body.
        return "".join(
            block.get("text", "")
            for block in data["content"]
            if block.get("type", "text") == "text"
        )

    def parse_usage(self, data: Dict[str, Any]) -> Optional[TokenUsage]:
        usage = data.get("usage")
        if not isinstance(usage, dict):
            return None
        prompt_tokens = usage.get("input_tokens", 0)
        completion_tokens = usage.get("output_tokens", 0)
        return TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )
