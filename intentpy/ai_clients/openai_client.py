from __future__ import annotations

from typing import Any, Dict, Optional

from .http_client import HTTPAIClient
from .types import GenerateOptions, TokenUsage


class OpenAIClient(HTTPAIClient):
    """AI client that delegates requests to OpenAI's chat completions API."""

    name = "openai"
    default_endpoint = "https://api.openai.com/v1/chat/completions"
    default_model = "gpt-4o"
    api_key_env = "OPENAI_API_KEY"
    failure_message = "OpenAI API request failed"

    def build_headers(self, options: GenerateOptions) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {options.api_key or ''}",
        }

    def build_payload(self, prompt: str, options: GenerateOptions) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": options.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
        }
        if options.stop_sequences:
            payload["stop"] = options.stop_sequences
        return payload

    def parse_content(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"] or ""

    def parse_usage(self, data: Dict[str, Any]) -> Optional[TokenUsage]:
        usage = data.get("usage")
        if not isinstance(usage, dict):
            return None
        return TokenUsage(
            prompt_tokens=usage.get("prompt_tokens", 0),
            completion_tokens=usage.get("completion_tokens", 0),
            total_tokens=usage.get("total_tokens", 0),
        )
