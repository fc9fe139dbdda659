from __future__ import annotations

import asyncio
import json
import re
from typing import Any, Dict, List, Optional, Pattern, Tuple

from .base import BaseAIClient
from .types import GenerateOptions, LLMResponse, TokenUsage

_USER_INPUT = re.compile(r'^User input: "(.*)"$', re.MULTILINE)


def _rule(pattern: str, payload: Dict[str, Any]) -> Tuple[Pattern[str], str]:
    return re.compile(pattern, re.IGNORECASE), json.dumps(payload)


# Evaluated in order, first match wins.
DEFAULT_RULES: List[Tuple[Pattern[str], str]] = [
    _rule(
        r"show.*sales.*last month",
        {"action": "filter", "target": "sales", "params": {"dateRange": "last_month"}, "confidence": 0.95},
    ),
    _rule(r"\b(navigate|go|open|show)\b.*\bdashboard\b", {"action": "navigate", "target": "dashboard", "confidence": 0.95}),
    _rule(r"\b(navigate|go|open|show)\b.*\bsettings\b", {"action": "navigate", "target": "settings", "confidence": 0.95}),
    _rule(r"\b(navigate|go|open|show)\b.*\bprofile\b", {"action": "navigate", "target": "profile", "confidence": 0.95}),
    _rule(r"export.*pdf", {"action": "export", "target": "current", "params": {"format": "pdf"}, "confidence": 0.9}),
    _rule(r"export.*csv", {"action": "export", "target": "current", "params": {"format": "csv"}, "confidence": 0.9}),
    _rule(
        r"filter.*region.*europe",
        {"action": "filter", "target": "data", "params": {"region": "europe"}, "confidence": 0.92},
    ),
    _rule(r"sort.*by.*date", {"action": "sort", "target": "data", "params": {"field": "date"}, "confidence": 0.88}),
    _rule(r"\b(hello|hi|hey)\b", {"action": "greet", "confidence": 0.8}),
]


class MockAIClient(BaseAIClient):
    """Deterministic client that answers from regex rules without network calls.

    The user input is read back out of the ``User input: "..."`` line of the
    prompt so that the instructions around it cannot trigger a rule. Inputs
    matching no rule get a low-confidence ``unknown`` intent.
    """

    name = "mock"

    def __init__(
        self,
        rules: Optional[List[Tuple[Pattern[str], str]]] = None,
        latency: float = 0.0,
        options: Optional[GenerateOptions] = None,
    ) -> None:
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        self.latency = latency
        self.options = options or GenerateOptions()
        self.call_count = 0

    def add_rule(self, pattern: str, payload: Dict[str, Any]) -> None:
        """Append a rule; it is tried after every existing one."""
        self.rules.append(_rule(pattern, payload))

    @staticmethod
    def extract_input(prompt: str) -> str:
        match = _USER_INPUT.search(prompt)
        return match.group(1) if match else prompt

    async def generate(
        self, prompt: str, options: Optional[GenerateOptions] = None
    ) -> LLMResponse:
        self.call_count += 1
        if self.latency:
            await asyncio.sleep(self.latency)

        text = self.extract_input(prompt)
        prompt_tokens = len(prompt.split(" "))

        for pattern, response in self.rules:
            if pattern.search(text):
                return LLMResponse(
                    content=response,
                    usage=TokenUsage(
                        prompt_tokens=prompt_tokens,
                        completion_tokens=len(response),
                        total_tokens=prompt_tokens + len(response),
                    ),
                )

        fallback = json.dumps(
            {"action": "unknown", "params": {"rawInput": text}, "confidence": 0.4}
        )
        return LLMResponse(
            content=fallback,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=20,
                total_tokens=prompt_tokens + 20,
            ),
        )
