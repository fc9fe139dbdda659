"""Prompt template used to ask a language model for a structured intent."""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

from .types import PromptContext, PromptHistoryItem, PromptOptions

INTENT_SCHEMA = """{
  "action": string,               // The primary action the user wants to perform
  "target": string,               // Optional: What the action applies to
  "params": object,               // Optional: Any parameters needed
  "confidence": number            // Optional: Confidence score between 0 and 1
}"""

SYSTEM_PREAMBLE = (
    "You are an intent parser for an interactive application. Your task is to convert "
    "natural language inputs from users\ninto structured intent objects. The intent "
    "should be returned as valid JSON with the following structure:"
)

CLOSING_INSTRUCTION = (
    "Return ONLY the JSON intent object and nothing else. "
    "Do not include explanations or additional text."
)


def _context_lines(context: PromptContext) -> List[str]:
    lines = []
    if context.page:
        lines.append(f"- Current page: {context.page}")
    if context.available_actions:
        lines.append(f"- Available actions: {', '.join(context.available_actions)}")
    if context.available_targets:
        lines.append(f"- Available targets: {', '.join(context.available_targets)}")
    if context.app_state:
        lines.append(f"- App state: {json.dumps(context.app_state, indent=2, default=str)}")
    return lines


def _intent_json(intent) -> str:
    return json.dumps(intent.to_dict() if hasattr(intent, "to_dict") else intent)


def _history_lines(history: Sequence[PromptHistoryItem], limit: int) -> List[str]:
    if limit <= 0:
        return []
    return [
        f'- Input: "{item.input}" → Intent: {_intent_json(item.intent)}'
        for item in list(history)[-limit:]
    ]


def _assemble(input: str, context_lines: List[str], history_lines: List[str]) -> str:
    sections = [SYSTEM_PREAMBLE, "", INTENT_SCHEMA, "", f'User input: "{input}"']
    if context_lines:
        sections += ["", "Current context:", *context_lines]
    if history_lines:
        sections += ["", "Recent history:", *history_lines]
    sections += ["", CLOSING_INSTRUCTION]
    return "\n".join(sections) + "\n"


def build_intent_prompt(
    input: str,
    context: Optional[PromptContext] = None,
    history: Optional[Sequence[PromptHistoryItem]] = None,
    options: Optional[PromptOptions] = None,
) -> str:
    """Build the instruction sent to the language model.

    Context fields are only rendered when present. History is opt-in and
    rendered most-recent-last. When ``options.max_length`` is set, history
    lines are dropped oldest-first until the prompt fits; the schema, the
    user input and the closing instruction are always kept.
    """
    options = options or PromptOptions()

    context_lines: List[str] = []
    if options.include_context and context is not None:
        context_lines = _context_lines(context)

    history_lines: List[str] = []
    if options.include_history and history:
        history_lines = _history_lines(history, options.history_limit)

    prompt = _assemble(input, context_lines, history_lines)
    if options.max_length is not None:
        while history_lines and len(prompt) > options.max_length:
            history_lines = history_lines[1:]
            prompt = _assemble(input, context_lines, history_lines)
    return prompt
