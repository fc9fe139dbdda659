import json
import re
from typing import Any, Optional

from .retry import RetryPolicy

__all__ = ["extract_json_from_text", "RetryPolicy"]


def extract_json_from_text(text: str) -> Optional[Any]:
    """Extract a JSON value from a text string.

    The text may include a fenced code block such as ````json ...```` or
    prose around a single object. Returns the parsed value on success or
    ``None`` on failure.
    """

    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
        cleaned = cleaned.strip()
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3].strip()

    try:
        return json.loads(cleaned)
    except ValueError:
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(0))
            except ValueError:
                return None
    return None
