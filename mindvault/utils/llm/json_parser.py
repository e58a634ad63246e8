"""JSON parsing for model replies.

Models are asked for bare JSON but often wrap it in a markdown code block
(```json ... ```). Fences are stripped before a strict parse; nothing else
is repaired.
"""

import json
import re
from typing import Any, Optional

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove ``` and ```json markers and surrounding whitespace."""
    return _FENCE_RE.sub("", text).strip()


def parse_json_response(text: str) -> Optional[dict[str, Any]]:
    """Parse a model reply as a JSON object.

    Args:
        text: Raw reply text, optionally fenced.

    Returns:
        Parsed dict, or None if the reply is not a JSON object.
    """
    if not text or not text.strip():
        return None
    try:
        result = json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        return None
    return result if isinstance(result, dict) else None


def extract_message_content(payload: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` from a chat-completion payload."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
