"""
Rough token estimates for the conversation history.

Not a tokenizer: about four characters per token, plus a small per-message
overhead for role information.
"""

import math
from typing import Any

CHARS_PER_TOKEN = 4
MESSAGE_OVERHEAD = 5


def count_tokens(text: str | None) -> int:
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_total_tokens(messages: list[dict[str, Any]]) -> int:
    total = 0
    for message in messages:
        content = message.get("content")
        total += count_tokens(content if isinstance(content, str) else None)
        total += MESSAGE_OVERHEAD
    return total
