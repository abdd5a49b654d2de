"""
Tool call entity as issued by the model.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ToolCall:
    """
    One function call requested by the model.

    `arguments` is either the raw JSON text sent by the provider or an already
    decoded object; the dispatcher handles both.
    """

    id: str
    name: str
    arguments: Union[str, dict[str, Any], Any]

    @classmethod
    def from_openai(cls, tool_call: Any) -> "ToolCall":
        """Build from an openai `ChatCompletionMessageToolCall`."""
        function = getattr(tool_call, "function", None)
        return cls(
            id=str(getattr(tool_call, "id", "") or ""),
            name=str(getattr(function, "name", "") or ""),
            arguments=getattr(function, "arguments", None) or "{}",
        )
