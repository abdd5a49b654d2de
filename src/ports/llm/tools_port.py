"""
Port and types describing the tools (function calls) offered to the model, independent of the provider.
"""

from abc import ABC, abstractmethod
from typing import TypedDict

from src.entities.ToolCall import ToolCall


class ToolSpec(TypedDict):
    """Specification for a tool that can be called by an LLM."""

    name: str
    description: str
    parameters: dict[str, object]  # JSON Schema


class ToolsHandlerPort(ABC):
    """
    Port interface for handling LLM tools (function calls).

    This port exposes available tools and dispatches tool invocations to appropriate use cases.
    """

    @abstractmethod
    def available_tools(self) -> list[ToolSpec]:
        """
        Get a list of available tools.

        Returns:
            List of tool specifications
        """
        pass

    @abstractmethod
    def dispatch(self, name: str, arguments: dict[str, object]) -> str:
        """
        Dispatch a tool invocation to the appropriate use case.

        Args:
            name: Name of the tool to invoke
            arguments: Decoded arguments to pass to the tool

        Returns:
            Result of the tool invocation as text

        Raises:
            ValueError: If the tool name is unknown
            ParseError: If the arguments do not match the tool's schema
        """
        pass

    @abstractmethod
    def execute(self, tool_call: ToolCall) -> str:
        """
        Run one model-issued tool call end to end.

        Args:
            tool_call: The call, with raw or decoded arguments

        Returns:
            Text suitable for a tool-role message. Never raises.
        """
        pass
