"""
LLM port interface defining the contract for language model implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class LLMPort(ABC):
    """Port interface for language model operations."""

    @abstractmethod
    def run_chat_turn(
        self,
        messages: Optional[list[dict[str, Any]]],
        user_text: str,
        system_message: Optional[str] = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """
        Execute one chat turn, letting the model call tools until it answers.

        Args:
            messages: Existing conversation (list of {role, content, ...})
            user_text: New user message for this turn
            system_message: System message used when the history has none
            **kwargs: Additional model parameters (temperature, max_tokens, tool_max_steps, ...)

        Returns:
            {"text": str, "steps": list[dict], "messages": list[dict], "cancelled": bool}

        Raises:
            LLMError: If the model call fails
        """
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """
        Check that the model endpoint answers.

        Returns:
            True if reachable, False otherwise
        """
        pass

    def get_model_info(self) -> dict[str, Any]:
        """
        Get information about the current model configuration.

        Returns:
            Dictionary with model configuration details
        """
        return {"provider": "Unknown", "model": "Unknown"}
