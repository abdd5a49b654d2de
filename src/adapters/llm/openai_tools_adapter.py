"""
OpenAI adapter with tool (function-calling) support for the coding chat loop.
"""

import logging
from collections.abc import Iterable
from typing import Any, Callable, Optional, cast

from openai import OpenAI
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionToolParam,
)
from typing_extensions import override

from src.config.settings import Settings, settings as default_settings
from src.entities.ToolCall import ToolCall
from src.exceptions import LLMError
from src.ports.llm.llm_port import LLMPort
from src.ports.llm.tools_port import ToolsHandlerPort

DEFAULT_SYSTEM_MESSAGE = (
    "You are a coding assistant working inside the user's project directory. "
    "Use search_codebase, code_context and directory_structure to inspect code, "
    "patch_file to edit existing files and the create_* tools to add new ones. "
    "Line numbers in patch_file always refer to the file before the patch."
)
DEFAULT_TOOL_MAX_STEPS = 10


class OpenAIToolsAdapter(LLMPort):
    """OpenAI implementation of the LLM port that executes tool calls."""

    def __init__(
        self,
        tools_handler: ToolsHandlerPort,
        api_key: str | None = None,
        model: str | None = None,
        api_base: str | None = None,
        logger: logging.Logger | None = None,
        client: OpenAI | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the OpenAI tools adapter.

        Args:
            tools_handler: Handler that exposes and executes the tools
            api_key: OpenAI API key (defaults to settings)
            model: Model name (defaults to settings)
            api_base: API base URL (defaults to settings)
            logger: Logger instance to use for logging. If None, a default logger will be created.
            client: Preconfigured OpenAI client, mostly for tests
            settings: Settings to read defaults from (defaults to the process-wide settings)

        Raises:
            ConfigurationError: If no client is given and no API key is configured
        """
        cfg = settings or default_settings
        self._tools_handler: ToolsHandlerPort = tools_handler
        self.model: str = model or cfg.openai_model
        self.api_base: str | None = api_base or cfg.openai_api_base
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

        if client is not None:
            self.client: OpenAI = client
        else:
            self.client = OpenAI(
                api_key=api_key or cfg.require_openai_api_key(),
                base_url=self.api_base,
            )

    # ------------------------------
    # Helpers
    # ------------------------------

    def _to_openai_tools(self) -> list[dict[str, Any]]:
        # no "strict" flag: several tools have optional parameters
        return [
            {
                "type": "function",
                "function": {
                    "name": spec["name"],
                    "description": spec["description"],
                    "parameters": spec["parameters"],
                },
            }
            for spec in self._tools_handler.available_tools()
        ]

    def _clean_messages(
        self, history: list[dict[str, Any]]
    ) -> list[ChatCompletionMessageParam]:
        """Drop messages that carry neither content nor tool calls."""
        return [
            cast(ChatCompletionMessageParam, cast(object, m))
            for m in history
            if m.get("role") == "tool" or m.get("content") or m.get("tool_calls")
        ]

    def _notify(
        self, on_step: Optional[Callable[[dict[str, Any]], None]], event: dict[str, Any]
    ) -> None:
        if on_step is None:
            return
        try:
            on_step(event)
        except Exception as e:
            self._logger.debug(f"on_step callback failed: {e}")

    def _request(
        self,
        history: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
    ) -> Any:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=cast(
                    Iterable[ChatCompletionMessageParam], self._clean_messages(history)
                ),
                temperature=temperature,
                max_tokens=max_tokens,
                tools=cast(Iterable[ChatCompletionToolParam], tools),  # type: ignore
                tool_choice="auto",
            )
        except Exception as e:
            raise LLMError(f"Failed to generate response: {str(e)}")
        if not getattr(response, "choices", None):
            raise LLMError("No response generated from the model")
        return response.choices[0].message

    def _run_tool_calls(
        self,
        tool_calls: list[Any],
        history: list[dict[str, Any]],
        steps: list[dict[str, Any]],
        on_step: Optional[Callable[[dict[str, Any]], None]],
    ) -> None:
        """Execute the calls in order and append one tool message per call."""
        for raw_call in tool_calls:
            call = ToolCall.from_openai(raw_call)
            self._notify(
                on_step, {"phase": "call", "name": call.name, "arguments": call.arguments}
            )
            result = self._tools_handler.execute(call)
            steps.append(
                {"name": call.name, "arguments": call.arguments, "result": result}
            )
            self._notify(on_step, {"phase": "result", "name": call.name, "result": result})
            history.append(
                {
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": result,
                }
            )

    # ------------------------------
    # LLMPort
    # ------------------------------

    @override
    def run_chat_turn(
        self,
        messages: Optional[list[dict[str, Any]]],
        user_text: str,
        system_message: Optional[str] = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """
        Execute one chat turn, running tool calls until the model answers.

        Args:
            messages: Existing conversation. Can be empty/None.
            user_text: New user message to append for this turn.
            system_message: System message used when the history has none.
            **kwargs: temperature, max_tokens, tool_max_steps, plus optional
                `should_cancel` (checked before every request) and `on_step`
                (receives call/result events).

        Returns:
            {"text": str, "steps": list[dict], "messages": list[dict], "cancelled": bool}

        Raises:
            LLMError: If the API call fails or the step limit is reached
        """
        temperature = float(kwargs.get("temperature", 0.7))
        max_tokens = int(kwargs.get("max_tokens", 2048))
        tool_max_steps = int(kwargs.get("tool_max_steps", DEFAULT_TOOL_MAX_STEPS))
        should_cancel = kwargs.get("should_cancel")
        on_step = kwargs.get("on_step") if callable(kwargs.get("on_step")) else None

        history: list[dict[str, Any]] = [dict(m) for m in (messages or [])]
        if not any(m.get("role") == "system" for m in history):
            history.insert(
                0,
                {"role": "system", "content": system_message or DEFAULT_SYSTEM_MESSAGE},
            )
        history.append({"role": "user", "content": user_text})

        tools = self._to_openai_tools()
        steps: list[dict[str, Any]] = []

        for _ in range(tool_max_steps):
            if callable(should_cancel) and should_cancel():
                self._logger.info("Chat turn cancelled")
                return {
                    "text": "",
                    "steps": steps,
                    "messages": history,
                    "cancelled": True,
                }

            msg = self._request(history, tools, temperature, max_tokens)
            tool_calls = list(getattr(msg, "tool_calls", None) or [])

            if not tool_calls:
                content = (msg.content or "").strip()
                if not content:
                    raise LLMError("Empty response received from the model")
                history.append({"role": "assistant", "content": content})
                return {
                    "text": content,
                    "steps": steps,
                    "messages": history,
                    "cancelled": False,
                }

            history.append(
                {
                    "role": "assistant",
                    "content": msg.content or "",
                    "tool_calls": [
                        tc.model_dump() if hasattr(tc, "model_dump") else tc
                        for tc in tool_calls
                    ],
                }
            )
            self._run_tool_calls(tool_calls, history, steps, on_step)

        raise LLMError(
            f"Maximum number of tool steps ({tool_max_steps}) reached without a final answer"
        )

    @override
    def test_connection(self) -> bool:
        try:
            self.client.models.list()
            return True
        except Exception as e:
            self._logger.warning(f"Model endpoint unreachable: {e}")
            return False

    @override
    def get_model_info(self) -> dict[str, Any]:
        return {
            "provider": "OpenAI",
            "model": self.model,
            "api_base": self.api_base,
            "tools": [spec["name"] for spec in self._tools_handler.available_tools()],
        }

