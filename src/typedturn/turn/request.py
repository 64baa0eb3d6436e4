# src/typedturn/turn/request.py
"""Requests and their fluent builder."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..messages import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER, Message, MessageCollection
from ..schema.response_format import ResponseFormat
from .options import TurnOptions


class Request:
    """Messages plus options for one chat turn. Immutable once built."""

    def __init__(self, messages: MessageCollection, options: TurnOptions):
        self._messages = messages.copy()
        self._options = options

    @property
    def messages(self) -> MessageCollection:
        return self._messages.copy()

    @property
    def options(self) -> TurnOptions:
        return self._options

    @property
    def response_format(self) -> Optional[ResponseFormat]:
        return self._options.response_format

    def __repr__(self) -> str:
        return f"Request(model={self._options.model!r}, messages={len(self._messages)})"


class RequestBuilder:
    """
    Fluent builder for ``Request``.

    Example:
        request = (
            RequestBuilder()
            .set_system_prompt("You are a calculator.")
            .set_user_prompt("2 + 2?")
            .set_model("deepseek-chat")
            .set_temperature(0.1)
            .build()
        )
    """

    def __init__(self) -> None:
        self._messages = MessageCollection()
        self._options: Dict[str, Any] = {}

    # ------------------------------------------------------------------ #
    # Messages                                                             #
    # ------------------------------------------------------------------ #

    def set_prompt(self, role: str, prompt: str) -> "RequestBuilder":
        self._messages.push(Message(role=role, content=prompt))
        return self

    def set_user_prompt(self, content: str) -> "RequestBuilder":
        return self.set_prompt(ROLE_USER, content)

    def set_system_prompt(self, content: str) -> "RequestBuilder":
        return self.set_prompt(ROLE_SYSTEM, content)

    def set_assistant_prompt(self, content: str) -> "RequestBuilder":
        return self.set_prompt(ROLE_ASSISTANT, content)

    def add_message(self, message: Message) -> "RequestBuilder":
        self._messages.push(message)
        return self

    @property
    def messages(self) -> MessageCollection:
        return self._messages

    # ------------------------------------------------------------------ #
    # Options                                                              #
    # ------------------------------------------------------------------ #

    def set_option(self, name: str, value: Any) -> "RequestBuilder":
        if name not in TurnOptions.model_fields:
            raise KeyError(f"Unknown turn option: {name}")
        self._options[name] = value
        return self

    def get_option(self, name: str) -> Any:
        return self._options.get(name)

    def set_model(self, model: str) -> "RequestBuilder":
        return self.set_option("model", model)

    def set_temperature(self, temperature: Optional[float]) -> "RequestBuilder":
        return self.set_option("temperature", temperature)

    def set_max_tokens(self, max_tokens: Optional[int]) -> "RequestBuilder":
        return self.set_option("max_tokens", max_tokens)

    def set_frequency_penalty(self, value: Optional[float]) -> "RequestBuilder":
        return self.set_option("frequency_penalty", value)

    def set_presence_penalty(self, value: Optional[float]) -> "RequestBuilder":
        return self.set_option("presence_penalty", value)

    def set_remember_context(self, value: Optional[bool]) -> "RequestBuilder":
        return self.set_option("remember_context", value)

    def set_is_thinking(self, value: Optional[bool]) -> "RequestBuilder":
        return self.set_option("is_thinking", value)

    def set_response_format(self, value: Optional[ResponseFormat]) -> "RequestBuilder":
        return self.set_option("response_format", value)

    def set_stop(self, value: Optional[List[str]]) -> "RequestBuilder":
        return self.set_option("stop", value)

    def set_stream(self, value: Optional[bool]) -> "RequestBuilder":
        return self.set_option("stream", value)

    def set_stream_options(self, value: Optional[Dict[str, Any]]) -> "RequestBuilder":
        return self.set_option("stream_options", value)

    def set_top_p(self, value: Optional[float]) -> "RequestBuilder":
        return self.set_option("top_p", value)

    def set_tools(self, value: Optional[List[Dict[str, Any]]]) -> "RequestBuilder":
        return self.set_option("tools", value)

    def set_tool_choice(self, value: Optional[Union[str, Dict[str, Any]]]) -> "RequestBuilder":
        return self.set_option("tool_choice", value)

    def set_logprobs(self, value: Optional[bool]) -> "RequestBuilder":
        return self.set_option("logprobs", value)

    def set_top_logprobs(self, value: Optional[int]) -> "RequestBuilder":
        return self.set_option("top_logprobs", value)

    def build_options(self) -> TurnOptions:
        if self._options.get("model") is None:
            raise ValueError("Model is required. Use set_model() to set it.")
        return TurnOptions(**{k: v for k, v in self._options.items() if v is not None})

    def build(self) -> Request:
        """
        Build the request.

        Raises:
            ValueError: If no message was added or no model was set; option
                range errors surface as pydantic ``ValidationError``.
        """
        if self._messages.is_empty():
            raise ValueError(
                "Messages collection cannot be empty. Use set_prompt() or add_message()."
            )
        return Request(self._messages, self.build_options())
