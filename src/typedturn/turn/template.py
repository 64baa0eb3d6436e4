# src/typedturn/turn/template.py
"""
Reusable turn templates.

A ``TurnDefaults`` value carries the defaults of a kind of turn (system
prompt, model, response schema...). Templates are layered with ``merge``,
and a ``TurnBuilder`` seeded from them is refined per call:

    MATH = TurnDefaults(
        system_prompt="You are a calculator.",
        model="deepseek-chat",
        temperature=0.1,
        response_schema={"type": MathSolution},
        response_format_name="quick_math_solution",
    )

    turn = (
        TurnBuilder(MATH)
        .set_user_prompt("2 + 2?")
        .with_provider(provider)
        .send()
    )
    turn.schema_objects()
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from ..messages import Message
from ..response import ChatTurnResponse
from ..schema.response_format import ResponseFormat
from .request import Request, RequestBuilder

logger = logging.getLogger(__name__)

Scope = Callable[..., None]

# Template fields that map one-to-one onto TurnOptions
_OPTION_FIELDS = (
    "model",
    "temperature",
    "max_tokens",
    "frequency_penalty",
    "presence_penalty",
    "remember_context",
    "is_thinking",
    "stop",
    "stream",
    "stream_options",
    "top_p",
    "tools",
    "tool_choice",
    "logprobs",
    "top_logprobs",
)


@dataclass(frozen=True)
class TurnDefaults:
    """
    Default values for a kind of turn. ``None`` means "not set".

    Attributes:
        system_prompt: Prepended as the first system message
        response_schema: Schema for a JSON-schema ``ResponseFormat``
        response_format_name: Name given to that format
        response_format_strict: Strictness of that format
        (remaining fields mirror ``TurnOptions``)
    """

    system_prompt: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    remember_context: Optional[bool] = None
    is_thinking: Optional[bool] = None
    response_schema: Optional[Dict[str, Any]] = None
    response_format_name: Optional[str] = None
    response_format_strict: Optional[bool] = None
    stop: Optional[List[str]] = None
    stream: Optional[bool] = None
    stream_options: Optional[Dict[str, Any]] = None
    top_p: Optional[float] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None

    def merge(self, override: Optional["TurnDefaults"]) -> "TurnDefaults":
        return merge(self, override)

    def response_format(self) -> Optional[ResponseFormat]:
        """Build the JSON-schema format described by these defaults, if any."""
        if not self.response_schema:
            return None
        strict = True if self.response_format_strict is None else self.response_format_strict
        return ResponseFormat.json_schema(
            self.response_schema,
            name=self.response_format_name,
            strict=strict,
        )


def merge(base: Optional[TurnDefaults], override: Optional[TurnDefaults]) -> TurnDefaults:
    """Return *base* with every non-None field of *override* applied."""
    if base is None:
        return override if override is not None else TurnDefaults()
    if override is None:
        return base
    changes = {
        f.name: getattr(override, f.name)
        for f in dataclasses.fields(override)
        if getattr(override, f.name) is not None
    }
    return dataclasses.replace(base, **changes)


class Turn:
    """A sent request together with the provider's response."""

    def __init__(self, request: Request, response: ChatTurnResponse):
        self.request = request
        self.response = response

    def schema_objects(self) -> Any:
        """Decode the answer using the request's response format."""
        return self.response.get_schema_objects(self.request.response_format)

    def content(self) -> str:
        return self.response.get_content()


class TurnBuilder:
    """
    Builds and sends one turn, starting from ``TurnDefaults``.

    Args:
        defaults: Template to seed the request from.
        scopes: Named presets, each ``scope(builder, *args)`` adjusting the
            builder; run with ``apply(name, *args)``.
    """

    def __init__(
        self,
        defaults: Optional[TurnDefaults] = None,
        *,
        scopes: Optional[Dict[str, Scope]] = None,
    ):
        self.defaults = defaults or TurnDefaults()
        self.scopes: Dict[str, Scope] = dict(scopes or {})
        self.request_builder = RequestBuilder()
        self._provider: Any = None

        if self.defaults.system_prompt:
            self.request_builder.add_message(Message.system(self.defaults.system_prompt))
        for name in _OPTION_FIELDS:
            value = getattr(self.defaults, name)
            if value is not None:
                self.request_builder.set_option(name, value)
        response_format = self.defaults.response_format()
        if response_format is not None:
            self.request_builder.set_response_format(response_format)

    def apply(self, scope: str, *args: Any) -> "TurnBuilder":
        """Run the named scope against this builder."""
        try:
            fn = self.scopes[scope]
        except KeyError:
            raise KeyError(f"Scope '{scope}' is not defined") from None
        fn(self, *args)
        return self

    def with_prompt(self, role: str, prompt: str) -> "TurnBuilder":
        self.request_builder.set_prompt(role, prompt)
        return self

    def set_user_prompt(self, content: str) -> "TurnBuilder":
        self.request_builder.set_user_prompt(content)
        return self

    def set_system_prompt(self, content: str) -> "TurnBuilder":
        self.request_builder.set_system_prompt(content)
        return self

    def set_assistant_prompt(self, content: str) -> "TurnBuilder":
        self.request_builder.set_assistant_prompt(content)
        return self

    def add_message(self, message: Message) -> "TurnBuilder":
        self.request_builder.add_message(message)
        return self

    def set(self, **options: Any) -> "TurnBuilder":
        """Set several options at once, e.g. ``set(temperature=0.3)``."""
        for name, value in options.items():
            self.request_builder.set_option(name, value)
        return self

    def set_model(self, model: str) -> "TurnBuilder":
        return self.set(model=model)

    def set_temperature(self, temperature: Optional[float]) -> "TurnBuilder":
        return self.set(temperature=temperature)

    def set_max_tokens(self, max_tokens: Optional[int]) -> "TurnBuilder":
        return self.set(max_tokens=max_tokens)

    def set_is_thinking(self, is_thinking: Optional[bool]) -> "TurnBuilder":
        return self.set(is_thinking=is_thinking)

    def set_response_format(self, response_format: Optional[ResponseFormat]) -> "TurnBuilder":
        return self.set(response_format=response_format)

    def with_provider(self, provider: Any) -> "TurnBuilder":
        self._provider = provider
        return self

    def build_request(self) -> Request:
        return self.request_builder.build()

    def send(self) -> Turn:
        """
        Build the request and send it through the provider.

        Raises:
            RuntimeError: If no provider was set with ``with_provider()``.
        """
        if self._provider is None:
            raise RuntimeError(
                "Provider is not set. Use with_provider() before calling send()."
            )
        request = self.build_request()
        logger.debug("Sending %r", request)
        response = self._provider.send_chat_turn(request)
        return Turn(request, response)
