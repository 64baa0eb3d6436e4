# src/typedturn/providers/base.py
"""
Provider adapter interface and shared payload helpers.

Adapters only shape data: they turn a ``Request`` into the provider's
chat-completions payload (or an unsent ``httpx.Request``) and parse the
decoded API body back into a ``ChatTurnResponse``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Protocol, runtime_checkable

import httpx

from ..config import ProviderSettings
from ..response import ChatTurnResponse
from ..schema.errors import ResponseDataError, ResponseErrorKind
from ..schema.response_format import ResponseFormat
from ..turn.options import TurnOptions
from ..turn.request import Request

# Options copied verbatim into the payload when set, in payload order
PAYLOAD_OPTIONS = (
    "frequency_penalty",
    "max_tokens",
    "presence_penalty",
    "stop",
    "stream",
    "stream_options",
    "temperature",
    "top_p",
    "tools",
    "tool_choice",
    "logprobs",
    "top_logprobs",
)


@runtime_checkable
class ProviderAdapter(Protocol):
    """Protocol for provider request/response adapters."""

    name: str
    endpoint: str

    def to_payload(self, request: Request) -> Dict[str, Any]:  # pragma: no cover - Protocol stub
        ...

    def to_http_request(
        self, request: Request, settings: ProviderSettings
    ) -> httpx.Request:  # pragma: no cover - Protocol stub
        ...

    def parse_response(
        self,
        body: Dict[str, Any],
        headers: Optional[Dict[str, Any]] = None,
        response_format: Optional[ResponseFormat] = None,
    ) -> ChatTurnResponse:  # pragma: no cover - Protocol stub
        ...


@runtime_checkable
class ChatProvider(Protocol):
    """Anything that can send a request and return a response."""

    def send_chat_turn(self, request: Request) -> ChatTurnResponse:  # pragma: no cover - Protocol stub
        ...


class BaseAdapter:
    """Shared behaviour of the chat-completions adapters."""

    name: str = ""
    endpoint: str = "/chat/completions"
    required_response_fields: tuple = ("id", "choices", "created", "model", "object", "usage")
    keep_reasoning: bool = False

    def to_payload(self, request: Request) -> Dict[str, Any]:
        options = request.options
        payload: Dict[str, Any] = {
            "messages": request.messages.to_list(),
            "model": options.model,
        }
        payload.update(self.extra_options(options))
        payload.update(option_values(options, PAYLOAD_OPTIONS))
        if options.response_format is not None:
            self.apply_response_format(payload, options.response_format)
        return payload

    def extra_options(self, options: TurnOptions) -> Dict[str, Any]:
        """Provider-specific options placed right after the model."""
        return {}

    def apply_response_format(self, payload: Dict[str, Any], fmt: ResponseFormat) -> None:
        raise NotImplementedError

    def to_http_request(self, request: Request, settings: ProviderSettings) -> httpx.Request:
        """Build (never send) the HTTP request for *request*."""
        return httpx.Request(
            "POST",
            settings.base_url + self.endpoint,
            headers={
                "Authorization": f"Bearer {settings.api_key}",
                "Content-Type": "application/json",
            },
            json=self.to_payload(request),
        )

    def parse_response(
        self,
        body: Dict[str, Any],
        headers: Optional[Dict[str, Any]] = None,
        response_format: Optional[ResponseFormat] = None,
    ) -> ChatTurnResponse:
        """
        Build a ``ChatTurnResponse`` from the decoded API body.

        Raises:
            ResponseDataError: If a required top-level field is missing.
        """
        require_fields(body, self.required_response_fields, self.name)
        return ChatTurnResponse(
            id=body["id"],
            model=body["model"],
            created=body["created"],
            usage=body["usage"],
            messages=ChatTurnResponse.messages_from_choices(
                body["choices"], keep_reasoning=self.keep_reasoning
            ),
            raw_body=body,
            headers=headers,
            response_format=response_format,
            system_fingerprint=body.get("system_fingerprint"),
        )


def option_values(options: TurnOptions, names: Iterable[str]) -> Dict[str, Any]:
    """Return the set (non-None) options among *names*, in that order."""
    values: Dict[str, Any] = {}
    for name in names:
        value = getattr(options, name)
        if value is not None:
            values[name] = value
    return values


def require_fields(body: Dict[str, Any], fields: Iterable[str], provider: str) -> None:
    for field in fields:
        if body.get(field) is None:
            raise ResponseDataError(
                f"Missing required field in {provider} API response: {field}",
                kind=ResponseErrorKind.MISSING_RESPONSE_FIELD,
                raw_output=body,
            )
