# src/typedturn/response.py
"""
Provider responses and decoding of structured answers.

``ChatTurnResponse.get_schema_objects()`` parses the assistant's JSON and
rebuilds it with the descriptor named at the root of the request's schema:

    fmt = ResponseFormat.json_schema({"type": MathSolution}, name="math")
    solution = response.get_schema_objects(fmt)   # MathSolution instance
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional

from .messages import ROLE_ASSISTANT, Message, MessageCollection
from .schema.contract import is_descriptor, type_label
from .schema.errors import (
    LogicError,
    LogicErrorKind,
    ResponseDataError,
    ResponseErrorKind,
    SchemaError,
)
from .schema.registry import SchemaRegistry, default_registry
from .schema.resolver import lookup_type_reference
from .schema.response_format import ResponseFormat, ResponseFormatType

logger = logging.getLogger(__name__)

_UNSET = object()


def find_root_type(
    schema: Optional[Mapping[str, Any]],
    registry: Optional[SchemaRegistry] = None,
) -> type:
    """
    Return the descriptor named by the top-level ``type`` of an unresolved schema.

    Raises:
        LogicError: ROOT_TYPE_NOT_FOUND if the root is missing or a plain
            JSON Schema type, ROOT_NOT_DESCRIPTOR if it names a class that
            does not implement the descriptor contract.
    """
    root = schema.get("type") if isinstance(schema, Mapping) else None
    if isinstance(root, type) and not is_descriptor(root):
        raise LogicError(
            f"get_schema_objects(): root type {type_label(root)} does not implement the descriptor "
            "contract (json_schema/from_response)",
            kind=LogicErrorKind.ROOT_NOT_DESCRIPTOR,
        )
    try:
        found = lookup_type_reference(root, registry or default_registry)
    except SchemaError:
        found = None
    if found is None:
        raise LogicError(
            "get_schema_objects(): no descriptor type found at the root of the schema. "
            "Name one in the top-level 'type' field, e.g. {'type': MathSolution}",
            kind=LogicErrorKind.ROOT_TYPE_NOT_FOUND,
        )
    return found


class ChatTurnResponse:
    """
    Normalised chat-completion response.

    Provider adapters build instances from the raw API body; the
    structured-answer decoding below is provider-agnostic.

    Attributes:
        id: Response id from the provider
        model: Model that produced the answer
        created: Unix timestamp
        usage: Token usage block as returned by the provider
        messages: Messages extracted from the choices
        raw_body: The full decoded API body
        headers: HTTP response headers
        response_format: Format captured when the request was built
    """

    def __init__(
        self,
        *,
        id: str,
        model: str,
        created: int,
        usage: Optional[Dict[str, Any]] = None,
        messages: Optional[MessageCollection] = None,
        raw_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None,
        response_format: Optional[ResponseFormat] = None,
        system_fingerprint: Optional[str] = None,
    ):
        self.id = id
        self.model = model
        self.created = created
        self.usage = usage or {}
        self.messages = messages if messages is not None else MessageCollection()
        self.raw_body = raw_body or {}
        self.headers = headers or {}
        self.response_format = response_format
        self.system_fingerprint = system_fingerprint

        self._schema_objects: Any = _UNSET
        self._lock = threading.Lock()

    @staticmethod
    def messages_from_choices(
        choices: List[Dict[str, Any]], *, keep_reasoning: bool
    ) -> MessageCollection:
        """Extract messages that carry both role and content."""
        messages = MessageCollection()
        for choice in choices:
            message = choice.get("message") or {}
            if message.get("role") is None or message.get("content") is None:
                continue
            messages.push(
                Message(
                    role=message["role"],
                    content=message["content"],
                    reasoning_content=message.get("reasoning_content") if keep_reasoning else None,
                )
            )
        return messages

    def get_assistant(self) -> Message:
        for message in self.messages:
            if message.role == ROLE_ASSISTANT:
                return message
        raise ResponseDataError(
            "get_assistant(): no assistant message in response",
            kind=ResponseErrorKind.ASSISTANT_MESSAGE_MISSING,
        )

    def get_content(self) -> str:
        first = self.messages.first()
        return first.content if first is not None else ""

    def get_schema_objects(self, response_format: Optional[ResponseFormat] = None) -> Any:
        """
        Decode the assistant's answer into descriptor instances.

        The result is computed once per response; later calls return the
        same object, whatever *response_format* they pass.

        Args:
            response_format: Overrides the format captured with the request.

        Raises:
            LogicError: No format, a text format, or no root descriptor.
            ResponseDataError: No assistant message, invalid JSON, or a
                non-object payload.
            DecodeError: The payload does not fit the root descriptor.
        """
        if self._schema_objects is not _UNSET:
            logger.debug("Schema objects cache hit for response %s", self.id)
            return self._schema_objects

        with self._lock:
            if self._schema_objects is _UNSET:
                self._schema_objects = self._decode(response_format)
        return self._schema_objects

    def _decode(self, response_format: Optional[ResponseFormat]) -> Any:
        fmt = response_format if response_format is not None else self.response_format
        if fmt is None:
            raise LogicError(
                "get_schema_objects(): ResponseFormat is not set. Set it on the "
                "request or pass it to get_schema_objects()",
                kind=LogicErrorKind.NO_FORMAT,
            )
        if fmt.type is not ResponseFormatType.JSON_SCHEMA:
            raise LogicError(
                "get_schema_objects() is only available for json_schema formats, "
                f"got {fmt.type.value}",
                kind=LogicErrorKind.WRONG_FORMAT_KIND,
                schema_name=fmt.name,
            )

        content = self.get_assistant().content
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ResponseDataError(
                f"get_schema_objects(): assistant answer is not valid JSON: {e}",
                kind=ResponseErrorKind.INVALID_JSON,
                raw_output=content[:500],
                parse_position=e.pos,
            ) from e
        if not isinstance(data, dict):
            raise ResponseDataError(
                "get_schema_objects(): assistant answer must be a JSON object, "
                f"got {type(data).__name__}",
                kind=ResponseErrorKind.NOT_AN_OBJECT,
                raw_output=data,
            )

        root = find_root_type(fmt.schema, fmt.registry)
        logger.debug("Decoding response %s with %s", self.id, root.__qualname__)
        return root.from_response(data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, model={self.model!r})"
