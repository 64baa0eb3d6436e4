# src/typedturn/schema/errors.py
"""
Error classes for typedturn schemas and responses.

Every error raised by the package derives from ``TypedTurnError`` and
carries a ``kind`` so callers can branch without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class SchemaErrorKind(str, Enum):
    EMPTY_SCHEMA = "empty_schema"
    INVALID_FORMAT_TYPE = "invalid_format_type"
    INVALID_FRAGMENT = "invalid_fragment"
    NOT_A_DESCRIPTOR = "not_a_descriptor"
    UNKNOWN_TYPE = "unknown_type"
    INVALID_TYPE_VALUE = "invalid_type_value"
    DUPLICATE_TOKEN = "duplicate_token"
    CYCLE = "cycle"


class LogicErrorKind(str, Enum):
    NO_FORMAT = "no_format"
    WRONG_FORMAT_KIND = "wrong_format_kind"
    ROOT_TYPE_NOT_FOUND = "root_type_not_found"
    ROOT_NOT_DESCRIPTOR = "root_not_descriptor"


class ResponseErrorKind(str, Enum):
    ASSISTANT_MESSAGE_MISSING = "assistant_message_missing"
    INVALID_JSON = "invalid_json"
    NOT_AN_OBJECT = "not_an_object"
    MISSING_RESPONSE_FIELD = "missing_response_field"


class DecodeErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"
    NESTED_FAILURE = "nested_failure"


class TypedTurnError(Exception):
    """
    Base exception for all typedturn errors.

    Attributes:
        message: Error description
        schema_name: Name of the schema involved, if known
        raw_output: The raw value that caused the failure, if any
    """

    def __init__(
        self,
        message: str,
        *,
        schema_name: str | None = None,
        raw_output: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.schema_name = schema_name
        self.raw_output = raw_output

    def format_for_retry(self) -> str:
        """Format error message to send back to the model for a retry."""
        return f"Error: {str(self)}\nPlease correct your response."


class SchemaError(TypedTurnError):
    """
    Raised when a schema or response format is built incorrectly.

    This occurs when:
    - A structured format is created with an empty schema
    - A ``type`` field names a class that is not a schema descriptor
    - A descriptor's fragment refers back to itself
    """

    def __init__(
        self,
        message: str,
        *,
        kind: SchemaErrorKind,
        type_name: str | None = None,
        schema_name: str | None = None,
    ):
        super().__init__(message, schema_name=schema_name)
        self.kind = kind
        self.type_name = type_name


class LogicError(TypedTurnError):
    """Raised when the decoder is used with a format it cannot serve."""

    def __init__(
        self,
        message: str,
        *,
        kind: LogicErrorKind,
        schema_name: str | None = None,
    ):
        super().__init__(message, schema_name=schema_name)
        self.kind = kind


class ResponseDataError(TypedTurnError, RuntimeError):
    """
    Raised when the provider's answer cannot be turned into JSON data.

    Wraps parser failures, non-object payloads and responses without an
    assistant message.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ResponseErrorKind,
        raw_output: Any = None,
        parse_position: int | None = None,
    ):
        super().__init__(message, raw_output=raw_output)
        self.kind = kind
        self.parse_position = parse_position

    def format_for_retry(self) -> str:
        if self.kind in (ResponseErrorKind.INVALID_JSON, ResponseErrorKind.NOT_AN_OBJECT):
            return (
                f"Failed to parse JSON: {str(self)}\n"
                "Please respond with a single JSON object only, no additional text."
            )
        return super().format_for_retry()


class DecodeError(TypedTurnError):
    """
    Raised when decoded JSON does not fit a descriptor type.

    ``path`` points at the first invalid value, e.g. ``steps[2].result``,
    and ``type_name`` names the type whose ``from_response`` failed.

    Example:
        DecodeError(
            "field 'n' must be integer, got str",
            kind=DecodeErrorKind.WRONG_TYPE,
            path="n",
            type_name="Step",
        )
    """

    def __init__(
        self,
        message: str,
        *,
        kind: DecodeErrorKind,
        path: str,
        type_name: str | None = None,
        raw_output: Any = None,
    ):
        if type_name:
            full = f"{type_name}.from_response failed at '{path}': {message}"
        else:
            full = f"from_response failed at '{path}': {message}"
        super().__init__(full, raw_output=raw_output)
        self.kind = kind
        self.path = path
        self.type_name = type_name
        self.detail = message

    def format_for_retry(self) -> str:
        return f"Validation failed at '{self.path}': {self.detail}\nPlease fix and try again."
