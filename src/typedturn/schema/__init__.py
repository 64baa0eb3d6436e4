# src/typedturn/schema/__init__.py
"""
typedturn schemas

Describe the shape of a model's answer with ordinary Python classes and
turn the returned JSON back into instances of them.

Basic Usage:
    from typedturn.schema import ResponseFormat, require

    class Step:
        def __init__(self, n: int):
            self.n = n

        @classmethod
        def json_schema(cls, root_context=None):
            return {
                "type": "object",
                "properties": {"n": {"type": "integer"}},
                "required": ["n"],
            }

        @classmethod
        def from_response(cls, data):
            return cls(require(data, "n", "integer", type_name="Step"))

    fmt = ResponseFormat.json_schema({"type": Step}, name="step")
    fmt.resolved_schema()
    # → {"type": "object", "properties": {"n": {"type": "integer"}}, ...}
"""

from .contract import RootContext, SchemaDescriptor, is_descriptor
from .errors import (
    TypedTurnError,
    SchemaError,
    SchemaErrorKind,
    LogicError,
    LogicErrorKind,
    ResponseDataError,
    ResponseErrorKind,
    DecodeError,
    DecodeErrorKind,
)
from .fields import (
    expect_object,
    require,
    optional,
    hydrate_object,
    hydrate_list,
    to_data,
)
from .registry import SchemaRegistry, default_registry, schema_type
from .resolver import resolve, contains_type_references, lookup_type_reference
from .response_format import ResponseFormat, ResponseFormatType
from .pydantic_adapter import PydanticDescriptor

__all__ = [
    # Contract
    "RootContext",
    "SchemaDescriptor",
    "is_descriptor",
    # Errors
    "TypedTurnError",
    "SchemaError",
    "SchemaErrorKind",
    "LogicError",
    "LogicErrorKind",
    "ResponseDataError",
    "ResponseErrorKind",
    "DecodeError",
    "DecodeErrorKind",
    # Hydration helpers
    "expect_object",
    "require",
    "optional",
    "hydrate_object",
    "hydrate_list",
    "to_data",
    # Registry
    "SchemaRegistry",
    "default_registry",
    "schema_type",
    # Resolution
    "resolve",
    "contains_type_references",
    "lookup_type_reference",
    "ResponseFormat",
    "ResponseFormatType",
    "PydanticDescriptor",
]
