# src/typedturn/schema/response_format.py
"""
ResponseFormat describes how the provider should shape its answer.

Basic Usage:
    fmt = ResponseFormat.json_schema(
        {"type": MathSolution},
        name="advanced_math_solution",
    )
    fmt.to_dict()
    # → {"type": "json_schema", "name": ..., "strict": True, "schema": {...}}

    ResponseFormat.text()
    # → plain text answer, no schema
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .contract import RootContext
from .errors import LogicError, LogicErrorKind, SchemaError, SchemaErrorKind
from .registry import SchemaRegistry
from .resolver import resolve


class ResponseFormatType(str, Enum):
    """Kind of answer requested from the provider."""

    JSON_SCHEMA = "json_schema"
    """Structured answer matching a JSON Schema."""

    TEXT = "text"
    """Plain text answer."""


@dataclass(frozen=True)
class ResponseFormat:
    """
    Immutable response format.

    Use ``ResponseFormat.json_schema()`` or ``ResponseFormat.text()`` rather
    than the constructor.

    Attributes:
        type: JSON_SCHEMA or TEXT
        schema: Unresolved schema tree (JSON_SCHEMA only); ``type`` values
            may be descriptor classes or registered tokens
        name: Schema name, also handed to descriptors as context
        strict: Whether the provider must match the schema exactly
        registry: Token registry used during resolution (``None`` = default)
    """

    type: ResponseFormatType
    schema: Optional[Dict[str, Any]] = None
    name: Optional[str] = None
    strict: Optional[bool] = True
    registry: Optional[SchemaRegistry] = None

    def __post_init__(self):
        try:
            kind = ResponseFormatType(self.type)
        except ValueError:
            raise SchemaError(
                f"Invalid response format type: {self.type!r}",
                kind=SchemaErrorKind.INVALID_FORMAT_TYPE,
            ) from None
        object.__setattr__(self, "type", kind)

        if kind is ResponseFormatType.JSON_SCHEMA:
            if not self.schema:
                raise SchemaError(
                    "Schema must not be empty",
                    kind=SchemaErrorKind.EMPTY_SCHEMA,
                    schema_name=self.name,
                )
            if not isinstance(self.schema, Mapping):
                raise SchemaError(
                    f"Schema must be a mapping, got {type(self.schema).__name__}",
                    kind=SchemaErrorKind.INVALID_FRAGMENT,
                    schema_name=self.name,
                )
            object.__setattr__(self, "schema", copy.deepcopy(dict(self.schema)))

    @classmethod
    def json_schema(
        cls,
        schema: Mapping[str, Any],
        name: Optional[str] = None,
        strict: Optional[bool] = True,
        *,
        registry: Optional[SchemaRegistry] = None,
    ) -> "ResponseFormat":
        """Create a structured format; raises SchemaError on an empty schema."""
        return cls(
            type=ResponseFormatType.JSON_SCHEMA,
            schema=schema,
            name=name,
            strict=strict,
            registry=registry,
        )

    @classmethod
    def text(cls) -> "ResponseFormat":
        return cls(type=ResponseFormatType.TEXT)

    @property
    def is_structured(self) -> bool:
        return self.type is ResponseFormatType.JSON_SCHEMA

    def root_context(self) -> RootContext:
        return RootContext(schema_name=self.name, strict=self.strict)

    def resolved_schema(self) -> Dict[str, Any]:
        """Return the schema with every type reference expanded."""
        self._require_structured("resolved_schema")
        return resolve(self.schema, self.root_context(), registry=self.registry)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type.value}
        if self.is_structured:
            result["name"] = self.name
            result["strict"] = self.strict
            result["schema"] = self.resolved_schema()
        return result

    def schema_to_json_string(self, indent: Optional[int] = 2) -> str:
        """
        Serialize the resolved schema, e.g. for embedding in a system prompt.

        Key order follows the schema definition, so the output is stable.
        """
        self._require_structured("schema_to_json_string")
        return json.dumps(self.resolved_schema(), ensure_ascii=False, indent=indent)

    def _require_structured(self, operation: str) -> None:
        if not self.is_structured:
            raise LogicError(
                f"{operation}() is only available for {ResponseFormatType.JSON_SCHEMA.value} "
                f"formats, got {self.type.value}",
                kind=LogicErrorKind.WRONG_FORMAT_KIND,
                schema_name=self.name,
            )
