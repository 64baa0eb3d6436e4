# src/typedturn/schema/contract.py
"""
The schema descriptor contract.

Any class exposing the two classmethods below can be used as a ``type``
value inside a response schema. There is no base class to inherit from:
conformance is checked structurally with ``is_descriptor``.

Usage::

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
            return cls(n=require(data, "n", "integer", type_name="Step"))

    ResponseFormat.json_schema({"type": Step}, name="step")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@dataclass(frozen=True)
class RootContext:
    """Name and strictness of the schema being resolved.

    Passed unchanged to every ``json_schema`` call made during one
    resolution pass, so nested types see the same schema name.
    """

    schema_name: Optional[str] = None
    strict: Optional[bool] = None

    def as_dict(self) -> Dict[str, Any]:
        return {"name": self.schema_name, "strict": self.strict}


@runtime_checkable
class SchemaDescriptor(Protocol):
    """Protocol for types that describe and rebuild themselves from JSON."""

    @classmethod
    def json_schema(
        cls, root_context: Optional[RootContext] = None
    ) -> Dict[str, Any]:  # pragma: no cover - Protocol stub
        ...

    @classmethod
    def from_response(cls, data: Any) -> Any:  # pragma: no cover - Protocol stub
        ...


def is_descriptor(value: Any) -> bool:
    """Check if *value* is a class implementing the descriptor contract."""
    if not isinstance(value, type):
        return False
    return callable(getattr(value, "json_schema", None)) and callable(
        getattr(value, "from_response", None)
    )


def type_label(value: Any) -> str:
    """Human-readable name of a type reference for error messages."""
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)
