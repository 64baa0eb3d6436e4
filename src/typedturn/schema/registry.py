# src/typedturn/schema/registry.py
"""
Registry of string tokens that stand for descriptor types.

Schemas may name a descriptor by class (``{"type": MathStep}``) or by a
registered token (``{"type": "MathStep"}``); the token form keeps schemas
plain JSON data, e.g. when loaded from YAML or a config file.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, Optional, TypeVar

from .contract import is_descriptor, type_label
from .errors import SchemaError, SchemaErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class SchemaRegistry:
    """Maps schema-reference tokens to descriptor classes."""

    def __init__(self) -> None:
        self._types: Dict[str, type] = {}

    def register(self, token: str, cls: type) -> type:
        if not is_descriptor(cls):
            raise SchemaError(
                f"Cannot register {type_label(cls)} as '{token}': "
                "type does not implement descriptor contract",
                kind=SchemaErrorKind.NOT_A_DESCRIPTOR,
                type_name=type_label(cls),
            )
        existing = self._types.get(token)
        if existing is not None and existing is not cls:
            raise SchemaError(
                f"Token '{token}' is already registered for {type_label(existing)}",
                kind=SchemaErrorKind.DUPLICATE_TOKEN,
                type_name=token,
            )
        self._types[token] = cls
        logger.debug("Registered schema type %s as '%s'", cls.__qualname__, token)
        return cls

    def unregister(self, token: str) -> None:
        self._types.pop(token, None)

    def get(self, token: str) -> Optional[type]:
        return self._types.get(token)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


default_registry = SchemaRegistry()


def schema_type(
    token: Optional[str] = None,
    *,
    registry: Optional[SchemaRegistry] = None,
) -> Callable[[T], T]:
    """
    Class decorator registering a descriptor under *token*.

    Example:
        @schema_type()
        class MathStep: ...

        ResponseFormat.json_schema({"type": "MathStep"})
    """

    def decorator(cls: T) -> T:
        target = registry if registry is not None else default_registry
        target.register(token or cls.__name__, cls)
        return cls

    return decorator
