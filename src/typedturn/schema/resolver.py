# src/typedturn/schema/resolver.py
"""
Resolver for typedturn schemas.

Expands every type reference found in a schema tree into the referenced
descriptor's own JSON Schema fragment, recursively, so the result is a
plain JSON Schema document that can be sent to a provider.

A node ``{"type": MathStep, "description": "..."}`` becomes MathStep's
fragment with ``description`` laid over it. Inside a union
(``{"type": [MathStep, "null"]}``) each reference is expanded in place.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from .contract import RootContext, is_descriptor, type_label
from .errors import SchemaError, SchemaErrorKind
from .registry import SchemaRegistry, default_registry

logger = logging.getLogger(__name__)

# JSON Schema primitive type names, passed through untouched
PRIMITIVE_TYPES = frozenset(
    {"string", "number", "integer", "boolean", "object", "array", "null"}
)


def resolve(
    schema: Any,
    root_context: Optional[RootContext] = None,
    *,
    registry: Optional[SchemaRegistry] = None,
) -> Any:
    """
    Return a copy of *schema* with every type reference expanded.

    Args:
        schema: Schema tree of dicts/lists; ``type`` values may be primitive
            names, lists of them, descriptor classes or registered tokens.
        root_context: Context handed to every ``json_schema`` call.
        registry: Token registry (defaults to the module-level registry).

    Returns:
        The resolved schema. The input is never mutated.

    Raises:
        SchemaError: On a non-descriptor class, an unknown type token, a
            non-mapping fragment, or a type that references itself.
    """
    context = root_context if root_context is not None else RootContext()
    return _Resolver(context, registry or default_registry).node(schema, ())


def lookup_type_reference(
    value: Any, registry: Optional[SchemaRegistry] = None
) -> Optional[type]:
    """
    Return the descriptor class *value* refers to, or ``None`` for primitives.

    Raises:
        SchemaError: If *value* is a class that does not implement the
            contract, or an unknown non-primitive string.
    """
    registry = registry or default_registry

    if isinstance(value, type):
        if not is_descriptor(value):
            raise SchemaError(
                f"{type_label(value)}: type does not implement descriptor contract "
                "(json_schema/from_response)",
                kind=SchemaErrorKind.NOT_A_DESCRIPTOR,
                type_name=type_label(value),
            )
        return value

    if isinstance(value, str):
        if value in PRIMITIVE_TYPES:
            return None
        found = registry.get(value)
        if found is None:
            raise SchemaError(
                f"Unknown type '{value}': not a JSON Schema type and not a "
                "registered schema type",
                kind=SchemaErrorKind.UNKNOWN_TYPE,
                type_name=value,
            )
        return found

    raise SchemaError(
        f"Invalid 'type' value {value!r}",
        kind=SchemaErrorKind.INVALID_TYPE_VALUE,
        type_name=repr(value),
    )


def contains_type_references(
    schema: Any, registry: Optional[SchemaRegistry] = None
) -> bool:
    """Check if any ``type`` field in *schema* still names a descriptor."""
    registry = registry or default_registry

    if isinstance(schema, list):
        return any(contains_type_references(item, registry) for item in schema)
    if not isinstance(schema, Mapping):
        return False

    for key, value in schema.items():
        if key == "type":
            candidates = value if isinstance(value, list) else [value]
            for candidate in candidates:
                if isinstance(candidate, type) or candidate in registry:
                    return True
                if isinstance(candidate, Mapping) and contains_type_references(
                    candidate, registry
                ):
                    return True
        elif contains_type_references(value, registry):
            return True
    return False


class _Resolver:
    """One resolution pass; holds the shared context and registry."""

    def __init__(self, context: RootContext, registry: SchemaRegistry):
        self.context = context
        self.registry = registry

    def node(self, value: Any, chain: Tuple[type, ...]) -> Any:
        if isinstance(value, Mapping):
            result: Dict[str, Any] = {}
            fragment: Optional[Dict[str, Any]] = None
            for key, item in value.items():
                if key != "type":
                    result[key] = self.node(item, chain)
                    continue
                descriptor = self.single_reference(item)
                if descriptor is None:
                    result[key] = self.type_field(item, chain)
                else:
                    fragment = self.expand(descriptor, chain)
            if fragment is None:
                return result
            # The node's own keywords (description, minItems...) win over the fragment's
            spliced = dict(fragment)
            spliced.update(result)
            return spliced
        if isinstance(value, list):
            return [self.node(item, chain) for item in value]
        return value

    def single_reference(self, value: Any) -> Optional[type]:
        """Descriptor named by a non-union ``type`` value, if any."""
        if isinstance(value, (list, Mapping)):
            return None
        return lookup_type_reference(value, self.registry)

    def type_field(self, value: Any, chain: Tuple[type, ...]) -> Any:
        # Union of types, e.g. ["string", "null"]
        if isinstance(value, list):
            return [self.type_field(item, chain) for item in value]
        # A property literally named "type"
        if isinstance(value, Mapping):
            return self.node(value, chain)

        descriptor = lookup_type_reference(value, self.registry)
        if descriptor is None:
            return value
        return self.expand(descriptor, chain)

    def expand(self, descriptor: type, chain: Tuple[type, ...]) -> Dict[str, Any]:
        if descriptor in chain:
            path = " -> ".join(t.__qualname__ for t in chain + (descriptor,))
            raise SchemaError(
                f"Cyclic type reference: {path}",
                kind=SchemaErrorKind.CYCLE,
                type_name=type_label(descriptor),
                schema_name=self.context.schema_name,
            )

        logger.debug(
            "Expanding %s for schema %r", descriptor.__qualname__, self.context.schema_name
        )
        fragment = descriptor.json_schema(self.context)
        if not isinstance(fragment, Mapping):
            raise SchemaError(
                f"{type_label(descriptor)}.json_schema() must return a mapping, "
                f"got {type(fragment).__name__}",
                kind=SchemaErrorKind.INVALID_FRAGMENT,
                type_name=type_label(descriptor),
                schema_name=self.context.schema_name,
            )
        return self.node(fragment, chain + (descriptor,))
