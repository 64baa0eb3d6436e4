# src/typedturn/schema/pydantic_adapter.py
"""
Use Pydantic models as schema descriptors.

    class Person(BaseModel):
        name: str
        age: int

    PersonType = PydanticDescriptor.wrap(Person)
    ResponseFormat.json_schema({"type": PersonType}, name="person")
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from .contract import RootContext
from .errors import DecodeError, DecodeErrorKind, SchemaError, SchemaErrorKind


def is_pydantic(schema: Any) -> bool:
    """Check if type is a Pydantic BaseModel."""
    try:
        return isinstance(schema, type) and issubclass(schema, BaseModel)
    except TypeError:
        return False


class PydanticDescriptor:
    """Base of generated descriptor classes; see ``wrap``."""

    model: Type[BaseModel]

    # Per-process cache shared by all subclasses: one descriptor class per model,
    # kept for the life of the process so wrap() always returns the same class
    _wrapped: Dict[Type[BaseModel], type] = {}

    @classmethod
    def wrap(cls, model: Type[BaseModel]) -> type:
        """Return the descriptor class for *model* (one class per model)."""
        if not is_pydantic(model):
            raise TypeError(f"{model!r} is not a Pydantic model")
        descriptor = cls._wrapped.get(model)
        if descriptor is None:
            descriptor = type(
                f"{model.__name__}Descriptor",
                (cls,),
                {"model": model, "__module__": model.__module__},
            )
            cls._wrapped[model] = descriptor
        return descriptor

    @classmethod
    def json_schema(cls, root_context: Optional[RootContext] = None) -> Dict[str, Any]:
        strict = bool(root_context and root_context.strict)
        return clean_schema(cls.model.model_json_schema(), strict=strict)

    @classmethod
    def from_response(cls, data: Any) -> BaseModel:
        try:
            return cls.model.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            path = format_loc(first["loc"])
            kind = (
                DecodeErrorKind.MISSING_FIELD
                if first["type"] == "missing"
                else DecodeErrorKind.WRONG_TYPE
            )
            if len(first["loc"]) > 1:
                kind = DecodeErrorKind.NESTED_FAILURE
            raise DecodeError(
                first["msg"],
                kind=kind,
                path=path,
                type_name=cls.model.__name__,
                raw_output=data,
            ) from e


def format_loc(loc: tuple) -> str:
    """Render a pydantic error location as ``steps[2].result``."""
    if not loc:
        return "$"
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


def clean_schema(schema: Dict[str, Any], *, strict: bool = False) -> Dict[str, Any]:
    """Inline ``$defs`` and drop Pydantic metadata; tighten objects if *strict*."""
    schema = copy.deepcopy(schema)

    defs = schema.pop("$defs", {})
    if defs:
        schema = _inline_refs(schema, defs)

    for key in ["title", "$schema"]:
        schema.pop(key, None)

    if strict:
        schema = _strict_objects(schema)
    return schema


def _inline_refs(obj: Any, defs: Dict[str, Any], chain: Tuple[str, ...] = ()) -> Any:
    """
    Inline $ref references.

    Raises:
        SchemaError: CYCLE if a definition refers back to itself.
    """
    if isinstance(obj, dict):
        if "$ref" in obj:
            ref = obj["$ref"]
            if ref.startswith("#/$defs/"):
                name = ref.split("/")[-1]
                if name in chain:
                    path = " -> ".join(chain + (name,))
                    raise SchemaError(
                        f"Cyclic type reference: {path}",
                        kind=SchemaErrorKind.CYCLE,
                        type_name=name,
                    )
                if name in defs:
                    inlined = {k: v for k, v in defs[name].items() if k != "title"}
                    return _inline_refs(inlined, defs, chain + (name,))
        return {k: _inline_refs(v, defs, chain) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_inline_refs(item, defs, chain) for item in obj]
    return obj


def _strict_objects(obj: Any, in_properties: bool = False) -> Any:
    # in_properties: keys of obj are property names, not schema keywords
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if k == "title" and not in_properties:
                continue
            out[k] = _strict_objects(v, k == "properties" and not in_properties)
        if not in_properties and out.get("type") == "object" and "properties" in out:
            out["additionalProperties"] = False
            out["required"] = list(out["properties"].keys())
        return out
    if isinstance(obj, list):
        return [_strict_objects(item) for item in obj]
    return obj
