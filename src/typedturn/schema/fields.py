# src/typedturn/schema/fields.py
"""
Helpers for writing ``from_response`` implementations.

They check presence and primitive kind of decoded JSON values and wrap
failures of nested descriptors with the outer field/index, so the path of
the first invalid value is always visible in the top-level error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .errors import DecodeError, DecodeErrorKind

_MISSING = object()

_KIND_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "array": lambda v: isinstance(v, list),
    "object": lambda v: isinstance(v, Mapping),
}


def _check_kind(value: Any, name: str, kind: str, type_name: Optional[str]) -> Any:
    check = _KIND_CHECKS.get(kind)
    if check is None:
        raise ValueError(f"Unknown primitive kind: {kind}")
    if not check(value):
        raise DecodeError(
            f"field '{name}' must be {kind}, got {_json_kind(value)}",
            kind=DecodeErrorKind.WRONG_TYPE,
            path=name,
            type_name=type_name,
            raw_output=value,
        )
    return value


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def expect_object(data: Any, *, type_name: Optional[str] = None) -> Mapping[str, Any]:
    """Ensure the payload handed to ``from_response`` is a JSON object."""
    if not isinstance(data, Mapping):
        raise DecodeError(
            f"expected object, got {_json_kind(data)}",
            kind=DecodeErrorKind.WRONG_TYPE,
            path="$",
            type_name=type_name,
            raw_output=data,
        )
    return data


def require(
    data: Mapping[str, Any],
    name: str,
    kind: str,
    *,
    type_name: Optional[str] = None,
) -> Any:
    """
    Return ``data[name]`` after checking it is present and of *kind*.

    Raises:
        DecodeError: MISSING_FIELD if absent or null, WRONG_TYPE otherwise.
    """
    value = data.get(name, _MISSING)
    if value is _MISSING or value is None:
        raise DecodeError(
            f"missing required field '{name}'",
            kind=DecodeErrorKind.MISSING_FIELD,
            path=name,
            type_name=type_name,
        )
    return _check_kind(value, name, kind, type_name)


def optional(
    data: Mapping[str, Any],
    name: str,
    kind: str,
    default: Any = None,
    *,
    type_name: Optional[str] = None,
) -> Any:
    """Like ``require`` but an absent or null field yields *default*."""
    value = data.get(name)
    if value is None:
        return default
    return _check_kind(value, name, kind, type_name)


def nest(error: DecodeError, prefix: str, *, type_name: Optional[str] = None) -> DecodeError:
    """Re-wrap *error* so its path starts with *prefix*."""
    if error.path == "$":
        path = prefix
    elif error.path.startswith("["):
        path = f"{prefix}{error.path}"
    else:
        path = f"{prefix}.{error.path}"
    return DecodeError(
        f"error in {prefix}: {error.detail}",
        kind=DecodeErrorKind.NESTED_FAILURE,
        path=path,
        type_name=type_name,
        raw_output=error.raw_output,
    )


def hydrate_object(
    data: Mapping[str, Any],
    name: str,
    item_type: Any,
    *,
    required: bool = True,
    type_name: Optional[str] = None,
) -> Any:
    """Build a nested descriptor instance from ``data[name]``."""
    if required:
        value = require(data, name, "object", type_name=type_name)
    else:
        value = optional(data, name, "object", type_name=type_name)
        if value is None:
            return None
    try:
        return item_type.from_response(value)
    except DecodeError as e:
        raise nest(e, name, type_name=type_name) from e


def hydrate_list(
    data: Mapping[str, Any],
    name: str,
    item_type: Any,
    *,
    required: bool = True,
    type_name: Optional[str] = None,
) -> List[Any]:
    """
    Build a list of descriptor instances from the array ``data[name]``.

    A failure at index *i* is reported as ``name[i]`` plus the inner path.
    """
    if required:
        items = require(data, name, "array", type_name=type_name)
    else:
        items = optional(data, name, "array", default=[], type_name=type_name)

    result: List[Any] = []
    for index, item in enumerate(items):
        try:
            result.append(item_type.from_response(item))
        except DecodeError as e:
            raise nest(e, f"{name}[{index}]", type_name=type_name) from e
    return result


def to_data(value: Any) -> Any:
    """
    Convert a descriptor instance graph back to JSON-ready data.

    Objects with ``to_response()`` are converted through it; lists and dicts
    are walked recursively.
    """
    if hasattr(value, "to_response"):
        return to_data(value.to_response())
    if isinstance(value, list):
        return [to_data(v) for v in value]
    if isinstance(value, Mapping):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            out[k] = to_data(v)
        return out
    return value
