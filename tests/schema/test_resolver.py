"""Tests for typedturn.schema.resolver."""

import pytest

from typedturn.examples import MathSolution, MathStep
from typedturn.examples.math_solution import QUICK_SCHEMA_NAME
from typedturn.schema import (
    RootContext,
    SchemaError,
    SchemaErrorKind,
    contains_type_references,
    resolve,
)
from typedturn.schema.resolver import lookup_type_reference


# ── Fixture types ────────────────────────────────────────────────────────────

class NotADescriptor:
    pass


class Leaf:
    @classmethod
    def json_schema(cls, root_context=None):
        return {"type": "string", "minLength": 1}

    @classmethod
    def from_response(cls, data):
        return cls()


class Wrapper:
    """Descriptor nesting Leaf via a union with null."""

    @classmethod
    def json_schema(cls, root_context=None):
        return {
            "type": "object",
            "properties": {"inner": {"type": [Leaf, "null"]}},
            "required": ["inner"],
        }

    @classmethod
    def from_response(cls, data):
        return cls()


class Echo:
    """Descriptor whose schema reports the context it was given."""

    seen = []

    @classmethod
    def json_schema(cls, root_context=None):
        cls.seen.append(root_context)
        return {"type": "string", "description": str(root_context.schema_name)}

    @classmethod
    def from_response(cls, data):
        return cls()


class Node:
    """Self-referencing descriptor (a tree)."""

    @classmethod
    def json_schema(cls, root_context=None):
        return {
            "type": "object",
            "properties": {"children": {"type": "array", "items": {"type": Node}}},
        }

    @classmethod
    def from_response(cls, data):
        return cls()


class Ping:
    @classmethod
    def json_schema(cls, root_context=None):
        return {"type": "object", "properties": {"pong": {"type": Pong}}}

    @classmethod
    def from_response(cls, data):
        return cls()


class Pong:
    @classmethod
    def json_schema(cls, root_context=None):
        return {"type": "object", "properties": {"ping": {"type": Ping}}}

    @classmethod
    def from_response(cls, data):
        return cls()


class BadFragment:
    @classmethod
    def json_schema(cls, root_context=None):
        return ["not", "a", "mapping"]

    @classmethod
    def from_response(cls, data):
        return cls()


# ═══════════════════════════════════════════════════════════════════════════════
# Expansion
# ═══════════════════════════════════════════════════════════════════════════════


class TestExpansion:

    def test_root_reference_expands(self, step_type):
        resolved = resolve({"type": step_type}, RootContext("step", True))
        assert resolved == {
            "type": "object",
            "properties": {"n": {"type": "integer"}},
            "required": ["n"],
        }
        assert not contains_type_references(resolved)

    def test_reference_replaces_node(self):
        resolved = resolve({"type": MathSolution}, RootContext("advanced_math_solution"))
        assert resolved["type"] == "object"
        assert resolved["properties"]["steps"]["items"]["type"] == "object"

    def test_sibling_keywords_laid_over_fragment(self, step_type):
        schema = {
            "type": "object",
            "properties": {
                "s": {"description": "a step", "type": step_type, "required": []},
            },
        }
        node = resolve(schema)["properties"]["s"]
        assert node == {
            "type": "object",
            "properties": {"n": {"type": "integer"}},
            "required": [],
            "description": "a step",
        }

    def test_leaves_pass_through(self):
        assert resolve("string") == "string"
        assert resolve(42) == 42
        assert resolve(None) is None

    def test_primitive_types_unchanged(self):
        schema = {
            "type": "object",
            "properties": {
                "a": {"type": "string"},
                "b": {"type": ["integer", "null"]},
            },
        }
        assert resolve(schema) == schema

    def test_nested_reference_in_items(self):
        resolved = resolve({"type": MathSolution}, RootContext("advanced_math_solution"))
        items = resolved["properties"]["steps"]["items"]
        assert items == MathStep.json_schema()
        assert "steps" in resolved["required"]

    def test_union_with_reference(self):
        resolved = resolve({"type": Wrapper})
        inner = resolved["properties"]["inner"]["type"]
        assert inner[0] == {"type": "string", "minLength": 1}
        assert inner[1] == "null"

    def test_reference_inside_list_of_schemas(self, step_type):
        resolved = resolve({"anyOf": [{"type": step_type}, {"type": "null"}]})
        assert resolved["anyOf"][0]["type"] == "object"
        assert resolved["anyOf"][1] == {"type": "null"}

    def test_property_named_type(self):
        schema = {
            "type": "object",
            "properties": {"type": {"type": "string"}},
        }
        assert resolve(schema) == schema

    def test_input_not_mutated(self, step_type):
        schema = {"type": "object", "properties": {"s": {"type": step_type}}}
        resolve(schema)
        assert schema["properties"]["s"]["type"] is step_type

    def test_key_order_preserved(self):
        schema = {"z": 1, "type": "object", "a": 2}
        assert list(resolve(schema)) == ["z", "type", "a"]

    def test_sibling_reuse_is_not_a_cycle(self, step_type):
        schema = {
            "type": "object",
            "properties": {"a": {"type": step_type}, "b": {"type": step_type}},
        }
        resolved = resolve(schema)
        assert resolved["properties"]["a"] == resolved["properties"]["b"]


# ═══════════════════════════════════════════════════════════════════════════════
# Context propagation
# ═══════════════════════════════════════════════════════════════════════════════


class TestContext:

    def test_context_reaches_nested_types(self):
        Echo.seen.clear()
        ctx = RootContext(schema_name="outer", strict=False)
        resolve({"type": "object", "properties": {"x": {"type": Echo}}}, ctx)
        assert Echo.seen == [ctx]

    def test_default_context_when_none(self):
        Echo.seen.clear()
        resolve({"type": Echo})
        assert Echo.seen == [RootContext()]

    def test_context_sensitivity_only_changes_steps(self):
        full = resolve({"type": MathSolution}, RootContext("advanced_math_solution"))
        quick = resolve({"type": MathSolution}, RootContext(QUICK_SCHEMA_NAME))

        assert "steps" in full["properties"]
        assert "steps" not in quick["properties"]
        assert full["required"] == quick["required"] + ["steps"]

        full_without_steps = dict(full)
        full_without_steps["properties"] = {
            k: v for k, v in full["properties"].items() if k != "steps"
        }
        full_without_steps["required"] = [r for r in full["required"] if r != "steps"]
        assert full_without_steps == quick


# ═══════════════════════════════════════════════════════════════════════════════
# Idempotence
# ═══════════════════════════════════════════════════════════════════════════════


class TestIdempotence:

    def test_resolving_twice_is_stable(self):
        once = resolve({"type": MathSolution}, RootContext("x"))
        twice = resolve(once, RootContext("x"))
        assert once == twice

    def test_contains_type_references(self, step_type):
        assert contains_type_references({"type": step_type})
        assert contains_type_references({"items": [{"type": ["null", step_type]}]})
        assert not contains_type_references({"type": "object"})


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class TestErrors:

    def test_class_not_implementing_contract(self):
        with pytest.raises(SchemaError, match="does not implement descriptor contract") as exc:
            resolve({"type": NotADescriptor})
        assert exc.value.kind is SchemaErrorKind.NOT_A_DESCRIPTOR
        assert "NotADescriptor" in exc.value.type_name

    def test_unknown_string_type(self):
        with pytest.raises(SchemaError, match="MathStepp") as exc:
            resolve({"type": "MathStepp"})
        assert exc.value.kind is SchemaErrorKind.UNKNOWN_TYPE

    def test_invalid_type_value(self):
        with pytest.raises(SchemaError) as exc:
            resolve({"type": 5})
        assert exc.value.kind is SchemaErrorKind.INVALID_TYPE_VALUE

    def test_direct_cycle(self):
        with pytest.raises(SchemaError, match="Node -> Node") as exc:
            resolve({"type": Node})
        assert exc.value.kind is SchemaErrorKind.CYCLE

    def test_indirect_cycle(self):
        with pytest.raises(SchemaError, match="Ping -> Pong -> Ping"):
            resolve({"type": Ping}, RootContext("loop"))

    def test_fragment_must_be_mapping(self):
        with pytest.raises(SchemaError, match="must return a mapping") as exc:
            resolve({"type": BadFragment})
        assert exc.value.kind is SchemaErrorKind.INVALID_FRAGMENT


class TestLookup:

    def test_registered_token(self, registry, step_type):
        registry.register("Step", step_type)
        assert lookup_type_reference("Step", registry) is step_type
        resolved = resolve({"type": "Step"}, registry=registry)
        assert resolved["properties"] == {"n": {"type": "integer"}}

    def test_primitive_returns_none(self):
        assert lookup_type_reference("integer") is None
