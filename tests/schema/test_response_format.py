"""Tests for typedturn.schema.response_format."""

import json

import pytest

from typedturn.examples import MathSolution, MathStep
from typedturn.schema import (
    LogicError,
    LogicErrorKind,
    ResponseFormat,
    ResponseFormatType,
    RootContext,
    SchemaError,
    SchemaErrorKind,
)


class TestConstruction:

    def test_json_schema_defaults(self, step_type):
        fmt = ResponseFormat.json_schema({"type": step_type}, name="step")
        assert fmt.type is ResponseFormatType.JSON_SCHEMA
        assert fmt.name == "step"
        assert fmt.strict is True
        assert fmt.is_structured

    def test_text(self):
        fmt = ResponseFormat.text()
        assert fmt.type is ResponseFormatType.TEXT
        assert fmt.schema is None
        assert not fmt.is_structured

    def test_type_given_as_string(self):
        fmt = ResponseFormat(type="text")
        assert fmt.type is ResponseFormatType.TEXT

    def test_invalid_type(self):
        with pytest.raises(SchemaError, match="Invalid response format type") as exc:
            ResponseFormat(type="xml")
        assert exc.value.kind is SchemaErrorKind.INVALID_FORMAT_TYPE

    def test_empty_schema_rejected(self):
        with pytest.raises(SchemaError, match="Schema must not be empty") as exc:
            ResponseFormat.json_schema({}, name="x")
        assert exc.value.kind is SchemaErrorKind.EMPTY_SCHEMA
        assert exc.value.schema_name == "x"

    def test_non_mapping_schema_rejected(self):
        with pytest.raises(SchemaError) as exc:
            ResponseFormat.json_schema(["type", "object"])
        assert exc.value.kind is SchemaErrorKind.INVALID_FRAGMENT

    def test_frozen(self, step_type):
        fmt = ResponseFormat.json_schema({"type": step_type})
        with pytest.raises(AttributeError):
            fmt.name = "other"

    def test_caller_schema_copied(self, step_type):
        schema = {"type": "object", "properties": {"s": {"type": step_type}}}
        fmt = ResponseFormat.json_schema(schema)
        schema["properties"]["extra"] = {"type": "string"}
        assert "extra" not in fmt.schema["properties"]

    def test_root_context(self):
        fmt = ResponseFormat.json_schema({"type": "object"}, name="n", strict=False)
        assert fmt.root_context() == RootContext(schema_name="n", strict=False)


class TestSerialization:

    def test_to_dict_structured(self, math_format):
        data = math_format.to_dict()
        assert list(data) == ["type", "name", "strict", "schema"]
        assert data["type"] == "json_schema"
        assert data["name"] == "advanced_math_solution"
        assert data["strict"] is True
        assert data["schema"]["properties"]["steps"]["items"] == MathStep.json_schema()

    def test_to_dict_text(self):
        assert ResponseFormat.text().to_dict() == {"type": "text"}

    def test_resolved_schema_is_fresh_each_call(self, math_format):
        first = math_format.resolved_schema()
        first["properties"].clear()
        assert math_format.resolved_schema()["properties"]

    def test_schema_to_json_string(self, math_format):
        text = math_format.schema_to_json_string()
        assert json.loads(text) == math_format.resolved_schema()
        assert "\n  " in text
        assert text == math_format.schema_to_json_string()

    def test_schema_to_json_string_keeps_unicode(self):
        fmt = ResponseFormat.json_schema({"type": "string", "description": "Lösung"})
        assert "Lösung" in fmt.schema_to_json_string(indent=None)

    def test_schema_name_drives_resolution(self):
        quick = ResponseFormat.json_schema({"type": MathSolution}, name="quick_math_solution")
        assert "steps" not in quick.resolved_schema()["properties"]

    @pytest.mark.parametrize("method", ["resolved_schema", "schema_to_json_string"])
    def test_text_format_has_no_schema(self, method):
        with pytest.raises(LogicError) as exc:
            getattr(ResponseFormat.text(), method)()
        assert exc.value.kind is LogicErrorKind.WRONG_FORMAT_KIND

    def test_registry_used_for_tokens(self, registry, step_type):
        registry.register("Step", step_type)
        fmt = ResponseFormat.json_schema({"type": "Step"}, registry=registry)
        assert fmt.resolved_schema()["required"] == ["n"]
