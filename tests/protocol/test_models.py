"""Tests for protocol envelopes and tool descriptors."""

import json

import pytest
from pydantic import ValidationError

from meteomcp.protocol.models import (
    GENERIC_ERROR,
    METHOD_NOT_FOUND,
    ErrorObject,
    RequestEnvelope,
    ResponseEnvelope,
    ToolDescriptor,
    ToolParam,
)


class TestRequestEnvelope:
    def test_defaults(self) -> None:
        req = RequestEnvelope.model_validate({})
        assert req.id is None
        assert req.method == ""
        assert req.params is None

    def test_extra_fields_ignored(self) -> None:
        req = RequestEnvelope.model_validate_json(
            '{"jsonrpc": "2.0", "id": "7", "method": "tools/list", "trace": {"x": 1}}'
        )
        assert req.id == "7"
        assert req.method == "tools/list"

    def test_id_kept_verbatim(self) -> None:
        req = RequestEnvelope.model_validate_json('{"id": 42, "method": "initialize"}')
        assert req.id == 42

    def test_non_string_method_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RequestEnvelope.model_validate_json('{"id": "1", "method": 5}')

    def test_invalid_json_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RequestEnvelope.model_validate_json("{not json")


class TestResponseEnvelope:
    def test_success(self) -> None:
        resp = ResponseEnvelope.success("1", {"tools": []})
        assert resp.result == {"tools": []}
        assert resp.error is None

    def test_failure(self) -> None:
        resp = ResponseEnvelope.failure("1", METHOD_NOT_FOUND, "nope")
        assert resp.error == ErrorObject(code=-32601, message="nope")
        assert resp.result is None

    def test_neither_outcome_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            ResponseEnvelope(id="1")

    def test_both_outcomes_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            ResponseEnvelope(
                id="1",
                result={"ok": True},
                error=ErrorObject(code=GENERIC_ERROR, message="x"),
            )

    def test_wire_shape_omits_error_on_success(self) -> None:
        wire = ResponseEnvelope.success("a", {"k": "v"}).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": "a", "result": {"k": "v"}}

    def test_wire_shape_omits_result_on_failure(self) -> None:
        wire = ResponseEnvelope.failure("a", GENERIC_ERROR, "boom").to_wire()
        assert wire == {"jsonrpc": "2.0", "id": "a", "error": {"code": -1, "message": "boom"}}

    def test_to_line_is_single_line_utf8(self) -> None:
        resp = ResponseEnvelope.success("1", {"text": "Año\nsiguiente"})
        line = resp.to_line()
        assert "\n" not in line
        assert "Año" in line
        assert json.loads(line)["result"]["text"] == "Año\nsiguiente"


class TestToolDescriptor:
    def test_from_params_builds_object_schema(self) -> None:
        descriptor = ToolDescriptor.from_params(
            "get_thing",
            "Get a thing",
            [
                ToolParam(name="station_code", type="string", description="Code"),
                ToolParam(name="year", type="integer", description="Year", required=False),
            ],
        )
        assert descriptor.input_schema == {
            "type": "object",
            "properties": {
                "station_code": {"type": "string", "description": "Code"},
                "year": {"type": "integer", "description": "Year"},
            },
            "required": ["station_code"],
        }

    def test_wire_uses_camel_case_alias(self) -> None:
        descriptor = ToolDescriptor.from_params("t", "d", [])
        wire = descriptor.to_wire()
        assert set(wire) == {"name", "description", "inputSchema"}
        assert wire["inputSchema"]["required"] == []

    def test_populate_by_alias(self) -> None:
        descriptor = ToolDescriptor.model_validate({"name": "t", "inputSchema": {"type": "object"}})
        assert descriptor.input_schema == {"type": "object"}
