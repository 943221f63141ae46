"""Protocol models: request/response envelopes and tool descriptors.

Implements the line-delimited message format spoken over stdio: one JSON
object per line in each direction, ``initialize`` / ``tools/list`` /
``tools/call`` methods, and MCP-shaped tool descriptors.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Error codes
GENERIC_ERROR = -1
METHOD_NOT_FOUND = -32601

# Response id used when a line could not be parsed into a request.
PARSE_ERROR_ID = "error"


class Method(StrEnum):
    """Protocol-level methods understood by the handler."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class RequestEnvelope(BaseModel):
    """One request line.

    ``id`` is kept exactly as sent, whatever its JSON type.
    """

    model_config = ConfigDict(extra="ignore")

    id: Any = None
    method: str = ""
    params: Any = None


class ErrorObject(BaseModel):
    code: int
    message: str


class ResponseEnvelope(BaseModel):
    """One response line. Exactly one of ``result`` / ``error`` is set."""

    jsonrpc: str = "2.0"
    id: Any = None
    result: dict[str, Any] | None = None
    error: ErrorObject | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> ResponseEnvelope:
        if (self.result is None) == (self.error is None):
            msg = "exactly one of 'result' or 'error' must be set"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, request_id: Any, result: dict[str, Any]) -> ResponseEnvelope:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, code: int, message: str) -> ResponseEnvelope:
        return cls(id=request_id, error=ErrorObject(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON shape, omitting whichever of result/error is unset."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        else:
            payload["result"] = self.result
        return payload

    def to_line(self) -> str:
        """Serialize to a single line of JSON (no trailing newline)."""
        return json.dumps(self.to_wire(), ensure_ascii=False, separators=(",", ":"), default=str)


# ---------------------------------------------------------------------------
# Tool advertisement
# ---------------------------------------------------------------------------


class ToolParam(BaseModel):
    """One advertised tool parameter."""

    name: str
    type: Literal["string", "integer"]
    description: str = ""
    required: bool = True


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    @classmethod
    def from_params(cls, name: str, description: str, params: list[ToolParam]) -> ToolDescriptor:
        """Build a descriptor whose ``inputSchema`` is a JSON Schema object."""
        properties = {p.name: {"type": p.type, "description": p.description} for p in params}
        required = [p.name for p in params if p.required]
        return cls(
            name=name,
            description=description,
            input_schema={"type": "object", "properties": properties, "required": required},
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
