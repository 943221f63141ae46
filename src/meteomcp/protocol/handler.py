"""MessageHandler: turns one request line into one response line.

Each request goes through the same steps: parse the envelope, dispatch
on ``method``, serialize the reply. No state is carried between requests.
Failures inside a tool become error envelopes and never propagate.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from meteomcp.config import ServerSettings
from meteomcp.protocol.errors import ArgumentError, ToolExecutionError
from meteomcp.protocol.models import (
    GENERIC_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR_ID,
    Method,
    RequestEnvelope,
    ResponseEnvelope,
)
from meteomcp.protocol.registry import describe_validation_error
from meteomcp.utils.telemetry import (
    ATTR_RPC_METHOD,
    ATTR_TOOL_NAME,
    ATTR_TOOL_OUTCOME,
    get_tracer,
)

if TYPE_CHECKING:
    from meteomcp.protocol.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[RequestEnvelope], Awaitable[ResponseEnvelope]]


class MessageHandler:
    """Dispatches protocol requests against a sealed :class:`ToolRegistry`.

    Usage::

        handler = MessageHandler(build_registry(client), settings.mcp_server)
        reply = await handler.handle_line('{"id": "1", "method": "tools/list"}')
    """

    def __init__(self, registry: ToolRegistry, server: ServerSettings | None = None) -> None:
        self._registry = registry
        self._server = server or ServerSettings()
        self._methods: dict[Method, MethodHandler] = {
            Method.INITIALIZE: self._initialize,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
        }

    async def handle_line(self, line: str) -> str:
        """Parse, dispatch and serialize a single line of input."""
        try:
            request = RequestEnvelope.model_validate_json(line)
        except ValidationError as exc:
            problems = "; ".join(describe_validation_error(exc))
            logger.warning("Rejected unparseable request line: %s", problems)
            return ResponseEnvelope.failure(
                PARSE_ERROR_ID, GENERIC_ERROR, f"Parse error: {problems}"
            ).to_line()

        response = await self.handle(request)
        return response.to_line()

    async def handle(self, request: RequestEnvelope) -> ResponseEnvelope:
        """Dispatch an already-parsed request by method name."""
        try:
            method = Method(request.method)
        except ValueError:
            logger.warning("Unsupported method: %r", request.method)
            return ResponseEnvelope.failure(
                request.id, METHOD_NOT_FOUND, f"Unsupported method: {request.method}"
            )
        return await self._methods[method](request)

    async def _initialize(self, request: RequestEnvelope) -> ResponseEnvelope:
        return ResponseEnvelope.success(
            request.id,
            {
                "protocolVersion": self._server.protocol_version,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": self._server.name, "version": self._server.version},
            },
        )

    async def _tools_list(self, request: RequestEnvelope) -> ResponseEnvelope:
        tools = [descriptor.to_wire() for descriptor in self._registry.list_descriptors()]
        return ResponseEnvelope.success(request.id, {"tools": tools})

    async def _tools_call(self, request: RequestEnvelope) -> ResponseEnvelope:
        params = request.params if request.params is not None else {}
        if not isinstance(params, dict):
            return ResponseEnvelope.failure(
                request.id, GENERIC_ERROR, "Invalid params for tools/call: expected an object"
            )

        name = params.get("name")
        if not isinstance(name, str):
            return ResponseEnvelope.failure(
                request.id, GENERIC_ERROR, "Invalid params for tools/call: 'name' must be a string"
            )

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        thunk = self._registry.lookup(name)
        if thunk is None:
            logger.warning("Tool not found: %s", name)
            return ResponseEnvelope.failure(request.id, METHOD_NOT_FOUND, f"Tool not found: {name}")

        with _tracer.start_as_current_span("meteomcp.tools.call") as span:
            span.set_attribute(ATTR_RPC_METHOD, Method.TOOLS_CALL.value)
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                text = render_payload(await thunk(arguments))
            except ArgumentError as exc:
                logger.warning("%s", exc)
                span.set_attribute(ATTR_TOOL_OUTCOME, "invalid_arguments")
                return _execution_failure(request.id, name, exc)
            except Exception as exc:
                logger.exception("Error executing tool %s", name)
                span.set_attribute(ATTR_TOOL_OUTCOME, "error")
                return _execution_failure(request.id, name, exc)
            span.set_attribute(ATTR_TOOL_OUTCOME, "ok")

        return ResponseEnvelope.success(request.id, {"content": [{"type": "text", "text": text}]})


def render_payload(payload: Any) -> str:
    """Pretty-print a tool result as the ``text`` of a content item.

    Pydantic models are dumped by alias (camelCase); decoded JSON passes
    through with its keys untouched.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def _execution_failure(request_id: Any, name: str, exc: Exception) -> ResponseEnvelope:
    error = ToolExecutionError(name, str(exc))
    return ResponseEnvelope.failure(request_id, GENERIC_ERROR, str(error))
