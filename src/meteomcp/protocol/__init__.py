"""Protocol gateway: stdio tool server over line-delimited JSON."""

from meteomcp.protocol.catalogue import CATALOGUE, ToolName, build_registry
from meteomcp.protocol.errors import (
    ArgumentError,
    DuplicateToolError,
    GatewayError,
    RegistrySealedError,
    ToolExecutionError,
)
from meteomcp.protocol.handler import MessageHandler
from meteomcp.protocol.models import (
    GENERIC_ERROR,
    METHOD_NOT_FOUND,
    ErrorObject,
    Method,
    RequestEnvelope,
    ResponseEnvelope,
    ToolDescriptor,
    ToolParam,
)
from meteomcp.protocol.registry import ToolArguments, ToolRegistry
from meteomcp.protocol.transport import StdioTransport

__all__ = [
    "CATALOGUE",
    "GENERIC_ERROR",
    "METHOD_NOT_FOUND",
    "ArgumentError",
    "DuplicateToolError",
    "ErrorObject",
    "GatewayError",
    "MessageHandler",
    "Method",
    "RegistrySealedError",
    "RequestEnvelope",
    "ResponseEnvelope",
    "StdioTransport",
    "ToolArguments",
    "ToolDescriptor",
    "ToolExecutionError",
    "ToolName",
    "ToolParam",
    "ToolRegistry",
    "build_registry",
]
