"""ToolRegistry: maps tool names to descriptors and invocation thunks.

The registry is populated once at startup, sealed, and only read afterwards.
Each tool declares a typed arguments model; that single declaration drives
both the advertised ``inputSchema`` and the decode step that runs before the
bound operation is called.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from meteomcp.protocol.errors import ArgumentError, DuplicateToolError, RegistrySealedError
from meteomcp.protocol.models import ToolDescriptor, ToolParam

if TYPE_CHECKING:
    from meteomcp.operations.provider import WeatherOperations

logger = logging.getLogger(__name__)

ToolThunk = Callable[[Any], Awaitable[Any]]

_JSON_TYPES: dict[Any, str] = {str: "string", int: "integer"}


class ToolArguments(BaseModel):
    """Base for per-tool argument models.

    Strict: ``"2024"`` is not an integer and ``7`` is not a string.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


ArgsT = TypeVar("ArgsT", bound=ToolArguments)


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    thunk: ToolThunk


class ToolRegistry:
    """Name-keyed dispatch table over one injected :class:`WeatherOperations`.

    Usage::

        registry = ToolRegistry(client)
        registry.register(
            "get_station_metadata",
            "Station metadata",
            StationArguments,
            lambda ops, args: ops.get_station_metadata(args.station_code),
        )
        registry.seal()

        thunk = registry.lookup("get_station_metadata")
        payload = await thunk({"station_code": "330020"})
    """

    def __init__(self, operations: WeatherOperations) -> None:
        self._operations = operations
        self._tools: dict[str, RegisteredTool] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(
        self,
        name: str,
        description: str,
        arguments: type[ArgsT],
        call: Callable[[WeatherOperations, ArgsT], Awaitable[Any]],
    ) -> ToolDescriptor:
        """Add a tool; fails fast on duplicates or after :meth:`seal`."""
        name = str(name)
        if self._sealed:
            raise RegistrySealedError(name)
        if name in self._tools:
            raise DuplicateToolError(name)

        descriptor = ToolDescriptor.from_params(name, description, params_from_model(arguments))
        self._tools[name] = RegisteredTool(
            descriptor=descriptor,
            thunk=self._bind(name, arguments, call),
        )
        return descriptor

    def seal(self) -> None:
        """Freeze the registry; later :meth:`register` calls raise."""
        self._sealed = True
        logger.debug("Tool registry sealed with %d tool(s)", len(self._tools))

    def lookup(self, name: str) -> ToolThunk | None:
        tool = self._tools.get(name)
        return tool.thunk if tool is not None else None

    def list_descriptors(self) -> list[ToolDescriptor]:
        """Return descriptors in registration order."""
        return [tool.descriptor for tool in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def _bind(
        self,
        name: str,
        arguments: type[ArgsT],
        call: Callable[[WeatherOperations, ArgsT], Awaitable[Any]],
    ) -> ToolThunk:
        operations = self._operations

        async def thunk(raw: Any) -> Any:
            decoded = decode_arguments(name, arguments, raw)
            return await call(operations, decoded)

        return thunk


def decode_arguments(name: str, model: type[ArgsT], raw: Any) -> ArgsT:
    """Validate raw call arguments against *model*.

    Raises:
        ArgumentError: listing every missing or mistyped field.
    """
    if not isinstance(raw, dict):
        raise ArgumentError(name, [f"arguments must be an object, got {type(raw).__name__}"])
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise ArgumentError(name, describe_validation_error(exc)) from exc


def params_from_model(model: type[ToolArguments]) -> list[ToolParam]:
    """Derive the advertised parameter list from an arguments model."""
    params: list[ToolParam] = []
    for field_name, info in model.model_fields.items():
        json_type = _JSON_TYPES.get(info.annotation)
        if json_type is None:
            msg = f"{model.__name__}.{field_name}: only str and int parameters are supported"
            raise TypeError(msg)
        params.append(
            ToolParam(
                name=field_name,
                type=json_type,  # type: ignore[arg-type]
                description=info.description or "",
                required=info.is_required(),
            )
        )
    return params


def describe_validation_error(exc: ValidationError) -> list[str]:
    """Flatten a pydantic error into ``"field: message"`` strings."""
    problems: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<root>"
        problems.append(f"{loc}: {err['msg']}")
    return problems
