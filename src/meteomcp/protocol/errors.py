"""Shared error types for the protocol gateway."""


class GatewayError(Exception):
    """Base error for all protocol-gateway failures."""


class DuplicateToolError(GatewayError):
    """A tool name was registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class RegistrySealedError(GatewayError):
    """Registration was attempted after the registry started serving requests."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot register tool {name}: registry is sealed")


class ArgumentError(GatewayError):
    """Tool arguments are missing or have the wrong type."""

    def __init__(self, name: str, problems: list[str]) -> None:
        self.name = name
        self.problems = problems
        super().__init__(f"Invalid arguments for {name}: " + "; ".join(problems))


class ToolExecutionError(GatewayError):
    """A tool invocation failed."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Error executing tool {name}" + (f": {detail}" if detail else ""))
