"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import meteomcp

    assert meteomcp.__version__ == "1.0.0"


def test_cli_entrypoint() -> None:
    from meteomcp.cli import main

    assert callable(main)
    assert set(main.commands) == {"serve", "tools"}


def test_public_imports() -> None:
    from meteomcp.operations import MeteoChileClient, OperationError, WeatherOperations
    from meteomcp.protocol import MessageHandler, StdioTransport, ToolRegistry
    from meteomcp.rest import create_app

    assert MeteoChileClient is not None
    assert OperationError is not None
    assert WeatherOperations is not None
    assert MessageHandler is not None
    assert StdioTransport is not None
    assert ToolRegistry is not None
    assert create_app is not None
