"""Shared CLI output formatters and settings loading."""

from __future__ import annotations

import json
import sys
from pathlib import Path  # noqa: TC003
from typing import Any

from rich.console import Console
from rich.table import Table

from meteomcp.config import ConfigError, Settings, load_settings
from meteomcp.protocol.models import ToolDescriptor  # noqa: TC001

console = Console()
# Diagnostics for commands whose stdout carries protocol frames.
err_console = Console(stderr=True)


def load_settings_or_exit(path: Path | None, *, out: Console = console) -> Settings:
    """Load settings, printing the error and exiting with status 1 on failure."""
    try:
        return load_settings(path)
    except ConfigError as exc:
        out.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def print_tools_table(descriptors: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Weather Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")
    table.add_column("Description")

    for descriptor in descriptors:
        table.add_row(
            descriptor.name,
            _format_arguments(descriptor.input_schema),
            _truncate(descriptor.description),
        )

    console.print(table)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, ensure_ascii=False, default=str))


def _format_arguments(schema: dict[str, Any]) -> str:
    properties: dict[str, Any] = schema.get("properties", {})
    if not properties:
        return "-"
    required = set(schema.get("required", []))
    parts = []
    for name, prop in properties.items():
        suffix = "" if name in required else "?"
        parts.append(f"{name}{suffix}: {prop.get('type', '?')}")
    return ", ".join(parts)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
