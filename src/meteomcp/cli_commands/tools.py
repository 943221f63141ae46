"""``meteomcp tools``: inspect and invoke the weather tool catalogue."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from meteomcp.cli_commands._output import (
    console,
    load_settings_or_exit,
    print_json,
    print_tools_table,
)

if TYPE_CHECKING:
    from meteomcp.config import Settings
    from meteomcp.protocol.models import ResponseEnvelope

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML file.",
)


@click.group()
def tools() -> None:
    """Inspect and invoke weather tools."""


@tools.command("list")
@_config_option
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_tools(config_path: Path | None, as_json: bool) -> None:
    """List every tool with its arguments."""
    from meteomcp.operations.client import MeteoChileClient
    from meteomcp.protocol.catalogue import build_registry

    settings = load_settings_or_exit(config_path)
    # Listing never touches the network, so the client is not opened.
    registry = build_registry(MeteoChileClient(settings.meteochile))
    descriptors = registry.list_descriptors()

    if as_json:
        print_json({"tools": [d.to_wire() for d in descriptors]})
        return
    print_tools_table(descriptors)


@tools.command("call")
@click.argument("name")
@click.option(
    "--args",
    "raw_args",
    default="{}",
    help='Tool arguments as a JSON object, e.g. \'{"station_code": "330020"}\'.',
)
@_config_option
def call_tool(name: str, raw_args: str, config_path: Path | None) -> None:
    """Invoke tool NAME against the live MeteoChile service.

    Prints the response envelope exactly as the stdio server would send it.
    """
    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --args JSON:[/red] {exc}")
        sys.exit(1)

    settings = load_settings_or_exit(config_path)
    response = asyncio.run(_call(name, arguments, settings))

    print_json(response.to_wire())
    if response.error is not None:
        sys.exit(1)


async def _call(name: str, arguments: object, settings: Settings) -> ResponseEnvelope:
    from meteomcp.operations.client import MeteoChileClient
    from meteomcp.protocol.models import Method, RequestEnvelope
    from meteomcp.server import build_handler

    async with MeteoChileClient(settings.meteochile) as client:
        handler = build_handler(client, settings)
        request = RequestEnvelope(
            id="cli",
            method=Method.TOOLS_CALL,
            params={"name": name, "arguments": arguments},
        )
        return await handler.handle(request)
