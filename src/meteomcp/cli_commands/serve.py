"""``meteomcp serve``: run the stdio tool server, the REST API, or both."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from meteomcp.cli_commands._output import err_console, load_settings_or_exit
from meteomcp.utils.log import configure_logging


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML file (defaults to $METEOMCP_CONFIG, then built-in defaults).",
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http", "both"]),
    default="stdio",
    help="Which front end(s) to run.",
)
@click.option("--host", default=None, help="Override the REST bind host.")
@click.option("--port", type=int, default=None, help="Override the REST bind port.")
def serve(config_path: Path | None, transport: str, host: str | None, port: int | None) -> None:
    """Serve weather tools over stdin/stdout and/or the REST API.

    In stdio mode stdout carries only protocol frames; logs go to stderr.
    With ``--transport both`` the REST API keeps running after stdin closes,
    and stopping the REST API ends the stdio loop too.
    """
    from meteomcp.server import serve as run_server

    settings = load_settings_or_exit(config_path, out=err_console)

    overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
    if overrides:
        settings.http = settings.http.model_copy(update=overrides)

    configure_logging(settings.logging.level)

    if transport != "http":
        _utf8_stdio()

    try:
        asyncio.run(run_server(settings, transport))  # type: ignore[arg-type]
    except Exception as exc:
        err_console.print(f"[red]Server error:[/red] {exc}")
        sys.exit(1)


def _utf8_stdio() -> None:
    """Frames are UTF-8 regardless of the platform locale.

    Undecodable input bytes are replaced so a bad line still gets a reply.
    """
    for stream, errors in ((sys.stdin, "replace"), (sys.stdout, "strict")):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8", errors=errors)
