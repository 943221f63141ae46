"""Process wiring for the two front ends.

Opens one :class:`MeteoChileClient`, builds the registry once, and runs the
stdio loop, the REST API, or both on the same event loop.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Literal, TextIO

import uvicorn

from meteomcp.operations.client import MeteoChileClient
from meteomcp.protocol.catalogue import build_registry
from meteomcp.protocol.handler import MessageHandler
from meteomcp.protocol.transport import StdioTransport
from meteomcp.rest.app import create_app
from meteomcp.utils.telemetry import configure_telemetry

if TYPE_CHECKING:
    from meteomcp.config import Settings
    from meteomcp.operations.provider import WeatherOperations

logger = logging.getLogger(__name__)

TransportMode = Literal["stdio", "http", "both"]


def build_handler(operations: WeatherOperations, settings: Settings) -> MessageHandler:
    """Build the sealed registry and the handler around it."""
    return MessageHandler(build_registry(operations), settings.mcp_server)


async def serve(
    settings: Settings,
    mode: TransportMode = "stdio",
    *,
    reader: TextIO | None = None,
    writer: TextIO | None = None,
) -> None:
    """Run the selected front end(s) until they stop."""
    if settings.telemetry.enabled:
        configure_telemetry(otlp_endpoint=settings.telemetry.otlp_endpoint)

    async with MeteoChileClient(settings.meteochile) as client:
        if mode == "stdio":
            await StdioTransport(build_handler(client, settings), reader, writer).serve()
            return

        stdio: asyncio.Task[None] | None = None
        if mode == "both":
            transport = StdioTransport(build_handler(client, settings), reader, writer)
            stdio = asyncio.create_task(transport.serve(), name="meteomcp-stdio")

        try:
            await _http_server(client, settings).serve()
        finally:
            # The stdio loop lives only as long as the REST API in "both" mode.
            if stdio is not None:
                await _stop(stdio)


async def _stop(task: asyncio.Task[None]) -> None:
    if task.done():
        if not task.cancelled() and task.exception() is not None:
            logger.error("Stdio server failed: %s", task.exception())
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


def _http_server(operations: WeatherOperations, settings: Settings) -> uvicorn.Server:
    app = create_app(operations, settings)
    config = uvicorn.Config(
        app,
        host=settings.http.host,
        port=settings.http.port,
        log_config=None,
        access_log=False,
    )
    logger.info("REST API listening on http://%s:%d", settings.http.host, settings.http.port)
    return uvicorn.Server(config)
