"""StdioTransport: the line-oriented read/dispatch/write loop.

Reads newline-delimited JSON from a text stream (stdin by default), hands
each line to a :class:`MessageHandler` and writes one reply line per request,
flushing after every write. Requests are processed strictly one at a time.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import TYPE_CHECKING, Any, TextIO

from meteomcp.protocol.models import GENERIC_ERROR, PARSE_ERROR_ID, ResponseEnvelope

if TYPE_CHECKING:
    from meteomcp.protocol.handler import MessageHandler

logger = logging.getLogger(__name__)

# Consecutive read failures after which the input is treated as unusable.
_MAX_READ_FAILURES = 3


class StdioTransport:
    """Serves one client over a pair of text streams until end of input.

    When the reader exposes a binary ``buffer`` (as ``sys.stdin`` does),
    lines are read as bytes and decoded as UTF-8 with invalid sequences
    replaced, so a malformed line still reaches the handler.
    """

    def __init__(
        self,
        handler: MessageHandler,
        reader: TextIO | None = None,
        writer: TextIO | None = None,
    ) -> None:
        self._handler = handler
        self._reader = reader if reader is not None else sys.stdin
        self._writer = writer if writer is not None else sys.stdout

    async def serve(self) -> None:
        """Run until the reader is exhausted (or keeps failing)."""
        logger.info("Stdio server started, waiting for requests")
        served = 0
        read_failures = 0
        while True:
            try:
                line = await self._next_line()
            except Exception as exc:
                read_failures += 1
                logger.exception("Error reading request line")
                self._write(_error_line(exc))
                if read_failures >= _MAX_READ_FAILURES:
                    logger.error("Input unreadable after %d attempts; stopping", read_failures)
                    break
                continue
            read_failures = 0

            if not line:
                break
            if not line.strip():
                continue

            try:
                reply = await self._handler.handle_line(line)
            except Exception as exc:
                logger.exception("Error processing request line")
                reply = _error_line(exc)

            self._write(reply)
            served += 1

        logger.info("Input closed after %d request(s); stdio server stopping", served)

    async def _next_line(self) -> str:
        """Read one line on a daemon thread.

        A blocked read never holds up interpreter shutdown, and cancelling
        the awaiting task returns immediately.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def read() -> None:
            try:
                outcome: tuple[str | None, BaseException | None] = (self._read_line(), None)
            except BaseException as exc:
                outcome = (None, exc)
            try:
                loop.call_soon_threadsafe(_settle, future, *outcome)
            except RuntimeError:
                pass  # loop already closed

        threading.Thread(target=read, name="meteomcp-stdin", daemon=True).start()
        return await future

    def _read_line(self) -> str:
        buffer = getattr(self._reader, "buffer", None)
        if buffer is None:
            return self._reader.readline()
        raw: bytes = buffer.readline()
        return raw.decode("utf-8", errors="replace")

    def _write(self, line: str) -> None:
        self._writer.write(line + "\n")
        self._writer.flush()


def _settle(future: asyncio.Future[Any], result: Any, error: BaseException | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


def _error_line(exc: Exception) -> str:
    return ResponseEnvelope.failure(PARSE_ERROR_ID, GENERIC_ERROR, str(exc)).to_line()
