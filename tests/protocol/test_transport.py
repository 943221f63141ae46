"""Tests for the stdio read/dispatch/write loop."""

import io
import json
from unittest.mock import AsyncMock, MagicMock

from meteomcp.protocol.handler import MessageHandler
from meteomcp.protocol.transport import StdioTransport


class _FlushCountingWriter(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


def _replies(writer: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in writer.getvalue().splitlines()]


async def test_one_reply_per_request_in_order(handler: MessageHandler) -> None:
    reader = io.StringIO(
        '{"id": "1", "method": "initialize"}\n'
        '{"id": "2", "method": "tools/list"}\n'
        '{"id": "3", "method": "ping"}\n'
    )
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    replies = _replies(writer)
    assert [r["id"] for r in replies] == ["1", "2", "3"]
    assert "result" in replies[0]
    assert len(replies[1]["result"]["tools"]) == 15
    assert replies[2]["error"]["code"] == -32601


async def test_blank_lines_skipped(handler: MessageHandler) -> None:
    reader = io.StringIO('\n   \n{"id": "1", "method": "initialize"}\n\n')
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    assert len(_replies(writer)) == 1


async def test_last_line_without_newline_is_served(handler: MessageHandler) -> None:
    reader = io.StringIO('{"id": "1", "method": "initialize"}')
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    assert _replies(writer)[0]["id"] == "1"


async def test_empty_input_terminates_without_output(handler: MessageHandler) -> None:
    writer = io.StringIO()
    await StdioTransport(handler, io.StringIO(""), writer).serve()
    assert writer.getvalue() == ""


async def test_flushes_after_every_reply(handler: MessageHandler) -> None:
    reader = io.StringIO('{"id": "1", "method": "initialize"}\n{"id": "2", "method": "x"}\n')
    writer = _FlushCountingWriter()

    await StdioTransport(handler, reader, writer).serve()

    assert writer.flushes == 2


async def test_parse_error_does_not_stop_loop(handler: MessageHandler) -> None:
    reader = io.StringIO('not json\n{"id": "2", "method": "initialize"}\n')
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    replies = _replies(writer)
    assert replies[0]["id"] == "error"
    assert replies[1]["id"] == "2"


async def test_handler_crash_becomes_error_envelope() -> None:
    handler = MagicMock(spec=MessageHandler)
    handler.handle_line = AsyncMock(
        side_effect=[RuntimeError("unexpected"), '{"jsonrpc":"2.0","id":"2","result":{}}']
    )
    reader = io.StringIO("first\nsecond\n")
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    replies = _replies(writer)
    assert replies[0] == {
        "jsonrpc": "2.0",
        "id": "error",
        "error": {"code": -1, "message": "unexpected"},
    }
    assert replies[1]["id"] == "2"


async def test_invalid_utf8_line_gets_reply_and_loop_continues(handler: MessageHandler) -> None:
    raw = b'\xff\xfe garbage\n{"id": "2", "method": "initialize"}\n'
    reader = io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8")
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    replies = _replies(writer)
    assert len(replies) == 2
    assert replies[0]["id"] == "error"
    assert replies[0]["error"]["code"] == -1
    assert replies[1]["id"] == "2"
    assert "result" in replies[1]


async def test_utf8_payload_read_from_binary_buffer(
    operations: MagicMock, handler: MessageHandler
) -> None:
    operations.get_station_metadata.return_value = {"nombre": "Punta Arenas"}
    line = '{"id": "ñ", "method": "tools/call", "params": {"name": "get_station_metadata", '
    line += '"arguments": {"station_code": "520006"}}}\n'
    reader = io.TextIOWrapper(io.BytesIO(line.encode("utf-8")), encoding="utf-8")
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()

    (reply,) = _replies(writer)
    assert reply["id"] == "ñ"
    operations.get_station_metadata.assert_awaited_once_with("520006")


class _FlakyReader:
    """Text reader whose ``readline`` plays back lines or raises."""

    def __init__(self, *steps: str | Exception) -> None:
        self._steps = list(steps)

    def readline(self) -> str:
        if not self._steps:
            return ""
        step = self._steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


async def test_read_failure_gets_reply_and_loop_continues(handler: MessageHandler) -> None:
    reader = _FlakyReader(OSError("read interrupted"), '{"id": "2", "method": "initialize"}\n')
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()  # type: ignore[arg-type]

    replies = _replies(writer)
    assert replies[0] == {
        "jsonrpc": "2.0",
        "id": "error",
        "error": {"code": -1, "message": "read interrupted"},
    }
    assert replies[1]["id"] == "2"


async def test_persistent_read_failure_stops_loop(handler: MessageHandler) -> None:
    reader = _FlakyReader(*[OSError("bad fd")] * 10)
    writer = io.StringIO()

    await StdioTransport(handler, reader, writer).serve()  # type: ignore[arg-type]

    replies = _replies(writer)
    assert len(replies) == 3
    assert all(r["id"] == "error" for r in replies)
