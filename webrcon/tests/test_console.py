import asyncio
import io
import json
import threading

import pytest

from webrcon.config import RconSettings
from webrcon.console import run_console
from webrcon.network.transport.dummy import DummyTransport


class _EchoTransport(DummyTransport):
    def __init__(self) -> None:
        super().__init__()
        self.inbound = asyncio.Queue()
        self.sent = []

    async def send(self, payload: str) -> None:
        message = json.loads(payload)
        self.sent.append(message)
        reply = {"Identifier": message["Identifier"], "Message": f"echo {message['Message']}", "Type": "Generic"}
        self.inbound.put_nowait(json.dumps(reply))

    async def receive(self) -> str:
        item = await self.inbound.get()
        if isinstance(item, Exception):
            raise item
        return item


def _lines(*values):
    pending = list(values)

    def read_line():
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read_line


def _settings() -> RconSettings:
    return RconSettings(password="pw", command_timeout_seconds=1.0)


@pytest.mark.asyncio
async def test_console_prints_replies_until_quit():
    transport = _EchoTransport()
    out = io.StringIO()

    code = await run_console(
        _settings(),
        read_line=_lines("status", "", "playerlist", "quit", "never sent"),
        out=out,
        transport_factory=lambda uri, settings: transport,
    )

    assert code == 0
    assert [m["Message"] for m in transport.sent] == ["status", "playerlist"]
    text = out.getvalue()
    assert "[rcon] connected" in text
    assert "echo status" in text and "echo playerlist" in text
    assert text.rstrip().endswith("[rcon] disconnected")


@pytest.mark.asyncio
async def test_console_stops_on_eof():
    transport = _EchoTransport()

    code = await run_console(
        _settings(),
        read_line=_lines(),
        out=io.StringIO(),
        transport_factory=lambda uri, settings: transport,
    )

    assert code == 0
    assert transport.sent == []


@pytest.mark.asyncio
async def test_console_exits_when_server_drops():
    transport = _EchoTransport()
    gate = threading.Event()
    out = io.StringIO()

    def blocked_read_line():
        gate.wait(2.0)
        raise EOFError

    transport.inbound.put_nowait(ConnectionResetError("server restarting"))
    try:
        code = await run_console(
            _settings(),
            read_line=blocked_read_line,
            out=out,
            transport_factory=lambda uri, settings: transport,
        )
    finally:
        gate.set()

    assert code == 1
    assert "[rcon] disconnected" in out.getvalue()
