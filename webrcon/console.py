"""Interactive RCON console: type commands, see replies and server chatter."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import threading
from typing import Optional, Sequence, TextIO

from webrcon.config import RconSettings, get_settings
from webrcon.errors import CommandTimeout, RconError
from webrcon.models import ChatEvent, GenericFrame
from webrcon.network import RconConnection, RconObserver

LOGGER = logging.getLogger(__name__)
QUIT_COMMANDS = {"quit", "exit"}


class ConsolePrinter(RconObserver):
    """Writes unsolicited server output to a text stream."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self.closed = asyncio.Event()

    def on_connected(self) -> None:
        self.write("[rcon] connected")

    def on_message(self, frame: GenericFrame) -> None:
        prefix = f"[{frame.type.lower()}] " if frame.type else ""
        self.write(prefix + frame.message)

    def on_chat_message(self, event: ChatEvent) -> None:
        self.write(f"[chat:{event.channel}] {event.username}: {event.message}")

    def on_disconnected(self) -> None:
        self.write("[rcon] disconnected")
        self.closed.set()

    def write(self, line: str) -> None:
        self._out.write(line.rstrip("\n") + "\n")
        self._out.flush()


def _start_line_reader(loop: asyncio.AbstractEventLoop, lines: "asyncio.Queue[Optional[str]]", read_line) -> None:
    """Feed stdin lines into ``lines`` from a daemon thread; ``None`` marks EOF."""

    def _pump() -> None:
        while True:
            try:
                line: Optional[str] = read_line()
            except EOFError:
                line = None
            try:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            except RuntimeError:
                return  # loop already closed
            if line is None:
                return

    threading.Thread(target=_pump, name="rcon-stdin", daemon=True).start()


async def run_console(
    settings: RconSettings,
    *,
    read_line=input,
    out: TextIO = sys.stdout,
    transport_factory=None,
) -> int:
    """Run the read-eval-print loop until EOF, a quit command, or disconnect."""

    printer = ConsolePrinter(out)
    connection = RconConnection.from_settings(settings, observer=printer, transport_factory=transport_factory)
    await connection.connect()
    lines: asyncio.Queue[Optional[str]] = asyncio.Queue()
    _start_line_reader(asyncio.get_running_loop(), lines, read_line)
    closed = asyncio.ensure_future(printer.closed.wait())
    try:
        while True:
            next_line = asyncio.ensure_future(lines.get())
            await asyncio.wait({next_line, closed}, return_when=asyncio.FIRST_COMPLETED)
            if not next_line.done():
                next_line.cancel()
                return 1
            line = next_line.result()
            if line is None:
                break
            line = line.strip()
            if not line:
                continue
            if line.lower() in QUIT_COMMANDS:
                break
            try:
                reply = await connection.send_command(line)
            except CommandTimeout as exc:
                printer.write(f"[rcon error] {exc}")
                continue
            except RconError as exc:
                printer.write(f"[rcon error] {exc}")
                return 1
            printer.write(reply.message)
    finally:
        closed.cancel()
        if connection.connected:
            await connection.disconnect()
    return 0


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Interactive WebRCON console")
    ap.add_argument("--address", help="server IP address")
    ap.add_argument("--port", type=int, help="RCON port")
    ap.add_argument("--password", help="RCON password")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    overrides = {
        key: value
        for key, value in (
            ("address", args.address),
            ("port", args.port),
            ("password", args.password),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    settings = get_settings().model_copy(update=overrides) if overrides else get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        return asyncio.run(run_console(settings))
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("RCON console failed: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
