"""Public RCON session facade: connect, issue commands, disconnect."""

from __future__ import annotations

import ipaddress
import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

from webrcon.config import RconSettings
from webrcon.errors import AlreadyConnected, InvalidConfiguration, NotConnected, SendFailure
from webrcon.models import UNSOLICITED_IDENTIFIER, CommandFrame, GenericFrame, encode_command
from webrcon.network.correlation import CorrelationTable
from webrcon.network.observer import CallbackObserver, Hook, RconObserver, notify
from webrcon.network.reader import ReaderLoop
from webrcon.network.router import Router
from webrcon.network.transport.base import BaseTransport
from webrcon.network.transport.dummy import DummyTransport
from webrcon.network.transport.websocket import WebSocketTransport

LOGGER = logging.getLogger(__name__)

TransportFactory = Callable[[str, RconSettings], BaseTransport]


def default_transport_factory(uri: str, settings: RconSettings) -> BaseTransport:
    if settings.transport == "dummy":
        return DummyTransport(uri, settings)
    return WebSocketTransport(uri, settings)


def validate_endpoint(address: str, port: int, password: str) -> None:
    """Raise :class:`InvalidConfiguration` naming the first unusable field."""

    try:
        if not isinstance(address, str):
            raise ValueError(address)
        ipaddress.ip_address(address)
    except ValueError:
        raise InvalidConfiguration("address", f"invalid IP address {address!r}") from None
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        raise InvalidConfiguration("port", f"invalid port number {port!r}")
    if not password:
        raise InvalidConfiguration("password", "password cannot be empty")


class RconConnection:
    """One logical RCON session over a single long-lived transport.

    Construction only validates its arguments; :meth:`connect` dials the
    server and starts the reader. There is no reconnection: once the
    transport fails the session is detached and every pending command
    fails with :class:`~webrcon.errors.ConnectionClosed`.
    """

    def __init__(
        self,
        address: str,
        port: int,
        password: str,
        *,
        observer: Optional[RconObserver] = None,
        on_connected: Optional[Hook] = None,
        on_message: Optional[Hook] = None,
        on_chat_message: Optional[Hook] = None,
        on_disconnected: Optional[Hook] = None,
        settings: Optional[RconSettings] = None,
        transport_factory: Optional[TransportFactory] = None,
    ) -> None:
        validate_endpoint(address, port, password)
        if observer is not None and any((on_connected, on_message, on_chat_message, on_disconnected)):
            raise ValueError("pass either an observer or individual callbacks, not both")
        self.address = address
        self.port = port
        self.password = password
        self.observer: RconObserver = observer or CallbackObserver(
            connected=on_connected,
            message=on_message,
            chat_message=on_chat_message,
            disconnected=on_disconnected,
        )
        # defaults only; env and config files are read by get_settings()
        self.settings = settings or RconSettings.model_construct()
        self._transport_factory = transport_factory or default_transport_factory
        self._transport: Optional[BaseTransport] = None
        self._closing = False
        self._table = CorrelationTable(self.settings.identifier_min, self.settings.identifier_max)
        self._reader = ReaderLoop(
            Router(self._table, self.observer),
            self._on_reader_terminated,
            serialize_dispatch=self.settings.serialize_dispatch,
        )

    @classmethod
    def from_settings(cls, settings: RconSettings, **kwargs: Any) -> "RconConnection":
        return cls(settings.address, settings.port, settings.password, settings=settings, **kwargs)

    def __repr__(self) -> str:
        state = "connected" if self.connected else "detached"
        return f"<RconConnection {self.address}:{self.port} {state}>"

    @property
    def connected(self) -> bool:
        return self._transport is not None and not self._closing

    @property
    def pending(self) -> int:
        """Number of commands currently awaiting a reply."""

        return len(self._table)

    def build_uri(self) -> str:
        host = self.address
        if ipaddress.ip_address(host).version == 6:
            host = f"[{host}]"
        return f"{self.settings.scheme}://{host}:{self.port}/{quote(self.password, safe='/')}"

    async def connect(self) -> None:
        validate_endpoint(self.address, self.port, self.password)
        if self._transport is not None:
            raise AlreadyConnected(f"already connected to {self.address}:{self.port}")

        transport = self._transport_factory(self.build_uri(), self.settings)
        await transport.connect()

        self._transport = transport
        self._closing = False
        LOGGER.info("RCON session connected to %s:%s", self.address, self.port)
        await notify(self.observer.on_connected)
        self._reader.start(transport)

    async def send_command(self, command: str) -> GenericFrame:
        """Send ``command`` and return the server's correlated reply."""

        transport = self._require_transport()
        slot = await self._table.reserve()
        try:
            payload = encode_command(CommandFrame(identifier=slot.identifier, message=command))
            try:
                await transport.send(payload)
            except Exception as exc:
                raise SendFailure(f"failed to send command {slot.identifier}: {exc}") from exc
        except BaseException:
            await self._table.discard(slot)
            raise
        LOGGER.debug("Sent command %s: %s", slot.identifier, command)
        return await self._table.wait(slot, self.settings.command_timeout_seconds)

    async def send_command_nowait(self, command: str) -> None:
        """Send ``command`` without correlation.

        Any output the server produces arrives through ``on_message``.
        """

        transport = self._require_transport()
        payload = encode_command(CommandFrame(identifier=UNSOLICITED_IDENTIFIER, message=command))
        try:
            await transport.send(payload)
        except Exception as exc:
            raise SendFailure(f"failed to send command: {exc}") from exc

    async def disconnect(self) -> None:
        if self._transport is None or self._closing:
            raise NotConnected()
        await self._teardown(None, explicit=True)

    async def _on_reader_terminated(self, exc: Exception) -> None:
        if self._transport is None or self._closing:
            return
        LOGGER.warning("RCON session to %s:%s lost: %s", self.address, self.port, exc)
        await self._teardown(exc, explicit=False)

    async def _teardown(self, reason: Optional[Exception], *, explicit: bool) -> None:
        self._closing = True
        transport = self._transport
        await self._table.drain(reason)
        await self._reader.stop()
        close_error: Optional[Exception] = None
        try:
            if transport is not None:
                await transport.close()
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Error closing RCON transport: %s", exc)
            close_error = exc
        finally:
            self._transport = None
            self._closing = False
        LOGGER.info("RCON session disconnected from %s:%s", self.address, self.port)
        await notify(self.observer.on_disconnected)
        if explicit and close_error is not None:
            raise close_error

    def _require_transport(self) -> BaseTransport:
        if self._transport is None or self._closing:
            raise NotConnected()
        return self._transport
