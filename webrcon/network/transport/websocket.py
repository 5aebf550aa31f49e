"""WebSocket transport implementation."""

from __future__ import annotations

import logging
from typing import Optional

from websockets.asyncio.client import ClientConnection, connect

from webrcon.config import RconSettings
from webrcon.network.transport.base import BaseTransport

LOGGER = logging.getLogger(__name__)


class WebSocketTransport(BaseTransport):
    """WebSocket-based RCON transport."""

    def __init__(self, uri: str, settings: Optional[RconSettings] = None) -> None:
        self._uri = uri
        self._settings = settings or RconSettings()
        self._ws: Optional[ClientConnection] = None

    async def connect(self) -> None:
        LOGGER.info("Connecting to RCON WebSocket at %s", self._redacted_uri())
        self._ws = await connect(
            self._uri,
            open_timeout=self._settings.open_timeout_seconds,
            max_size=self._settings.max_frame_bytes,
        )

    async def send(self, payload: str) -> None:
        if not self._ws:
            raise RuntimeError("WebSocket transport not connected")
        LOGGER.debug("WebSocket send: %s", payload)
        await self._ws.send(payload)

    async def receive(self) -> str:
        if not self._ws:
            raise RuntimeError("WebSocket transport not connected")
        raw = await self._ws.recv()
        LOGGER.debug("WebSocket receive: %s", raw)
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return raw

    async def close(self) -> None:
        if self._ws:
            LOGGER.info("Closing WebSocket transport")
            ws = self._ws
            self._ws = None
            await ws.close()

    def _redacted_uri(self) -> str:
        # the password is the URI path
        head, _, _ = self._uri.rpartition("/")
        return f"{head}/***"
