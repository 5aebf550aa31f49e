"""No-op transport for offline testing."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from webrcon.config import RconSettings
from webrcon.network.transport.base import BaseTransport

LOGGER = logging.getLogger(__name__)


class DummyTransport(BaseTransport):
    """Accepts every frame and never receives anything."""

    def __init__(self, uri: Optional[str] = None, settings: Optional[RconSettings] = None) -> None:
        self._uri = uri
        self._settings = settings

    async def connect(self) -> None:
        LOGGER.debug("Dummy transport connect()")

    async def send(self, payload: str) -> None:
        LOGGER.debug("Dummy transport send(): %s", payload)

    async def receive(self) -> str:
        LOGGER.debug("Dummy transport receive() (no-op)")
        await asyncio.sleep(3600)
        return ""

    async def close(self) -> None:
        LOGGER.debug("Dummy transport close()")
