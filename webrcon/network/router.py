"""Classification of inbound frames into replies, chat and generic events."""

from __future__ import annotations

import logging
from typing import Union

from webrcon.errors import DecodeFailure
from webrcon.models import decode_chat, decode_frame
from webrcon.network.correlation import CorrelationTable
from webrcon.network.observer import RconObserver, notify

LOGGER = logging.getLogger(__name__)


class Router:
    """Routes one raw frame to its waiting command or to the observer."""

    def __init__(self, table: CorrelationTable, observer: RconObserver) -> None:
        self._table = table
        self._observer = observer

    async def route(self, raw: Union[str, bytes]) -> None:
        try:
            frame = decode_frame(raw)
        except DecodeFailure as exc:
            LOGGER.warning("Dropping undecodable frame: %s", exc)
            return

        if not frame.is_unsolicited and await self._table.deliver(frame.identifier, frame):
            LOGGER.debug("Delivered reply for command %s", frame.identifier)
            return

        if frame.is_chat:
            try:
                event = decode_chat(frame)
            except DecodeFailure as exc:
                LOGGER.warning("Dropping chat frame with bad payload: %s", exc)
                return
            await notify(self._observer.on_chat_message, event)
            return

        await notify(self._observer.on_message, frame)
