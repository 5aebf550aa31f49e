"""Correlation of outbound commands with their inbound replies.

Every command that expects a reply holds a :class:`Slot` keyed by a small
integer identifier. The reader side hands replies to the table with
:meth:`CorrelationTable.deliver`; the command side parks on
:meth:`CorrelationTable.wait`. A slot lives until whichever comes first of
delivery, timeout, discard, or :meth:`CorrelationTable.drain`.

Identifier ``0`` is reserved for unsolicited frames and is never handed out.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from webrcon.errors import (
    CommandTimeout,
    ConnectionClosed,
    DuplicateIdentifier,
    ExhaustedIdentifierSpace,
)
from webrcon.models import UNSOLICITED_IDENTIFIER, GenericFrame

LOGGER = logging.getLogger(__name__)


@dataclass
class Slot:
    identifier: int
    future: asyncio.Future[GenericFrame] = field(repr=False)


class CorrelationTable:
    """Identifier-keyed map of single-use reply slots guarded by one lock."""

    def __init__(self, identifier_min: int = 1, identifier_max: int = 1000) -> None:
        if identifier_min <= UNSOLICITED_IDENTIFIER:
            raise ValueError("identifier_min must be at least 1")
        if identifier_max < identifier_min:
            raise ValueError("identifier_max must not be below identifier_min")
        self._min = identifier_min
        self._max = identifier_max
        self._cursor = identifier_min
        self._slots: Dict[int, Slot] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def capacity(self) -> int:
        return self._max - self._min + 1

    def occupied(self, identifier: int) -> bool:
        return identifier in self._slots

    async def allocate(self) -> int:
        """Return an identifier not held by any live slot."""

        async with self._lock:
            return self._next_free()

    async def register(self, identifier: int) -> Slot:
        async with self._lock:
            return self._register(identifier)

    async def reserve(self) -> Slot:
        """Allocate an identifier and register its slot in one step."""

        async with self._lock:
            return self._register(self._next_free())

    async def deliver(self, identifier: int, frame: GenericFrame) -> bool:
        """Hand ``frame`` to the slot waiting on ``identifier``.

        Returns ``False`` when nobody is waiting any more, in which case the
        caller should treat the frame as unsolicited.
        """

        if identifier == UNSOLICITED_IDENTIFIER:
            return False
        async with self._lock:
            slot = self._slots.pop(identifier, None)
        if slot is None or slot.future.done():
            return False
        slot.future.set_result(frame)
        return True

    async def wait(self, slot: Slot, timeout: Optional[float]) -> GenericFrame:
        """Park until the slot's reply arrives, the timeout fires, or the table drains."""

        try:
            return await asyncio.wait_for(slot.future, timeout=timeout)
        except asyncio.TimeoutError as exc:
            LOGGER.debug("Command %s timed out after %ss", slot.identifier, timeout)
            raise CommandTimeout(slot.identifier, timeout or 0.0) from exc
        finally:
            await self.discard(slot)

    async def discard(self, slot: Slot) -> None:
        """Drop ``slot`` without delivering anything to it."""

        async with self._lock:
            if self._slots.get(slot.identifier) is slot:
                del self._slots[slot.identifier]
        if not slot.future.done():
            slot.future.cancel()
        elif not slot.future.cancelled():
            # drained before anyone awaited it
            slot.future.exception()

    async def drain(self, reason: Optional[BaseException] = None) -> int:
        """Fail every outstanding slot with :class:`ConnectionClosed`."""

        async with self._lock:
            slots = list(self._slots.values())
            self._slots.clear()
        if slots:
            LOGGER.debug("Failing %s pending command(s) on disconnect", len(slots))
        for slot in slots:
            if not slot.future.done():
                slot.future.set_exception(ConnectionClosed(reason=reason))
        return len(slots)

    def _next_free(self) -> int:
        for _ in range(self.capacity):
            candidate = self._cursor
            self._cursor = self._min if candidate >= self._max else candidate + 1
            if candidate not in self._slots:
                return candidate
        raise ExhaustedIdentifierSpace(
            f"all {self.capacity} identifiers in [{self._min}, {self._max}] are pending"
        )

    def _register(self, identifier: int) -> Slot:
        if identifier in self._slots:
            raise DuplicateIdentifier(identifier)
        future: asyncio.Future[GenericFrame] = asyncio.get_running_loop().create_future()
        slot = Slot(identifier=identifier, future=future)
        self._slots[identifier] = slot
        return slot
