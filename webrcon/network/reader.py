"""Background receive loop for an attached transport."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, Optional, Set

from webrcon.network.router import Router
from webrcon.network.transport.base import BaseTransport

LOGGER = logging.getLogger(__name__)


class ReaderLoop:
    """Drains one transport and hands every frame to the router.

    Frames are routed in their own tasks so a slow observer never stalls the
    next receive; with ``serialize_dispatch`` they are routed inline instead,
    which keeps observer calls in receive order.
    """

    def __init__(
        self,
        router: Router,
        on_terminated: Callable[[Exception], Awaitable[None]],
        *,
        serialize_dispatch: bool = False,
    ) -> None:
        self._router = router
        self._on_terminated = on_terminated
        self._serialize = serialize_dispatch
        self._task: Optional[asyncio.Task[None]] = None
        self._dispatch_tasks: Set[asyncio.Task[None]] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, transport: BaseTransport) -> None:
        if self.running:
            raise RuntimeError("reader loop already running")
        self._task = asyncio.create_task(self._receive_loop(transport), name="rcon-reader")

    async def stop(self) -> None:
        """Cancel the receive task and in-flight dispatches, except the caller's own task."""

        current = asyncio.current_task()
        tasks = [t for t in (self._task, *self._dispatch_tasks) if t is not None and t is not current]
        self._task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _receive_loop(self, transport: BaseTransport) -> None:
        while True:
            try:
                raw = await transport.receive()
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001
                LOGGER.warning("Receive loop stopped: %s", exc)
                await self._on_terminated(exc)
                return
            if self._serialize:
                await self._dispatch(raw)
                continue
            task = asyncio.create_task(self._dispatch(raw), name="rcon-dispatch")
            self._dispatch_tasks.add(task)
            task.add_done_callback(self._dispatch_tasks.discard)

    async def _dispatch(self, raw: str) -> None:
        try:
            await self._router.route(raw)
        except asyncio.CancelledError:
            raise
        except Exception:  # noqa: BLE001
            LOGGER.exception("Routing failed for inbound frame")
