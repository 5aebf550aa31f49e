"""Observer hooks for session lifecycle and unsolicited server events."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from webrcon.models import ChatEvent, GenericFrame

LOGGER = logging.getLogger(__name__)

Hook = Callable[..., Optional[Awaitable[None]]]


class RconObserver:
    """Receives session events. Override only the hooks you need.

    Each hook may be a plain method or a coroutine function.
    """

    def on_connected(self) -> Optional[Awaitable[None]]:
        return None

    def on_message(self, frame: GenericFrame) -> Optional[Awaitable[None]]:
        return None

    def on_chat_message(self, event: ChatEvent) -> Optional[Awaitable[None]]:
        return None

    def on_disconnected(self) -> Optional[Awaitable[None]]:
        return None


@dataclass
class CallbackObserver(RconObserver):
    """Adapts loose callables to :class:`RconObserver`."""

    connected: Optional[Hook] = None
    message: Optional[Hook] = None
    chat_message: Optional[Hook] = None
    disconnected: Optional[Hook] = None

    def on_connected(self) -> Optional[Awaitable[None]]:
        if self.connected:
            return self.connected()
        return None

    def on_message(self, frame: GenericFrame) -> Optional[Awaitable[None]]:
        if self.message:
            return self.message(frame)
        return None

    def on_chat_message(self, event: ChatEvent) -> Optional[Awaitable[None]]:
        if self.chat_message:
            return self.chat_message(event)
        return None

    def on_disconnected(self) -> Optional[Awaitable[None]]:
        if self.disconnected:
            return self.disconnected()
        return None


async def notify(hook: Hook, *args: Any) -> None:
    """Invoke an observer hook, awaiting it if needed; failures are logged."""

    try:
        result = hook(*args)
        if inspect.isawaitable(result):
            await result
    except Exception:  # noqa: BLE001
        LOGGER.exception("Observer hook failed: %s", getattr(hook, "__name__", hook))
