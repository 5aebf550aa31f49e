"""Transport abstraction for the RCON session."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseTransport(ABC):
    """Message-oriented duplex channel carrying one text frame per call."""

    @abstractmethod
    async def connect(self) -> None:
        ...

    @abstractmethod
    async def send(self, payload: str) -> None:
        ...

    @abstractmethod
    async def receive(self) -> str:
        """Block until the next frame arrives; raise once the channel is gone."""

    @abstractmethod
    async def close(self) -> None:
        ...
