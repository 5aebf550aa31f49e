"""Exception taxonomy for the RCON client."""

from __future__ import annotations

from typing import Optional


class RconError(RuntimeError):
    """Base class for all client-side RCON errors."""


class InvalidConfiguration(RconError, ValueError):
    """Raised before any I/O when address, port or password is unusable."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class NotConnected(RconError):
    """Raised when an operation needs an attached transport and there is none."""

    def __init__(self, message: str = "not connected to server") -> None:
        super().__init__(message)


class AlreadyConnected(RconError):
    """Raised when connect() is called on a session that already has a transport."""


class SendFailure(RconError):
    """Raised when the transport rejects an outbound command frame."""


class CommandTimeout(RconError, TimeoutError):
    """Raised when no correlated reply arrives within the command timeout."""

    def __init__(self, identifier: int, timeout: float) -> None:
        super().__init__(f"timeout waiting for response to command {identifier} after {timeout:g}s")
        self.identifier = identifier
        self.timeout = timeout


class ConnectionClosed(RconError):
    """Raised to waiters when the session is torn down before their reply arrives."""

    def __init__(self, message: str = "connection closed", *, reason: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.reason = reason


class DecodeFailure(RconError):
    """Raised for malformed inbound frames or malformed nested chat payloads."""


class ExhaustedIdentifierSpace(RconError):
    """Raised when every correlation identifier is held by an outstanding command."""


class DuplicateIdentifier(RconError):
    """Raised when registering a correlation slot for an identifier already in use."""

    def __init__(self, identifier: int) -> None:
        super().__init__(f"identifier {identifier} already has a pending slot")
        self.identifier = identifier
