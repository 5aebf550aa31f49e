"""Asyncio client for the WebRCON remote console protocol."""

from webrcon.config import RconSettings, get_settings
from webrcon.errors import (
    AlreadyConnected,
    CommandTimeout,
    ConnectionClosed,
    DecodeFailure,
    DuplicateIdentifier,
    ExhaustedIdentifierSpace,
    InvalidConfiguration,
    NotConnected,
    RconError,
    SendFailure,
)
from webrcon.models import ChatEvent, CommandFrame, GenericFrame, MessageType
from webrcon.network import CallbackObserver, RconConnection, RconObserver

__version__ = "0.1.0"

__all__ = [
    "RconSettings",
    "get_settings",
    "AlreadyConnected",
    "CommandTimeout",
    "ConnectionClosed",
    "DecodeFailure",
    "DuplicateIdentifier",
    "ExhaustedIdentifierSpace",
    "InvalidConfiguration",
    "NotConnected",
    "RconError",
    "SendFailure",
    "ChatEvent",
    "CommandFrame",
    "GenericFrame",
    "MessageType",
    "CallbackObserver",
    "RconConnection",
    "RconObserver",
]
