"""Network stack (transport/correlation/router/connection) for the RCON session."""

from webrcon.network.connection import RconConnection, default_transport_factory, validate_endpoint
from webrcon.network.correlation import CorrelationTable, Slot
from webrcon.network.observer import CallbackObserver, RconObserver
from webrcon.network.reader import ReaderLoop
from webrcon.network.router import Router
from webrcon.network.transport.base import BaseTransport
from webrcon.network.transport.dummy import DummyTransport
from webrcon.network.transport.websocket import WebSocketTransport

__all__ = [
    "RconConnection",
    "default_transport_factory",
    "validate_endpoint",
    "CorrelationTable",
    "Slot",
    "CallbackObserver",
    "RconObserver",
    "ReaderLoop",
    "Router",
    "BaseTransport",
    "DummyTransport",
    "WebSocketTransport",
]
