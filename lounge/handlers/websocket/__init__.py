"""WebSocket handler exports."""

from .binder import ConnectionBinder, INIT_EVENT
from .manager import handle_websocket_connection
from .connection import Connection, ConnectionState, EventHandler

__all__ = [
    "Connection",
    "ConnectionBinder",
    "ConnectionState",
    "EventHandler",
    "INIT_EVENT",
    "handle_websocket_connection",
]
