"""Helpers for classifying expected WebSocket disconnect exceptions."""

from __future__ import annotations

from fastapi import WebSocketDisconnect
from anyio import EndOfStream, BrokenResourceError, ClosedResourceError
from websockets.exceptions import ConnectionClosed

_RUNTIME_DISCONNECT_ERRORS: tuple[type[BaseException], ...] = (
    ConnectionResetError,
    BrokenPipeError,
    EOFError,
    BrokenResourceError,
    ClosedResourceError,
    EndOfStream,
    ConnectionClosed,
)

# Starlette reports sends/receives on a finished socket as RuntimeError
_RUNTIME_DISCONNECT_MESSAGES = (
    "websocket is not connected",
    "cannot call receive once a disconnect message has been received",
    'cannot call "receive" once a disconnect message has been received',
    'cannot call "send" once a close message has been sent',
    "unexpected asgi message 'websocket.send', after sending 'websocket.close'",
)


def is_expected_disconnect(exc: BaseException) -> bool:
    """Return True when the exception represents normal transport teardown."""

    if isinstance(exc, (WebSocketDisconnect, *_RUNTIME_DISCONNECT_ERRORS)):
        return True
    if isinstance(exc, RuntimeError):
        message = str(exc).strip().lower()
        return any(fragment in message for fragment in _RUNTIME_DISCONNECT_MESSAGES)
    return False


__all__ = ["is_expected_disconnect"]
