"""Shared response helpers for WebSocket error handling.

Error frames follow the common event shape::

    {
        "type": "error",
        "payload": {
            "error_code": "unknown_message_type",  # Machine-readable code
            "message": "Human-readable description",
            ...extra fields
        }
    }

Error codes used in the application:
    - invalid_message: Malformed JSON, missing type, non-object payload
    - unknown_message_type: No handler for the event in the current state
    - server_at_capacity: Connection pool exhausted
    - internal_error: Unexpected server error
"""

from __future__ import annotations

from typing import Any

from fastapi import WebSocket

from .helpers import safe_send_event


async def send_error(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    extra: dict[str, Any] | None = None,
) -> bool:
    """Send a structured error event to the client.

    Args:
        ws: The WebSocket connection.
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        extra: Additional fields to include in the payload.
    """
    payload: dict[str, Any] = {"error_code": error_code, "message": message}
    if extra:
        payload.update(extra)
    return await safe_send_event(ws, "error", payload)


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    close_code: int,
    extra: dict[str, Any] | None = None,
) -> None:
    """Accept connection briefly to send an error, then close immediately.

    The client receives a meaningful error message rather than just a raw
    close code.
    """
    await ws.accept()
    await send_error(ws, error_code=error_code, message=message, extra=extra)
    await ws.close(code=close_code)


__all__ = ["send_error", "reject_connection"]
