"""WebSocket communication utilities.

Every frame in either direction has the shape::

    {"type": "<event>", "payload": {...}}

Sends are "safe": a client that disconnected mid-send yields False
instead of an exception, so callers can drop work for dead connections.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import WebSocket

from .disconnects import is_expected_disconnect

logger = logging.getLogger(__name__)


def build_event(event: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"type": event, "payload": payload or {}}


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    """Send text to the client, returning False if the socket is gone.

    Args:
        ws: The WebSocket connection.
        text: Raw text to send.

    Returns:
        True if sent successfully, False if client disconnected.
    """
    try:
        await ws.send_text(text)
    except Exception as exc:  # noqa: BLE001
        if not is_expected_disconnect(exc):
            raise
        logger.info("WebSocket disconnected while sending %s bytes", len(text))
        return False
    return True


async def safe_send_event(ws: WebSocket, event: str, payload: dict[str, Any] | None = None) -> bool:
    """Serialize and send one event frame, swallowing client disconnects."""
    return await safe_send_text(ws, json.dumps(build_event(event, payload)))


__all__ = ["build_event", "safe_send_text", "safe_send_event"]
