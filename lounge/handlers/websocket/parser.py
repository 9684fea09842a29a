"""Client frame parsing for the WebSocket handler."""

from __future__ import annotations

import json
from typing import Any


def parse_client_message(raw: str) -> tuple[str, dict[str, Any]]:
    """Parse an inbound frame into ``(event, payload)``.

    Raises:
        ValueError: If the frame is empty, not a JSON object, lacks a type,
            or carries a non-object payload.
    """
    text = (raw or "").strip()
    if not text:
        raise ValueError("Empty message.")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("Message must be valid JSON.") from exc

    if not isinstance(data, dict):
        raise ValueError("Message must be a JSON object.")

    msg_type = data.get("type")
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("Missing 'type' in message.")

    payload = data.get("payload")
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError("'payload' must be a JSON object.")

    return msg_type.strip().lower(), payload


__all__ = ["parse_client_message"]
