"""A single chat line stored in a channel's backlog."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..helpers.ids import next_id


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ChatMessage:
    """One line of channel traffic.

    Attributes:
        text: The message body.
        sender: Nick the line is attributed to.
        type: "message" for user traffic, other values for server notices.
        id: Process-unique message id.
        time: ISO-8601 UTC timestamp of when the line was recorded.
    """

    text: str
    sender: str
    type: str = "message"
    id: int = field(default_factory=next_id)
    time: str = field(default_factory=_now_iso)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "from": self.sender,
            "text": self.text,
            "time": self.time,
        }


__all__ = ["ChatMessage"]
