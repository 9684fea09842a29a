"""Channel state: backlog, user list and unread counter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .message import ChatMessage
from ..helpers.ids import next_id
from ..config.chat import CHANNEL_HISTORY_LIMIT

CHANNEL_TYPE_LOBBY = "lobby"
CHANNEL_TYPE_CHANNEL = "channel"


@dataclass
class Channel:
    """A conversation target inside a network.

    Every network owns exactly one lobby channel (its first channel) that
    carries server traffic; regular channels are added on connect (the
    ``join`` list) or later.

    Attributes:
        name: Display name (``#channel`` or the network name for a lobby).
        type: CHANNEL_TYPE_LOBBY or CHANNEL_TYPE_CHANNEL.
        id: Process-unique channel id used as a routing target.
        messages: Backlog, oldest first, capped at history_limit.
        users: Nicks currently present.
        unread: Messages received since the channel was last opened.
        history_limit: Maximum number of messages kept in memory.
    """

    name: str
    type: str = CHANNEL_TYPE_CHANNEL
    id: int = field(default_factory=next_id)
    messages: list[ChatMessage] = field(default_factory=list)
    users: list[str] = field(default_factory=list)
    unread: int = 0
    history_limit: int = CHANNEL_HISTORY_LIMIT

    def append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        overflow = len(self.messages) - self.history_limit
        if overflow > 0:
            del self.messages[:overflow]
        self.unread += 1

    def older_than(self, newest_count: int, page_size: int) -> list[ChatMessage]:
        """Return up to page_size messages preceding the newest_count most recent ones."""
        end = max(0, len(self.messages) - max(0, newest_count))
        start = max(0, end - page_size)
        return self.messages[start:end]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "unread": self.unread,
            "users": list(self.users),
            "messages": [message.to_dict() for message in self.messages],
        }


__all__ = ["Channel", "CHANNEL_TYPE_LOBBY", "CHANNEL_TYPE_CHANNEL"]
