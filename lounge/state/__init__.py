"""Session domain dataclasses."""

from .user import UserConfig
from .network import Network
from .message import ChatMessage
from .channel import Channel, CHANNEL_TYPE_LOBBY, CHANNEL_TYPE_CHANNEL

__all__ = [
    "UserConfig",
    "Network",
    "Channel",
    "ChatMessage",
    "CHANNEL_TYPE_LOBBY",
    "CHANNEL_TYPE_CHANNEL",
]
