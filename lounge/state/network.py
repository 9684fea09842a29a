"""Network state: one upstream chat server and its channels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..helpers.ids import next_id
from .channel import Channel, CHANNEL_TYPE_LOBBY
from ..config.chat import DEFAULT_NICK, DEFAULT_PORT, DEFAULT_TLS_PORT


@dataclass
class Network:
    """An upstream server a session is linked to.

    ``ip`` and ``hostname`` describe the session's own origin and are
    forwarded upstream (WEBIRC); they are always filled in by the server,
    never taken from the client.
    """

    name: str
    host: str
    port: int = DEFAULT_PORT
    tls: bool = False
    nick: str = DEFAULT_NICK
    username: str = DEFAULT_NICK
    realname: str = DEFAULT_NICK
    password: str = ""
    ip: str | None = None
    hostname: str | None = None
    id: int = field(default_factory=next_id)
    channels: list[Channel] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.channels:
            self.channels.append(Channel(name=self.name, type=CHANNEL_TYPE_LOBBY))

    @classmethod
    def from_args(cls, args: dict[str, Any]) -> "Network":
        """Build a network from a client ``conn`` payload or a stored entry."""
        host = str(args.get("host") or "").strip()
        tls = bool(args.get("tls"))
        nick = str(args.get("nick") or "").strip() or DEFAULT_NICK
        network = cls(
            name=str(args.get("name") or "").strip() or host,
            host=host,
            port=_parse_port(args.get("port"), tls),
            tls=tls,
            nick=nick,
            username=str(args.get("username") or "").strip() or nick,
            realname=str(args.get("realname") or "").strip() or nick,
            password=str(args.get("password") or ""),
            ip=args.get("ip"),
            hostname=args.get("hostname"),
        )
        for name in _split_join(args.get("join")):
            network.channels.append(Channel(name=name))
        return network

    @property
    def lobby(self) -> Channel:
        return self.channels[0]

    def find_channel(self, channel_id: Any) -> Channel | None:
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def to_dict(self) -> dict[str, Any]:
        # password stays server-side
        return {
            "id": self.id,
            "name": self.name,
            "host": self.host,
            "port": self.port,
            "tls": self.tls,
            "nick": self.nick,
            "username": self.username,
            "realname": self.realname,
            "channels": [channel.to_dict() for channel in self.channels],
        }


def _parse_port(raw: Any, tls: bool) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_TLS_PORT if tls else DEFAULT_PORT
    if 0 < port < 65536:
        return port
    return DEFAULT_TLS_PORT if tls else DEFAULT_PORT


def _split_join(raw: Any) -> list[str]:
    if not isinstance(raw, str):
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


__all__ = ["Network"]
