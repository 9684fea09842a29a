"""Session: a principal-bound chat client shared by its connections.

A session owns its networks and channels and survives the connections
attached to it. In restricted-access mode sessions are loaded from the
user store at startup and live until shutdown; in open-access mode each
connection gets its own session, removed when that connection closes.

Operations mutate domain state and announce the change to every bound
connection through the session's broadcast room.
"""

from __future__ import annotations

import uuid
import secrets
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from ...errors import PersistenceError
from ...state.user import UserConfig
from ...state.network import Network
from ...state.channel import Channel
from ...state.message import ChatMessage
from ...config.chat import MORE_PAGE_SIZE
from ...config.access import TOKEN_BYTES
from ...config.websocket import WS_CLOSE_SIGNED_OUT_CODE, WS_CLOSE_SIGNED_OUT_REASON

if TYPE_CHECKING:
    from ...store.users import UserStore
    from ..rooms import BroadcastRooms
    from ..websocket.connection import Connection

logger = logging.getLogger(__name__)


def generate_token(nbytes: int = TOKEN_BYTES) -> str:
    return secrets.token_hex(nbytes)


class Session:
    """Principal-bound session state and operations.

    Attributes:
        id: Process-unique session id; also the broadcast room name.
        config: Identity configuration (username, hash, token, origin).
        networks: Upstream networks in display order.
        active_channel: Id of the channel the user last opened.
        connections: Connections currently bound to this session.
    """

    def __init__(
        self,
        config: UserConfig | None = None,
        *,
        rooms: BroadcastRooms,
        users: UserStore | None = None,
        session_id: str | None = None,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.config = config or UserConfig(user="")
        self.networks: list[Network] = [Network.from_args(entry) for entry in self.config.networks]
        self.active_channel: int | None = None
        self.connections: dict[str, Connection] = {}
        self._rooms = rooms
        self._users = users
        self._address: str | None = self.config.ip
        self._hostname: str | None = self.config.hostname

    @property
    def name(self) -> str:
        return self.config.user or f"guest-{self.id[:8]}"

    # ============================================================================
    # Network identity (set once)
    # ============================================================================
    @property
    def address(self) -> str | None:
        return self._address

    @property
    def hostname(self) -> str | None:
        return self._hostname

    def set_network_identity(self, address: str, hostname: str) -> bool:
        """Record the session's origin; return False if it was already set."""
        if self._hostname is not None:
            return False
        if self._address is None:
            self._address = address
        self._hostname = hostname
        return True

    # ============================================================================
    # Connections
    # ============================================================================
    def attach(self, connection: Connection) -> None:
        self.connections[connection.id] = connection

    def detach(self, connection: Connection) -> None:
        self.connections.pop(connection.id, None)

    async def emit(self, event: str, payload: dict[str, Any]) -> int:
        return await self._rooms.broadcast(self.id, event, payload)

    def snapshot(self) -> dict[str, Any]:
        """One-shot state sent to a connection right after it binds."""
        return {
            "active": self.active_channel,
            "networks": [network.to_dict() for network in self.networks],
            "token": self.config.token or None,
        }

    # ============================================================================
    # Lookups
    # ============================================================================
    def find_network(self, network_id: Any) -> Network | None:
        for network in self.networks:
            if network.id == network_id:
                return network
        return None

    def find_channel(self, channel_id: Any) -> tuple[Network, Channel] | tuple[None, None]:
        for network in self.networks:
            channel = network.find_channel(channel_id)
            if channel is not None:
                return network, channel
        return None, None

    # ============================================================================
    # Operations forwarded from bound connections
    # ============================================================================
    async def connect(self, args: dict[str, Any]) -> Network | None:
        """Open a new upstream network link from a ``conn`` payload."""
        network = Network.from_args(args)
        if not network.host:
            logger.warning("connect ignored: no host given")
            return None
        self.networks.append(network)
        logger.info("session %s added network %s (%s:%s)", self.name, network.name, network.host, network.port)
        await self.emit("network", {"networks": [network.to_dict()]})
        return network

    async def input(self, data: dict[str, Any]) -> ChatMessage | None:
        network, channel = self.find_channel(data.get("target"))
        text = data.get("text")
        if channel is None or not isinstance(text, str) or not text.strip():
            return None
        message = ChatMessage(text=text, sender=network.nick)
        channel.append(message)
        await self.emit("msg", {"chan": channel.id, "msg": message.to_dict()})
        return message

    async def more(self, data: dict[str, Any]) -> list[ChatMessage]:
        _, channel = self.find_channel(data.get("target"))
        if channel is None:
            return []
        try:
            count = int(data.get("count") or 0)
        except (TypeError, ValueError):
            count = 0
        messages = channel.older_than(count, MORE_PAGE_SIZE)
        await self.emit("more", {"chan": channel.id, "messages": [m.to_dict() for m in messages]})
        return messages

    async def open(self, data: dict[str, Any]) -> None:
        _, channel = self.find_channel(data.get("target"))
        if channel is None:
            return
        channel.unread = 0
        self.active_channel = channel.id

    async def sort(self, data: dict[str, Any]) -> None:
        order = data.get("order")
        if not isinstance(order, list):
            return
        kind = data.get("type")
        if kind == "networks":
            self.networks = _reorder(self.networks, order)
        elif kind == "channels":
            network = self.find_network(data.get("target"))
            if network is None:
                return
            # The lobby always stays first
            network.channels = [network.lobby, *_reorder(network.channels[1:], order)]

    async def names(self, data: dict[str, Any]) -> None:
        _, channel = self.find_channel(data.get("target"))
        if channel is None:
            return
        await self.emit("names", {"chan": channel.id, "users": list(channel.users)})

    # ============================================================================
    # Credentials
    # ============================================================================
    async def set_password(self, password_hash: str) -> bool:
        """Persist a new password hash together with a rotated token.

        In-memory credentials change only after the user store accepted
        the write.
        """
        if self._users is None:
            logger.error("session %s has no user store; password not changed", self.name)
            return False
        updated = replace(self.config, password=password_hash, token=generate_token())
        try:
            await self._users.save(updated)
        except PersistenceError:
            return False
        self.config = updated
        logger.info("session %s password changed; token rotated", self.name)
        return True

    async def sign_out_others(self, keep: Connection) -> int:
        """Close every bound connection except ``keep``."""
        others = [conn for conn in self.connections.values() if conn is not keep]
        for connection in others:
            await connection.close(code=WS_CLOSE_SIGNED_OUT_CODE, reason=WS_CLOSE_SIGNED_OUT_REASON)
        return len(others)

    def quit(self) -> None:
        if self.networks:
            logger.info("session %s closing %s network(s)", self.name, len(self.networks))
        self.networks.clear()
        self.active_channel = None


def _reorder(items: list[Any], order: list[Any]) -> list[Any]:
    by_id = {item.id: item for item in items}
    ordered = []
    for item_id in order:
        item = by_id.pop(item_id, None)
        if item is not None:
            ordered.append(item)
    ordered.extend(item for item in items if item.id in by_id)
    return ordered


__all__ = ["Session", "generate_token"]
