"""In-memory fakes shared by the unit tests."""

from __future__ import annotations

import json
import asyncio
from typing import Any

from fastapi import WebSocketDisconnect

from lounge.errors import ResolutionError
from lounge.state.user import UserConfig
from lounge.handlers.rooms import BroadcastRooms
from lounge.handlers.session import Session, SessionRegistry
from lounge.handlers.websocket.connection import Connection


class FakeWebSocket:
    """Records outbound frames; optionally behaves like a dropped client."""

    def __init__(self, *, fail_sends: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.close_calls: list[tuple[int, str]] = []
        self.fail_sends = fail_sends

    async def send_text(self, text: str) -> None:
        if self.fail_sends:
            raise WebSocketDisconnect(code=1006)
        self.sent.append(json.loads(text))

    async def close(self, *, code: int = 1000, reason: str = "") -> None:
        self.close_calls.append((code, reason))

    def events(self, event: str) -> list[dict[str, Any]]:
        return [frame["payload"] for frame in self.sent if frame["type"] == event]

    def types(self) -> list[str]:
        return [frame["type"] for frame in self.sent]


class FakeHasher:
    """Deterministic stand-in for the bcrypt hasher."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str | None) -> bool:
        return bool(hashed) and hashed == self.hash(password)


class FakeSessionStore:
    def __init__(self, principals: dict[str, str] | None = None) -> None:
        self.principals = dict(principals or {})
        self.lookups: list[str] = []

    async def resolve(self, reference: str | None) -> str | None:
        self.lookups.append(reference)
        return self.principals.get(reference)


class FakeRedis:
    """Single-use client double for SessionStore."""

    def __init__(self, records: dict[str, Any] | None = None, *, error: BaseException | None = None,
                 delay_s: float = 0.0) -> None:
        self.records = dict(records or {})
        self.error = error
        self.delay_s = delay_s
        self.keys: list[str] = []
        self.closed = 0

    async def get(self, key: str) -> Any:
        self.keys.append(key)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return self.records.get(key)

    async def aclose(self) -> None:
        self.closed += 1


class CountingResolver:
    def __init__(self, *names: str, error: bool = False, delay_s: float = 0.0, before=None) -> None:
        self.names = list(names)
        self.error = error
        self.delay_s = delay_s
        self.before = before
        self.calls: list[str] = []

    async def __call__(self, address: str) -> list[str]:
        self.calls.append(address)
        if self.before is not None:
            await self.before()
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error:
            raise ResolutionError(address)
        return list(self.names)


def make_user(name: str, password: str | None = None, token: str | None = None, **fields: Any) -> UserConfig:
    return UserConfig(
        user=name,
        password=FakeHasher().hash(password) if password else None,
        token=token,
        **fields,
    )


def make_connection(
    *,
    address: str = "203.0.113.7",
    session_ref: str | None = None,
    fail_sends: bool = False,
) -> tuple[Connection, FakeWebSocket]:
    ws = FakeWebSocket(fail_sends=fail_sends)
    return Connection(ws, address=address, session_ref=session_ref), ws


def make_registry(*configs: UserConfig, rooms: BroadcastRooms | None = None, users=None) -> SessionRegistry:
    rooms = rooms or BroadcastRooms()
    registry = SessionRegistry()
    for config in configs:
        registry.add(Session(config, rooms=rooms, users=users))
    return registry


def session_named(registry: SessionRegistry, name: str) -> Session:
    for session in registry:
        if session.config.user == name:
            return session
    raise KeyError(name)


__all__ = [
    "CountingResolver",
    "FakeHasher",
    "FakeRedis",
    "FakeSessionStore",
    "FakeWebSocket",
    "make_connection",
    "make_registry",
    "make_user",
    "session_named",
]
