"""Unit tests for the session registry."""

from __future__ import annotations

from lounge.handlers.rooms import BroadcastRooms
from lounge.state.user import UserConfig
from lounge.handlers.session import Session, SessionRegistry


def _session(name: str) -> Session:
    return Session(UserConfig(user=name), rooms=BroadcastRooms())


def test_iteration_follows_insertion_order() -> None:
    registry = SessionRegistry()
    a, b, c = _session("a"), _session("b"), _session("c")
    for session in (b, a, c):
        registry.add(session)

    assert [s.name for s in registry] == ["b", "a", "c"]


def test_remove_is_idempotent() -> None:
    registry = SessionRegistry()
    session = _session("a")
    registry.add(session)

    assert registry.remove(session) is True
    assert registry.remove(session) is False
    assert len(registry) == 0


def test_snapshot_is_unaffected_by_later_mutation() -> None:
    registry = SessionRegistry()
    a, b = _session("a"), _session("b")
    registry.add(a)
    snapshot = registry.snapshot()

    registry.add(b)
    registry.remove(a)

    assert snapshot == (a,)
    assert registry.all() == (b,)


def test_contains_checks_identity() -> None:
    registry = SessionRegistry()
    session = _session("a")
    impostor = Session(session.config, rooms=BroadcastRooms(), session_id=session.id)
    registry.add(session)

    assert registry.contains(session)
    assert not registry.contains(impostor)


def test_clear_returns_removed_sessions() -> None:
    registry = SessionRegistry()
    a = _session("a")
    registry.add(a)

    assert registry.clear() == [a]
    assert len(registry) == 0
