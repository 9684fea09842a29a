"""Unit tests for binding and the bound handler table."""

from __future__ import annotations

import asyncio

from lounge.handlers.rooms import BroadcastRooms
from lounge.handlers.session import Session
from lounge.handlers.websocket import ConnectionBinder
from tests.helpers.fakes import FakeHasher, make_connection, make_user


def _bind(*, open_access: bool, config=None):
    rooms = BroadcastRooms()
    session = Session(config or make_user("alice", password="pw"), rooms=rooms)
    binder = ConnectionBinder(rooms, FakeHasher(), open_access=open_access)
    connection, ws = make_connection()
    assert asyncio.run(binder.bind(connection, session))
    return binder, rooms, session, connection, ws


def test_bound_events_by_mode() -> None:
    _, _, _, restricted, _ = _bind(open_access=False)
    _, _, _, public, _ = _bind(open_access=True)

    common = {"input", "more", "open", "sort", "names", "conn"}
    assert restricted.events == frozenset(common | {"change-password"})
    assert public.events == frozenset(common)


def test_bind_attaches_joins_room_and_sends_init() -> None:
    _, rooms, session, connection, ws = _bind(open_access=False)

    assert session.connections == {connection.id: connection}
    assert rooms.members(session.id) == [connection]
    assert ws.types() == ["init"]


def test_unbind_detaches_and_leaves_rooms() -> None:
    binder, rooms, session, connection, _ = _bind(open_access=False)

    binder.unbind(connection)

    assert session.connections == {}
    assert rooms.members(session.id) == []


def test_conn_overwrites_client_origin_fields() -> None:
    config = make_user("alice", ip="198.51.100.1", hostname="client.example")
    _, _, session, connection, ws = _bind(open_access=False, config=config)

    asyncio.run(
        connection.dispatch(
            "conn",
            {"host": "irc.example", "ip": "6.6.6.6", "hostname": "spoofed.example"},
        )
    )

    network = session.networks[0]
    assert network.ip == "198.51.100.1"
    assert network.hostname == "client.example"
    assert ws.events("network")


def test_forwarded_event_reaches_session() -> None:
    _, _, session, connection, _ = _bind(open_access=True)

    async def _run():
        network = await session.connect({"host": "irc.example", "join": "#a"})
        await connection.dispatch("open", {"target": network.channels[1].id})
        return network.channels[1].id

    channel_id = asyncio.run(_run())

    assert session.active_channel == channel_id


def test_failed_init_send_undoes_the_binding() -> None:
    rooms = BroadcastRooms()
    session = Session(make_user("alice", password="pw"), rooms=rooms)
    binder = ConnectionBinder(rooms, FakeHasher(), open_access=False)
    connection, _ = make_connection(fail_sends=True)

    assert not asyncio.run(binder.bind(connection, session))
    assert connection.closed
    assert session.connections == {}
    assert rooms.members(session.id) == []
