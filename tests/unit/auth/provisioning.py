"""Unit tests for open-access session provisioning."""

from __future__ import annotations

import asyncio

from lounge.auth import Credentials, OpenAccessProvisioner
from lounge.handlers.rooms import BroadcastRooms
from lounge.handlers.session import SessionRegistry
from tests.helpers.fakes import make_connection


def test_each_connection_gets_its_own_session() -> None:
    registry = SessionRegistry()
    provisioner = OpenAccessProvisioner(registry, BroadcastRooms())

    async def _run():
        first, _ = make_connection()
        second, _ = make_connection()
        return (
            await provisioner.provision(first, Credentials()),
            await provisioner.provision(second, Credentials()),
        )

    a, b = asyncio.run(_run())

    assert a.ok and b.ok
    assert a.session is not b.session
    assert registry.all() == (a.session, b.session)


def test_session_removed_when_connection_closes() -> None:
    registry = SessionRegistry()
    provisioner = OpenAccessProvisioner(registry, BroadcastRooms())

    async def _run():
        connection, _ = make_connection()
        result = await provisioner.provision(connection, Credentials())
        assert registry.contains(result.session)
        await connection.finalize()
        return result.session

    session = asyncio.run(_run())

    assert not registry.contains(session)
    assert len(registry) == 0


def test_release_is_idempotent() -> None:
    registry = SessionRegistry()
    provisioner = OpenAccessProvisioner(registry, BroadcastRooms())

    async def _run():
        connection, _ = make_connection()
        result = await provisioner.provision(connection, Credentials())
        provisioner.release(result.session)
        await connection.finalize()

    asyncio.run(_run())

    assert len(registry) == 0
