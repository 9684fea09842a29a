"""Unit tests for origin hostname enrichment."""

from __future__ import annotations

import asyncio

from lounge.handlers.rooms import BroadcastRooms
from lounge.handlers.session import Session
from lounge.identity import NetworkIdentityEnricher
from tests.helpers.fakes import CountingResolver, make_connection, make_user


def test_resolve_hostname_returns_primary_name() -> None:
    enricher = NetworkIdentityEnricher(CountingResolver("a.example", "b.example"), timeout_s=1.0)

    assert asyncio.run(enricher.resolve_hostname("192.0.2.1")) == "a.example"


def test_resolve_hostname_falls_back_on_error() -> None:
    enricher = NetworkIdentityEnricher(CountingResolver(error=True), timeout_s=1.0)

    assert asyncio.run(enricher.resolve_hostname("192.0.2.1")) == "192.0.2.1"


def test_resolve_hostname_falls_back_on_empty_answer() -> None:
    enricher = NetworkIdentityEnricher(CountingResolver(), timeout_s=1.0)

    assert asyncio.run(enricher.resolve_hostname("192.0.2.1")) == "192.0.2.1"


def test_resolve_hostname_falls_back_on_timeout() -> None:
    enricher = NetworkIdentityEnricher(CountingResolver("slow.example", delay_s=1.0), timeout_s=0.01)

    assert asyncio.run(enricher.resolve_hostname("192.0.2.1")) == "192.0.2.1"


def test_configured_origin_is_never_overwritten() -> None:
    resolver = CountingResolver("dns.example")
    enricher = NetworkIdentityEnricher(resolver, timeout_s=1.0)
    session = Session(
        make_user("alice", ip="10.0.0.1", hostname="fixed.example"),
        rooms=BroadcastRooms(),
    )
    connection, _ = make_connection(address="192.0.2.50")

    hostname = asyncio.run(enricher.enrich(connection, session))

    assert hostname == "fixed.example"
    assert resolver.calls == []
    assert session.address == "10.0.0.1"
    assert connection.hostname == "fixed.example"


def test_configured_address_seeds_the_lookup() -> None:
    resolver = CountingResolver("configured.example")
    enricher = NetworkIdentityEnricher(resolver, timeout_s=1.0)
    session = Session(make_user("alice", ip="10.0.0.1"), rooms=BroadcastRooms())
    connection, _ = make_connection(address="192.0.2.50")

    hostname = asyncio.run(enricher.enrich(connection, session))

    assert hostname == "configured.example"
    assert resolver.calls == ["10.0.0.1"]
    assert session.address == "10.0.0.1"
    assert connection.hostname == "configured.example"


def test_concurrent_enrichments_share_one_lookup() -> None:
    resolver = CountingResolver("shared.example", delay_s=0.02)
    enricher = NetworkIdentityEnricher(resolver, timeout_s=1.0)
    session = Session(rooms=BroadcastRooms())
    first, _ = make_connection(address="192.0.2.1")
    second, _ = make_connection(address="192.0.2.2")

    async def _run():
        return await asyncio.gather(enricher.enrich(first, session), enricher.enrich(second, session))

    results = asyncio.run(_run())

    assert results == ["shared.example", "shared.example"]
    assert resolver.calls == ["192.0.2.1"]
    assert session.address == "192.0.2.1"


def test_set_network_identity_is_set_once() -> None:
    session = Session(rooms=BroadcastRooms())

    assert session.set_network_identity("192.0.2.1", "one.example")
    assert not session.set_network_identity("192.0.2.2", "two.example")
    assert session.hostname == "one.example"
    assert session.address == "192.0.2.1"
