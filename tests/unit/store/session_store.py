"""Unit tests for the Redis-backed session store adapter."""

from __future__ import annotations

import json
import asyncio

from redis.exceptions import ConnectionError as RedisConnectionError

from lounge.store import SessionStore, parse_principal
from tests.helpers.fakes import FakeRedis


def _store(client: FakeRedis, **kwargs) -> SessionStore:
    return SessionStore(key_prefix="sess:", client_factory=lambda: client, **kwargs)


def test_resolves_username_from_record() -> None:
    client = FakeRedis({"sess:abc": json.dumps({"username": "alice", "expires": 1})})

    principal = asyncio.run(_store(client).resolve("abc"))

    assert principal == "alice"
    assert client.keys == ["sess:abc"]
    assert client.closed == 1


def test_missing_key_is_absent() -> None:
    client = FakeRedis()

    assert asyncio.run(_store(client).resolve("nope")) is None
    assert client.closed == 1


def test_malformed_record_is_absent() -> None:
    client = FakeRedis({"sess:abc": "{not json"})

    assert asyncio.run(_store(client).resolve("abc")) is None
    assert client.closed == 1


def test_store_error_is_absent_and_client_released() -> None:
    client = FakeRedis(error=RedisConnectionError("refused"))

    assert asyncio.run(_store(client).resolve("abc")) is None
    assert client.closed == 1


def test_slow_store_times_out_and_client_released() -> None:
    client = FakeRedis({"sess:abc": json.dumps({"username": "alice"})}, delay_s=1.0)

    assert asyncio.run(_store(client, timeout_s=0.01).resolve("abc")) is None
    assert client.closed == 1


def test_empty_reference_skips_the_store() -> None:
    created: list[FakeRedis] = []

    def _factory() -> FakeRedis:
        created.append(FakeRedis())
        return created[-1]

    store = SessionStore(client_factory=_factory)

    assert asyncio.run(store.resolve(None)) is None
    assert asyncio.run(store.resolve("")) is None
    assert created == []


def test_parse_principal_shapes() -> None:
    assert parse_principal(b'{"username": "bob"}') == "bob"
    assert parse_principal('{"username": ""}') is None
    assert parse_principal('["alice"]') is None
    assert parse_principal('{"user": "alice"}') is None
    assert parse_principal(b"\xff\xfe") is None
    assert parse_principal(None) is None
