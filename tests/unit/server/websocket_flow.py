"""End-to-end tests of the /ws endpoint through the FastAPI test client."""

from __future__ import annotations

import json
import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from lounge.server import create_app
from lounge.runtime import build_runtime_deps
from tests.helpers.fakes import CountingResolver, FakeHasher, FakeSessionStore


def _client(tmp_path: Path, *, public_mode: bool = False, max_connections: int = 10, store=None) -> TestClient:
    (tmp_path / "alice.json").write_text(
        json.dumps({"password": FakeHasher().hash("secret"), "token": "tok-a"}),
        encoding="utf-8",
    )
    deps = asyncio.run(
        build_runtime_deps(
            public_mode=public_mode,
            enrichment_required=False,
            users_dir=tmp_path,
            session_store=store or FakeSessionStore(),
            resolver=CountingResolver("client.example"),
            hasher=FakeHasher(),
            max_connections=max_connections,
        )
    )
    return TestClient(create_app(deps))


def test_healthz_reports_mode_and_sessions(tmp_path: Path) -> None:
    with _client(tmp_path) as client:
        body = client.get("/healthz").json()

    assert body["status"] == "ok"
    assert body["mode"] == "private"
    assert body["sessions"] == 1


def test_restricted_sign_in_flow(tmp_path: Path) -> None:
    with _client(tmp_path) as client, client.websocket_connect("/ws") as ws:
        assert ws.receive_json() == {"type": "auth", "payload": {"success": True}}

        ws.send_json({"type": "input", "payload": {"text": "too early"}})
        assert ws.receive_json()["payload"]["error_code"] == "unknown_message_type"

        ws.send_json({"type": "auth", "payload": {"user": "alice", "password": "bad"}})
        assert ws.receive_json() == {"type": "auth", "payload": {"success": False}}

        ws.send_json({"type": "auth", "payload": {"user": "alice", "password": "secret"}})
        init = ws.receive_json()
        assert init["type"] == "init"
        assert init["payload"]["token"] == "tok-a"

        ws.send_json({"type": "ping"})
        assert ws.receive_json()["type"] == "pong"

        ws.send_json({"type": "conn", "payload": {"host": "irc.example", "join": "#lounge"}})
        network = ws.receive_json()
        assert network["type"] == "network"
        assert network["payload"]["networks"][0]["host"] == "irc.example"

        ws.send_json({"type": "end"})
        assert ws.receive_json() == {"type": "connection_closed", "payload": {"reason": "client_request"}}


def test_cookie_sign_in_skips_prompt(tmp_path: Path) -> None:
    store = FakeSessionStore({"ref-1": "alice"})
    with _client(tmp_path, store=store) as client:
        with client.websocket_connect("/ws", headers={"cookie": "session=ref-1"}) as ws:
            assert ws.receive_json()["type"] == "init"

    assert store.lookups == ["ref-1"]


def test_invalid_frame_reports_error(tmp_path: Path) -> None:
    with _client(tmp_path) as client, client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_text("{not json")
        error = ws.receive_json()

    assert error["type"] == "error"
    assert error["payload"]["error_code"] == "invalid_message"


def test_binary_frame_reports_error_and_keeps_connection_open(tmp_path: Path) -> None:
    with _client(tmp_path) as client, client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_bytes(b"\x00\x01")
        error = ws.receive_json()
        ws.send_json({"type": "ping"})
        pong = ws.receive_json()

    assert error["type"] == "error"
    assert error["payload"]["error_code"] == "invalid_message"
    assert pong["type"] == "pong"


def test_open_access_binds_on_connect(tmp_path: Path) -> None:
    with _client(tmp_path, public_mode=True) as client:
        with client.websocket_connect("/ws") as ws:
            init = ws.receive_json()
            assert init["type"] == "init"
            assert init["payload"]["token"] is None
            assert client.get("/healthz").json()["mode"] == "public"


def test_connection_rejected_at_capacity(tmp_path: Path) -> None:
    with _client(tmp_path, max_connections=1) as client, client.websocket_connect("/ws") as first:
        first.receive_json()
        with client.websocket_connect("/ws") as second:
            error = second.receive_json()
            assert error["payload"]["error_code"] == "server_at_capacity"
            with pytest.raises(WebSocketDisconnect) as exc_info:
                second.receive_json()

    assert exc_info.value.code == 1013
