"""Unit tests for client address and session reference extraction."""

from __future__ import annotations

from types import SimpleNamespace

from lounge.handlers.websocket.address import client_address, session_reference


def _ws(*, host: str = "10.0.0.2", headers: dict | None = None, cookies: dict | None = None):
    return SimpleNamespace(
        client=SimpleNamespace(host=host),
        headers=headers or {},
        cookies=cookies or {},
    )


def test_peer_address_without_proxy_trust() -> None:
    ws = _ws(headers={"x-forwarded-for": "203.0.113.5"})

    assert client_address(ws, trust_proxy=False) == "10.0.0.2"


def test_first_forwarded_entry_behind_trusted_proxy() -> None:
    ws = _ws(headers={"x-forwarded-for": "203.0.113.5, 10.0.0.1"})

    assert client_address(ws, trust_proxy=True) == "203.0.113.5"


def test_trusted_proxy_without_header_uses_peer() -> None:
    assert client_address(_ws(), trust_proxy=True) == "10.0.0.2"


def test_session_reference_from_cookie() -> None:
    assert session_reference(_ws(cookies={"session": " abc "}), cookie_name="session") == "abc"
    assert session_reference(_ws(cookies={"session": ""}), cookie_name="session") is None
    assert session_reference(_ws(), cookie_name="session") is None
