"""Unit tests for the restricted-access strategy scan."""

from __future__ import annotations

import asyncio

from lounge.auth import (
    Credentials,
    RestrictedAccessProvisioner,
    REASON_UNAUTHORIZED,
    REASON_MISSING_CREDENTIALS,
    default_strategies,
)
from tests.helpers.fakes import (
    FakeHasher,
    FakeSessionStore,
    make_connection,
    make_registry,
    make_user,
    session_named,
)


def _provisioner(store: FakeSessionStore | None = None):
    registry = make_registry(
        make_user("alice", password="secret-a", token="tok-a"),
        make_user("bob", password="secret-b", token="tok-b"),
    )
    store = store or FakeSessionStore()
    return RestrictedAccessProvisioner(registry, store, default_strategies(FakeHasher())), registry, store


def _provision(provisioner, **fields):
    connection, _ = make_connection(session_ref=fields.pop("session_ref", None))
    credentials = Credentials.from_payload(fields, session_ref=connection.session_ref)
    return asyncio.run(provisioner.provision(connection, credentials))


def test_password_selects_matching_user() -> None:
    provisioner, registry, _ = _provisioner()

    result = _provision(provisioner, user="bob", password="secret-b")

    assert result.ok
    assert result.session is session_named(registry, "bob")
    assert result.strategy == "password"


def test_wrong_password_is_unauthorized() -> None:
    provisioner, _, _ = _provisioner()

    result = _provision(provisioner, user="bob", password="secret-a")

    assert not result.ok
    assert result.reason == REASON_UNAUTHORIZED


def test_unknown_user_is_unauthorized() -> None:
    provisioner, _, _ = _provisioner()

    result = _provision(provisioner, user="carol", password="secret-a")

    assert result.reason == REASON_UNAUTHORIZED


def test_token_selects_session() -> None:
    provisioner, registry, _ = _provisioner()

    result = _provision(provisioner, token="tok-b")

    assert result.session is session_named(registry, "bob")
    assert result.strategy == "token"


def test_token_presence_disables_password_strategy() -> None:
    provisioner, _, _ = _provisioner()

    result = _provision(provisioner, user="alice", password="secret-a", token="stale-token")

    assert result.reason == REASON_UNAUTHORIZED


def test_stored_session_reference_selects_principal() -> None:
    store = FakeSessionStore({"cookie-b": "bob"})
    provisioner, registry, _ = _provisioner(store)

    result = _provision(provisioner, session_ref="cookie-b")

    assert result.session is session_named(registry, "bob")
    assert result.strategy == "stored-session"


def test_scan_is_session_major_in_registry_order() -> None:
    # The cookie names alice (first in the registry) while the password
    # names bob; alice is reached first so her stored session wins.
    store = FakeSessionStore({"cookie-a": "alice"})
    provisioner, registry, _ = _provisioner(store)

    result = _provision(provisioner, session_ref="cookie-a", user="bob", password="secret-b")

    assert result.session is session_named(registry, "alice")
    assert result.strategy == "stored-session"


def test_reference_resolved_once_per_attempt() -> None:
    store = FakeSessionStore({})
    provisioner, _, _ = _provisioner(store)

    _provision(provisioner, session_ref="cookie-x", user="bob", password="secret-b")

    assert store.lookups == ["cookie-x"]


def test_empty_credentials_fail_without_store_lookup() -> None:
    provisioner, _, store = _provisioner()

    result = _provision(provisioner)

    assert result.reason == REASON_MISSING_CREDENTIALS
    assert store.lookups == []


def test_session_without_token_never_matches_token() -> None:
    registry = make_registry(make_user("alice", password="secret-a"))
    provisioner = RestrictedAccessProvisioner(registry, FakeSessionStore(), default_strategies(FakeHasher()))

    result = _provision(provisioner, token="anything")

    assert not result.ok


def test_credentials_repr_masks_secrets() -> None:
    credentials = Credentials(user="alice", password="hunter2", token="tok", session_ref="ref")

    text = repr(credentials)

    assert "hunter2" not in text
    assert "tok'" not in text
    assert "alice" in text
