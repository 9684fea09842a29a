"""Runtime dependency bootstrap.

This module eagerly builds all runtime services at startup. The access
mode (LOUNGE_PUBLIC) picks the session provisioner once for the whole
process; in restricted-access mode every stored user becomes a live
session before the first connection is accepted.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from lounge.auth import (
    Authenticator,
    PasswordHasher,
    OpenAccessProvisioner,
    RestrictedAccessProvisioner,
    default_strategies,
)
from lounge.store import SessionStore, UserStore
from lounge.handlers.rooms import BroadcastRooms
from lounge.handlers.connections import ConnectionPool
from lounge.handlers.session import Session, SessionRegistry
from lounge.handlers.websocket import ConnectionBinder
from lounge.identity import NetworkIdentityEnricher, ReverseResolver, reverse_lookup
from lounge.config import (
    PUBLIC_MODE,
    USERS_DIR,
    NETWORK_ENRICHMENT_REQUIRED,
    MAX_CONCURRENT_CONNECTIONS,
)

from .dependencies import RuntimeDeps

logger = logging.getLogger(__name__)


async def _load_sessions(
    users: UserStore,
    registry: SessionRegistry,
    rooms: BroadcastRooms,
) -> None:
    configs = await asyncio.to_thread(users.load_all)
    for config in configs:
        registry.add(Session(config, rooms=rooms, users=users))


async def build_runtime_deps(
    *,
    public_mode: bool = PUBLIC_MODE,
    enrichment_required: bool = NETWORK_ENRICHMENT_REQUIRED,
    users_dir: Path | str = USERS_DIR,
    session_store: SessionStore | None = None,
    resolver: ReverseResolver = reverse_lookup,
    hasher: PasswordHasher | None = None,
    max_connections: int = MAX_CONCURRENT_CONNECTIONS,
) -> RuntimeDeps:
    """Build runtime dependencies for the configured access mode.

    Keyword arguments default to the environment configuration; tests
    override them to inject fakes.
    """
    hasher = hasher or PasswordHasher()
    registry = SessionRegistry()
    rooms = BroadcastRooms()
    users: UserStore | None = None

    if public_mode:
        provisioner = OpenAccessProvisioner(registry, rooms)
    else:
        users = UserStore(users_dir)
        await _load_sessions(users, registry, rooms)
        provisioner = RestrictedAccessProvisioner(
            registry,
            session_store or SessionStore(),
            default_strategies(hasher),
        )

    binder = ConnectionBinder(rooms, hasher, open_access=public_mode)
    authenticator = Authenticator(
        provisioner,
        registry,
        binder,
        NetworkIdentityEnricher(resolver),
        enrichment_required=enrichment_required,
    )
    logger.info(
        "runtime ready: mode=%s enrichment=%s sessions=%s",
        "public" if public_mode else "private",
        enrichment_required,
        len(registry),
    )
    return RuntimeDeps(
        connections=ConnectionPool(max_connections),
        registry=registry,
        rooms=rooms,
        binder=binder,
        authenticator=authenticator,
        users=users,
    )


__all__ = ["build_runtime_deps"]
