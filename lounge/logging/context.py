"""Logging context helpers for consistent structured fields."""

from __future__ import annotations

import logging
from contextvars import ContextVar, Token

_SESSION: ContextVar[str] = ContextVar("session", default="-")
_CONNECTION: ContextVar[str] = ContextVar("connection", default="-")


def set_log_context(
    *,
    session: str | None = None,
    connection: str | None = None,
) -> list[tuple[ContextVar[str], Token[str]]]:
    """Set log context values and return tokens for reset."""
    tokens: list[tuple[ContextVar[str], Token[str]]] = []
    if session is not None:
        tokens.append((_SESSION, _SESSION.set(session)))
    if connection is not None:
        tokens.append((_CONNECTION, _CONNECTION.set(connection)))
    return tokens


def reset_log_context(tokens: list[tuple[ContextVar[str], Token[str]]]) -> None:
    """Reset log context values using tokens returned by set_log_context."""
    for var, token in reversed(tokens):
        var.reset(token)


def current_log_context() -> dict[str, str]:
    """Return the active context fields (used when tagging error reports)."""
    return {"session": _SESSION.get(), "connection": _CONNECTION.get()}


def install_log_context() -> None:
    """Install a LogRecord factory that injects context fields."""
    if getattr(install_log_context, "_installed", False):
        return

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.session = _SESSION.get()
        record.connection = _CONNECTION.get()
        return record

    logging.setLogRecordFactory(record_factory)
    install_log_context._installed = True  # type: ignore[attr-defined]


__all__ = [
    "current_log_context",
    "install_log_context",
    "reset_log_context",
    "set_log_context",
]
