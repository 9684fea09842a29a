"""Map exceptions to metric-friendly category labels."""

from __future__ import annotations

from .store import StoreUnavailableError
from .validation import ValidationError
from .resolution import ResolutionError
from .persistence import PersistenceError
from .connection import ConnectionStateError

_ERROR_CATEGORIES: tuple[tuple[type, str], ...] = (
    (ValidationError, "validation"),
    (StoreUnavailableError, "session_store"),
    (ResolutionError, "resolution"),
    (PersistenceError, "persistence"),
    (ConnectionStateError, "connection_state"),
    (TimeoutError, "timeout"),
    (ConnectionError, "connection"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a metric-friendly category label."""
    for cls, label in _ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["classify_error"]
