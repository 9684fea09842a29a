"""Centralized exception classes for the relay server.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - validation.py: Input validation errors with error codes
    - store.py: Session store lookup failures (recovered locally)
    - resolution.py: Reverse lookup failures (recovered locally)
    - persistence.py: User store write failures
    - connection.py: Connection state machine violations
    - classify.py: Exception-to-telemetry label mapping
"""

from .classify import classify_error
from .store import StoreUnavailableError
from .validation import ValidationError
from .resolution import ResolutionError
from .persistence import PersistenceError
from .connection import ConnectionStateError

__all__ = [
    # Validation
    "ValidationError",
    # Recovered locally
    "StoreUnavailableError",
    "ResolutionError",
    # Persistence
    "PersistenceError",
    # Connection state
    "ConnectionStateError",
    # Classification
    "classify_error",
]
