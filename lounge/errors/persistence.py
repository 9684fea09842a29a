"""User store write failures."""


class PersistenceError(Exception):
    """Raised when a user configuration could not be written.

    Attributes:
        user: Name of the user whose configuration failed to persist.
    """

    def __init__(self, user: str, message: str | None = None) -> None:
        super().__init__(message or f"failed to persist configuration for {user!r}")
        self.user = user


__all__ = ["PersistenceError"]
