"""Reverse address resolution failures."""


class ResolutionError(Exception):
    """Raised when a reverse lookup errors out or returns no names.

    Attributes:
        address: The network address that could not be resolved.
    """

    def __init__(self, address: str, message: str | None = None) -> None:
        super().__init__(message or f"reverse lookup failed for {address!r}")
        self.address = address


__all__ = ["ResolutionError"]
