"""Connection state machine violations."""


class ConnectionStateError(RuntimeError):
    """Raised when a connection is bound a second time.

    Binding is the single unbound -> bound transition of a connection; a
    second attempt indicates a routing bug rather than a client error.
    """


__all__ = ["ConnectionStateError"]
