"""Connection and session handling.

connections.py:
    Pool of WebSocket slots with semaphore-based limiting. Rejects
    connections at capacity.

rooms.py:
    Broadcast rooms keyed by session id; every bound connection of a
    session receives what the session emits.

session/:
    Session state and operations (session.py) and the registry of live
    sessions (registry.py).

websocket/:
    WebSocket message routing and lifecycle:
    - Connection state machine (connection.py)
    - Binding and the bound handler table (binder.py)
    - Message parsing and validation (parser.py)
    - Error response helpers (errors.py)
    - Send utilities (helpers.py)
    - Main connection handler (manager.py)
"""
