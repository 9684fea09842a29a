"""Lounge relay server package.

This package binds real-time WebSocket connections to long-lived chat
sessions and routes events between them:

- Authentication with open-access or restricted-access provisioning
- Stored-session, bearer-token and password strategies
- Reverse-DNS enrichment of a session's origin before binding
- Multi-device binding (many connections, one session)
- Per-session event fan-out through broadcast rooms

Architecture Overview:
    - server.py: FastAPI application entry point
    - config/: Configuration modules (environment-based)
    - auth/: Credentials, strategies, provisioners and the authenticator
    - identity/: Reverse address resolution and enrichment
    - store/: Session store (Redis) and user store (JSON files)
    - state/: Session domain dataclasses (networks, channels, users)
    - handlers/: Connection pool, session registry, WebSocket handling
    - messages/: Bound-connection event handlers
    - runtime/: Startup assembly of long-lived services

Example:
    Start the server with uvicorn:

    $ uvicorn lounge.server:app --host 0.0.0.0 --port 9000

Environment Variables:
    Optional:
        - LOUNGE_PUBLIC: Open-access mode (default: false)
        - LOUNGE_WEBIRC: Resolve client hostnames before binding
        - LOUNGE_REVERSE_PROXY: Trust X-Forwarded-For
        - LOUNGE_USERS_DIR: Directory of user JSON files
        - LOUNGE_REDIS_URL: Session store used for cookie sign-in
"""
