"""Main FastAPI server for the chat relay.

Provides:

- REST endpoints for health checks (/healthz, /)
- WebSocket endpoint for clients (/ws)
- Eager runtime construction on startup (user store, session registry)
- Telemetry init and flush around the process lifetime

Server Lifecycle:
    1. On startup: build runtime deps; in restricted-access mode every
       stored user becomes a live session
    2. Accept WebSocket connections on /ws
    3. Authenticate and bind each connection to a session
    4. On shutdown: close all sessions, flush telemetry

Example:
    Run directly with uvicorn:
        $ uvicorn lounge.server:app --host 0.0.0.0 --port 9000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket

from .logging import configure_logging
from .runtime import RuntimeDeps, build_runtime_deps
from .telemetry import init_telemetry, shutdown_telemetry
from .handlers.websocket import handle_websocket_connection

logger = logging.getLogger(__name__)


def create_app(runtime_deps: RuntimeDeps | None = None) -> FastAPI:
    """Build the application.

    Args:
        runtime_deps: Prebuilt services (tests); built from the
            environment on startup when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_telemetry()
        if app.state.runtime_deps is None:
            app.state.runtime_deps = await build_runtime_deps()
        try:
            yield
        finally:
            await app.state.runtime_deps.shutdown()
            shutdown_telemetry()

    app = FastAPI(lifespan=lifespan)
    app.state.runtime_deps = runtime_deps

    @app.get("/")
    async def root():
        """Root endpoint for load balancer health checks."""
        return app.state.runtime_deps.status()

    @app.get("/healthz")
    async def healthz():
        return app.state.runtime_deps.status()

    @app.get("/favicon.ico", status_code=204)
    async def favicon():
        """Suppress favicon requests from browsers/probes."""
        return None

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await handle_websocket_connection(websocket, app.state.runtime_deps)

    return app


configure_logging()
app = create_app()
