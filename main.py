"""CLI entry-point for running the mock game server."""
from __future__ import annotations

import uvicorn

from mockserver.core.config import get_settings


def main() -> None:
    """Run the ASGI application using uvicorn.

    uvicorn owns SIGINT/SIGTERM: it stops accepting connections, closes the
    open ones, runs the lifespan teardown (ticker stop, WebSocket close) and
    cancels whatever is left once the grace period expires.
    """
    settings = get_settings()
    uvicorn.run(
        "mockserver.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_period,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":
    main()
