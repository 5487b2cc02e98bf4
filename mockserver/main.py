"""FastAPI application entrypoint."""
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import MutableHeaders
from starlette.requests import Request

from mockserver.api.error_handlers import register_exception_handlers
from mockserver.api.router import api_router, stream_router
from mockserver.core.config import Settings, get_settings
from mockserver.core.logging import configure_logging
from mockserver.core.metrics import metrics, route_key
from mockserver.core.request_context import clear_request_id, new_request_id, set_request_id
from mockserver.services import ServiceRegistry
from mockserver.web.routes import router as web_router


class RequestIdMiddleware:
    """Tag each HTTP request with an id and record its latency."""

    def __init__(self, app, logger: logging.Logger):
        self.app = app
        self.logger = logger

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        # read back by the 500 handler, which runs outside this middleware
        request.state.request_id = request_id
        set_request_id(request_id)
        start = time.perf_counter()
        status_code: int | None = None

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            clear_request_id()

        if status_code is None:
            return
        duration_ms = int((time.perf_counter() - start) * 1000)
        metric_name = route_key(scope)
        metrics.record(metric_name, status_code=status_code, duration_ms=duration_ms)
        if metrics.should_alert(metric_name):
            self.logger.warning("Metric alert for %s (slow or error rate)", metric_name)


def create_app(
    settings: Settings | None = None,
    services: ServiceRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance."""

    settings = settings or get_settings()
    logger = configure_logging(settings)
    registry = services or ServiceRegistry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the uptime ticker on boot and tear everything down on exit."""

        await registry.startup()
        logger.info(
            "%s %s listening on port %s (world=%s, maxPlayers=%s)",
            settings.server_name,
            settings.server_version,
            settings.port,
            settings.world_name,
            settings.max_players,
        )
        if settings.public_url:
            logger.info("Public URL: %s", settings.public_url)
        try:
            yield
        finally:
            logger.info("Shutting down server")
            await registry.shutdown()
            logger.info("Server stopped")

    app = FastAPI(
        title="Hytale Mock Server",
        description="Mock multiplayer game server session lifecycle API",
        version=settings.server_version,
        lifespan=lifespan,
    )
    app.state.services = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware, logger=logger)

    if settings.static_dir is not None and settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

    app.include_router(web_router)
    app.include_router(api_router)
    app.include_router(stream_router)
    register_exception_handlers(app, settings)
    return app


app = create_app()
