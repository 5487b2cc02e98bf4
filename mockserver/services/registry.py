"""Service registry that wires all application services together."""
import asyncio
import logging
import signal

from mockserver.core.config import Settings
from mockserver.core.request_context import request_context
from mockserver.core.server_info import format_uptime
from mockserver.core.tasks import LifecycleManager
from mockserver.services.connection_hub import ConnectionHub
from mockserver.services.health_service import HealthService
from mockserver.services.session_registry import SessionRegistry
from mockserver.services.uptime_ticker import UptimeTicker

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Container object for dependency injection."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.session_registry = SessionRegistry(
            name=settings.server_name,
            version=settings.server_version,
            world_name=settings.world_name,
            max_players=settings.max_players,
        )
        self.connection_hub = ConnectionHub()
        self.health_service = HealthService(self.session_registry)
        self.uptime_ticker = UptimeTicker(
            self.session_registry,
            interval=settings.tick_interval,
            on_error=self._handle_fatal_error,
        )
        self._startup_lock = asyncio.Lock()
        self._shutdown_lock = asyncio.Lock()
        self._lifecycle = LifecycleManager(name="service-registry", logger=logger)

    async def startup(self) -> None:
        async with self._startup_lock:
            with request_context("bg:registry"):
                logger.info("Starting background services")
                self.connection_hub.reset()
                await self._lifecycle.start([self.uptime_ticker.start])
                logger.info("Background services started")

    async def shutdown(self) -> None:
        async with self._shutdown_lock:
            with request_context("bg:registry"):
                logger.info("Stopping background services")
                await self._lifecycle.stop([
                    self.uptime_ticker.stop,
                    self.connection_hub.shutdown,
                ])
                await self.session_registry.close()
                info = await self.session_registry.get_info()
                logger.info(
                    "Background services stopped (uptime %s, %s player(s) dropped)",
                    format_uptime(info.uptime),
                    info.players_online,
                )

    def _handle_fatal_error(self, exc: BaseException) -> None:
        # routed through uvicorn's signal handler so the lifespan teardown still runs
        logger.critical("Unrecoverable background failure, requesting shutdown: %s", exc)
        signal.raise_signal(signal.SIGTERM)
