"""Health check service."""
from mockserver.core.server_info import utc_now
from mockserver.services.session_registry import SessionRegistry


class HealthService:
    """Encapsulates health probe logic for the API layer."""

    def __init__(self, registry: SessionRegistry) -> None:
        self._registry = registry

    async def check(self) -> dict:
        info = await self._registry.get_info()
        return {
            "status": "ok",
            "timestamp": utc_now().isoformat(),
            "uptime": info.uptime,
        }
