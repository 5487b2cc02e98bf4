"""FastAPI dependency providers."""
from fastapi import Depends
from starlette.requests import HTTPConnection

from mockserver.core.config import Settings
from mockserver.services.connection_hub import ConnectionHub
from mockserver.services.health_service import HealthService
from mockserver.services.registry import ServiceRegistry
from mockserver.services.session_registry import SessionRegistry


def get_service_registry(connection: HTTPConnection) -> ServiceRegistry:
    """Return the service registry stored on the application state.

    Typed as ``HTTPConnection`` so HTTP routes and WebSocket routes share it.
    """

    registry = getattr(connection.app.state, "services", None)
    if not isinstance(registry, ServiceRegistry):
        raise RuntimeError("Service registry not initialised")
    return registry


def get_session_registry(
    registry: ServiceRegistry = Depends(get_service_registry),
) -> SessionRegistry:
    return registry.session_registry


def get_health_service(
    registry: ServiceRegistry = Depends(get_service_registry),
) -> HealthService:
    return registry.health_service


def get_connection_hub(
    registry: ServiceRegistry = Depends(get_service_registry),
) -> ConnectionHub:
    return registry.connection_hub


def get_app_settings(registry: ServiceRegistry = Depends(get_service_registry)) -> Settings:
    return registry.settings
