"""Response schemas for server metadata, auth and health endpoints."""
from datetime import datetime

from mockserver.models import ServerInfo, ServerStatus

from .base import CamelModel


class HealthResponse(CamelModel):
    status: str = "ok"
    timestamp: str
    uptime: int


class ServerInfoResponse(CamelModel):
    """Flattened metadata snapshot returned by `/api/server/info`."""

    name: str
    version: str
    status: ServerStatus
    world_name: str
    players_online: int
    max_players: int
    uptime: int
    start_time: datetime

    @classmethod
    def from_info(cls, info: ServerInfo) -> "ServerInfoResponse":
        return cls(**info.model_dump())


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    username: str
    message: str = "Autenticado no servidor Hytale!"
