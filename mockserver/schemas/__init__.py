"""Pydantic schemas exposed by the application API."""
from .players import (
    JoinResponse,
    LeaveResponse,
    PlayerListItem,
    PlayerListResponse,
    PlayerView,
    UsernameRequest,
)
from .server import AuthResponse, HealthResponse, ServerInfoResponse

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "JoinResponse",
    "LeaveResponse",
    "PlayerListItem",
    "PlayerListResponse",
    "PlayerView",
    "ServerInfoResponse",
    "UsernameRequest",
]
