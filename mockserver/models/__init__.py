"""Domain models shared across services and API schemas."""
from .domain import (
    Player,
    PlayerSummary,
    Position,
    ServerInfo,
    ServerMetadata,
    ServerStatus,
)

__all__ = [
    "Player",
    "PlayerSummary",
    "Position",
    "ServerInfo",
    "ServerMetadata",
    "ServerStatus",
]
