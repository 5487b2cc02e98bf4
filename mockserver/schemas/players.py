"""Request/response schemas for the player session endpoints."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mockserver.models import Player, PlayerSummary

from .base import CamelModel


class UsernameRequest(BaseModel):
    """Body accepted by auth/join/leave.

    ``username`` is untyped so that missing or non-string values reach the
    registry and come back as an invalid-input failure (400).
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"username": "player1"}},
    )

    username: Any = None


class PlayerView(CamelModel):
    """Player as returned by a successful join; coordinates are flattened."""

    id: str
    username: str
    joined_at: datetime
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_player(cls, player: Player) -> "PlayerView":
        return cls(
            id=player.id,
            username=player.username,
            joined_at=player.joined_at,
            x=player.position.x,
            y=player.position.y,
            z=player.position.z,
        )


class PlayerListItem(CamelModel):
    id: str
    username: str
    joined_at: datetime

    @classmethod
    def from_summary(cls, summary: PlayerSummary) -> "PlayerListItem":
        return cls(id=summary.id, username=summary.username, joined_at=summary.joined_at)


class JoinResponse(CamelModel):
    success: bool = True
    message: str = "Jogador conectado com sucesso"
    player: PlayerView
    players_online: int


class LeaveResponse(CamelModel):
    success: bool = True
    message: str = "Jogador desconectado"
    players_online: int


class PlayerListResponse(CamelModel):
    players: list[PlayerListItem] = Field(default_factory=list)
    count: int
    max_players: int
