"""Domain models for the simulated game session state."""
from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from mockserver.core.server_info import utc_now


class ServerStatus(str, Enum):
    """Lifecycle status advertised by the server."""

    RUNNING = "running"
    STOPPED = "stopped"


class Position(BaseModel):
    """World coordinates of a player. Reserved; nothing moves players yet."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Player(BaseModel):
    """A player currently present in the roster."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    username: str
    joined_at: datetime = Field(default_factory=utc_now)
    position: Position = Field(default_factory=Position)


class PlayerSummary(BaseModel):
    """Roster entry exposed by player listings."""

    id: str
    username: str
    joined_at: datetime


class ServerMetadata(BaseModel):
    """Process-wide server description.

    ``elapsed_seconds`` is advanced by the uptime ticker; ``status`` flips to
    stopped when the registry is closed at shutdown. Everything else is fixed
    once the registry is created.
    """

    name: str
    version: str
    status: ServerStatus = ServerStatus.RUNNING
    world_name: str
    max_players: int = Field(..., gt=0)
    start_time: datetime = Field(default_factory=utc_now)
    elapsed_seconds: int = Field(0, ge=0)


class ServerInfo(BaseModel):
    """Point-in-time snapshot of the metadata plus the roster size."""

    name: str
    version: str
    status: ServerStatus
    world_name: str
    players_online: int
    max_players: int
    uptime: int
    start_time: datetime
