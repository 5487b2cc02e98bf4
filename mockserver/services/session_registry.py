"""In-memory roster and server metadata guarded by a single lock.

The registry is the only owner of session state. Every operation runs inside
one ``asyncio.Lock`` so the validate/duplicate/capacity sequence of a join can
never interleave with another join, leave or tick. Reads take the same lock
and hand out deep copies, so callers never observe a roster mid-mutation.

Expected failures (bad username, duplicate, full server, unknown player) are
returned as an :class:`Outcome` carrying a :class:`RegistryFailure` instead of
being raised; the HTTP layer decides how to surface them.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar
from uuid import uuid4

from mockserver.core.server_info import utc_now
from mockserver.models import (
    Player,
    PlayerSummary,
    ServerInfo,
    ServerMetadata,
    ServerStatus,
)

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 32
TOKEN_PREFIX = "mock-token-"

T = TypeVar("T")
Clock = Callable[[], datetime]


class RegistryFailure(str, Enum):
    """Failure kinds a registry operation can report."""

    INVALID_INPUT = "invalid_input"
    ALREADY_PRESENT = "already_present"
    CAPACITY = "capacity"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a registry operation: either a value or a failure kind."""

    value: Optional[T] = None
    failure: Optional[RegistryFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: RegistryFailure) -> "Outcome[T]":
        return cls(failure=failure)


@dataclass(frozen=True)
class AuthGrant:
    token: str
    username: str


@dataclass(frozen=True)
class JoinResult:
    player: Player
    players_online: int


def normalize_username(raw: Any) -> str | None:
    """Trim and truncate ``raw``; return ``None`` when nothing usable remains."""

    if not isinstance(raw, str):
        return None
    normalized = raw.strip()[:MAX_USERNAME_LENGTH]
    return normalized or None


def generate_token() -> str:
    return f"{TOKEN_PREFIX}{uuid4()}"


class SessionRegistry:
    """Single source of truth for roster membership and server metadata."""

    def __init__(
        self,
        *,
        name: str,
        version: str,
        world_name: str,
        max_players: int,
        clock: Clock = utc_now,
    ) -> None:
        self._clock = clock
        self._metadata = ServerMetadata(
            name=name,
            version=version,
            world_name=world_name,
            max_players=max_players,
            start_time=clock(),
        )
        # keyed by username; dict order doubles as join order
        self._players: dict[str, Player] = {}
        self._lock = asyncio.Lock()

    @property
    def max_players(self) -> int:
        return self._metadata.max_players

    async def authenticate(self, raw_username: Any) -> Outcome[AuthGrant]:
        username = normalize_username(raw_username)
        if username is None:
            return Outcome.fail(RegistryFailure.INVALID_INPUT)
        return Outcome.success(AuthGrant(token=generate_token(), username=username))

    async def join(self, raw_username: Any) -> Outcome[JoinResult]:
        username = normalize_username(raw_username)
        if username is None:
            return Outcome.fail(RegistryFailure.INVALID_INPUT)

        async with self._lock:
            if username in self._players:
                return Outcome.fail(RegistryFailure.ALREADY_PRESENT)
            if len(self._players) >= self._metadata.max_players:
                return Outcome.fail(RegistryFailure.CAPACITY)

            player = Player(username=username, joined_at=self._clock())
            self._players[username] = player
            online = len(self._players)

        logger.debug("Roster insert %s (%s/%s)", username, online, self.max_players)
        return Outcome.success(JoinResult(player=player.model_copy(deep=True), players_online=online))

    async def leave(self, raw_username: Any) -> Outcome[int]:
        username = normalize_username(raw_username)
        if username is None:
            return Outcome.fail(RegistryFailure.INVALID_INPUT)

        async with self._lock:
            if self._players.pop(username, None) is None:
                return Outcome.fail(RegistryFailure.NOT_FOUND)
            online = len(self._players)

        logger.debug("Roster remove %s (%s/%s)", username, online, self.max_players)
        return Outcome.success(online)

    async def list_players(self) -> list[PlayerSummary]:
        async with self._lock:
            return [
                PlayerSummary(id=p.id, username=p.username, joined_at=p.joined_at)
                for p in self._players.values()
            ]

    async def count(self) -> int:
        async with self._lock:
            return len(self._players)

    async def get_info(self) -> ServerInfo:
        async with self._lock:
            meta = self._metadata
            return ServerInfo(
                name=meta.name,
                version=meta.version,
                status=meta.status,
                world_name=meta.world_name,
                players_online=len(self._players),
                max_players=meta.max_players,
                uptime=int(meta.elapsed_seconds),
                start_time=meta.start_time,
            )

    async def tick(self) -> int:
        """Advance uptime by one second and return the new value."""
        async with self._lock:
            self._metadata.elapsed_seconds += 1
            return self._metadata.elapsed_seconds

    async def close(self) -> None:
        async with self._lock:
            self._metadata.status = ServerStatus.STOPPED
