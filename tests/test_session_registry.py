"""Tests for the in-memory session registry."""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from mockserver.models import ServerStatus
from mockserver.services.session_registry import (
    MAX_USERNAME_LENGTH,
    RegistryFailure,
    SessionRegistry,
    TOKEN_PREFIX,
    normalize_username,
)

pytestmark = pytest.mark.anyio


def _registry(max_players: int = 10, **kwargs) -> SessionRegistry:
    return SessionRegistry(
        name="Test Server",
        version="0.0.1",
        world_name="Zone 1",
        max_players=max_players,
        **kwargs,
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("player1", "player1"),
        ("  padded  ", "padded"),
        ("x" * 40, "x" * MAX_USERNAME_LENGTH),
        ("", None),
        ("    ", None),
        (None, None),
        (42, None),
        (["player1"], None),
    ],
)
def test_normalize_username(raw, expected) -> None:
    assert normalize_username(raw) == expected


async def test_join_returns_trimmed_player_and_count() -> None:
    registry = _registry()

    outcome = await registry.join("  steve ")

    assert outcome.ok
    assert outcome.value.player.username == "steve"
    assert outcome.value.players_online == 1
    position = outcome.value.player.position
    assert (position.x, position.y, position.z) == (0.0, 0.0, 0.0)


async def test_join_assigns_distinct_ids() -> None:
    registry = _registry()

    first = await registry.join("a")
    second = await registry.join("b")

    assert first.value.player.id != second.value.player.id


async def test_duplicate_join_is_rejected_without_changing_roster() -> None:
    registry = _registry()
    await registry.join("player1")

    outcome = await registry.join(" player1 ")

    assert not outcome.ok
    assert outcome.failure is RegistryFailure.ALREADY_PRESENT
    assert await registry.count() == 1


async def test_usernames_are_case_sensitive() -> None:
    registry = _registry()
    await registry.join("Player")

    outcome = await registry.join("player")

    assert outcome.ok
    assert await registry.count() == 2


async def test_join_fails_with_capacity_once_full() -> None:
    registry = _registry(max_players=3)
    for name in ("a", "b", "c"):
        assert (await registry.join(name)).ok

    outcome = await registry.join("d")

    assert outcome.failure is RegistryFailure.CAPACITY
    assert await registry.count() == 3


async def test_duplicate_check_runs_before_capacity_check() -> None:
    registry = _registry(max_players=1)
    await registry.join("a")

    outcome = await registry.join("a")

    assert outcome.failure is RegistryFailure.ALREADY_PRESENT


@pytest.mark.parametrize("raw", ["", "   ", None, 7])
async def test_invalid_usernames_are_rejected(raw) -> None:
    registry = _registry()

    for operation in (registry.authenticate, registry.join, registry.leave):
        outcome = await operation(raw)
        assert outcome.failure is RegistryFailure.INVALID_INPUT

    assert await registry.count() == 0


async def test_leave_removes_player() -> None:
    registry = _registry()
    await registry.join("a")
    await registry.join("b")

    outcome = await registry.leave("a")

    assert outcome.ok
    assert outcome.value == 1
    assert [p.username for p in await registry.list_players()] == ["b"]


async def test_leave_unknown_player_fails_with_not_found() -> None:
    registry = _registry()
    await registry.join("a")

    outcome = await registry.leave("ghost")

    assert outcome.failure is RegistryFailure.NOT_FOUND
    assert await registry.count() == 1


async def test_list_players_preserves_join_order() -> None:
    registry = _registry()
    for name in ("a", "b", "c"):
        await registry.join(name)
    await registry.leave("b")
    await registry.join("b")

    players = await registry.list_players()

    assert [p.username for p in players] == ["a", "c", "b"]


async def test_joined_at_comes_from_clock() -> None:
    instants = iter(
        datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=i) for i in range(10)
    )
    registry = _registry(clock=lambda: next(instants))

    await registry.join("a")
    players = await registry.list_players()
    info = await registry.get_info()

    assert info.start_time == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert players[0].joined_at == datetime(2026, 1, 1, 0, 0, 1, tzinfo=timezone.utc)


async def test_authenticate_returns_unique_tokens_without_joining() -> None:
    registry = _registry()

    first = await registry.authenticate(" alex ")
    second = await registry.authenticate("alex")

    assert first.value.username == "alex"
    assert first.value.token.startswith(TOKEN_PREFIX)
    assert first.value.token != second.value.token
    assert await registry.count() == 0


async def test_tick_increases_uptime_by_exactly_n() -> None:
    registry = _registry()

    for _ in range(5):
        await registry.tick()

    info = await registry.get_info()
    assert info.uptime == 5


async def test_get_info_reports_roster_size_and_metadata() -> None:
    registry = _registry(max_players=4)
    await registry.join("a")

    info = await registry.get_info()

    assert info.name == "Test Server"
    assert info.world_name == "Zone 1"
    assert info.status is ServerStatus.RUNNING
    assert info.players_online == 1
    assert info.max_players == 4
    assert info.uptime == 0


async def test_close_marks_server_stopped() -> None:
    registry = _registry()

    await registry.close()

    assert (await registry.get_info()).status is ServerStatus.STOPPED


async def test_concurrent_joins_never_exceed_capacity() -> None:
    registry = _registry(max_players=10)

    outcomes = await asyncio.gather(*(registry.join(f"player{i}") for i in range(25)))

    accepted = [o for o in outcomes if o.ok]
    rejected = [o for o in outcomes if not o.ok]
    assert len(accepted) == 10
    assert all(o.failure is RegistryFailure.CAPACITY for o in rejected)
    assert await registry.count() == 10


async def test_concurrent_joins_with_same_username_admit_one() -> None:
    registry = _registry()

    outcomes = await asyncio.gather(*(registry.join("same") for _ in range(8)))

    assert sum(1 for o in outcomes if o.ok) == 1
    assert await registry.count() == 1


async def test_counts_stay_consistent_under_mixed_traffic() -> None:
    registry = _registry(max_players=5)
    await asyncio.gather(*(registry.join(f"p{i}") for i in range(5)))

    await asyncio.gather(
        *(registry.leave(f"p{i}") for i in range(5)),
        *(registry.join(f"q{i}") for i in range(5)),
        registry.tick(),
    )

    players = await registry.list_players()
    info = await registry.get_info()
    assert len(players) == info.players_online <= 5
    assert len({p.username for p in players}) == len(players)
    assert info.uptime == 1
