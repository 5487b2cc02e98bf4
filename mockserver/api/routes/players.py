"""Player join/leave/roster endpoints."""
import logging

from fastapi import APIRouter, Depends, status

from mockserver.api.dependencies import get_session_registry
from mockserver.schemas import (
    JoinResponse,
    LeaveResponse,
    PlayerListItem,
    PlayerListResponse,
    PlayerView,
    UsernameRequest,
)
from mockserver.services.session_registry import SessionRegistry, normalize_username
from mockserver.services.utils.errors import unwrap

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/players/join",
    response_model=JoinResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a player to the roster",
)
async def join_player(
    payload: UsernameRequest | None = None,
    sessions: SessionRegistry = Depends(get_session_registry),
) -> JoinResponse:
    result = unwrap(await sessions.join(payload.username if payload else None))
    logger.info(
        "Player joined: %s (%s/%s)",
        result.player.username,
        result.players_online,
        sessions.max_players,
    )
    return JoinResponse(
        player=PlayerView.from_player(result.player),
        players_online=result.players_online,
    )


@router.post("/players/leave", response_model=LeaveResponse, summary="Remove a player from the roster")
async def leave_player(
    payload: UsernameRequest | None = None,
    sessions: SessionRegistry = Depends(get_session_registry),
) -> LeaveResponse:
    username = payload.username if payload else None
    players_online = unwrap(await sessions.leave(username))
    logger.info("Player left: %s (%s online)", normalize_username(username), players_online)
    return LeaveResponse(players_online=players_online)


@router.get("/players", response_model=PlayerListResponse, summary="List connected players")
async def list_players(
    sessions: SessionRegistry = Depends(get_session_registry),
) -> PlayerListResponse:
    players = await sessions.list_players()
    return PlayerListResponse(
        players=[PlayerListItem.from_summary(p) for p in players],
        count=len(players),
        max_players=sessions.max_players,
    )
