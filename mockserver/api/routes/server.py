"""Server metadata and authentication endpoints."""
import logging

from fastapi import APIRouter, Depends

from mockserver.api.dependencies import get_session_registry
from mockserver.schemas import AuthResponse, ServerInfoResponse, UsernameRequest
from mockserver.services.session_registry import SessionRegistry
from mockserver.services.utils.errors import unwrap

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/server/info", response_model=ServerInfoResponse, summary="Server metadata snapshot")
async def read_server_info(
    sessions: SessionRegistry = Depends(get_session_registry),
) -> ServerInfoResponse:
    return ServerInfoResponse.from_info(await sessions.get_info())


@router.post("/server/auth", response_model=AuthResponse, summary="Issue a placeholder session token")
async def authenticate(
    payload: UsernameRequest | None = None,
    sessions: SessionRegistry = Depends(get_session_registry),
) -> AuthResponse:
    grant = unwrap(await sessions.authenticate(payload.username if payload else None))
    logger.info("Authenticated %s", grant.username)
    return AuthResponse(token=grant.token, username=grant.username)
