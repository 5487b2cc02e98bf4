"""Root route describing the mock server and its endpoints."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from mockserver.api.dependencies import get_app_settings
from mockserver.core.config import Settings

router = APIRouter()

ENDPOINTS: Dict[str, str] = {
    "health": "GET /api/health",
    "serverInfo": "GET /api/server/info",
    "auth": "POST /api/server/auth",
    "playersJoin": "POST /api/players/join",
    "playersLeave": "POST /api/players/leave",
    "playersList": "GET /api/players",
    "metrics": "GET /api/metrics",
    "events": "WS /ws",
}


@router.get("/", include_in_schema=False)
async def index(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    return {
        "name": "Hytale Server Mock",
        "status": "running",
        "version": settings.server_version,
        "message": "Servidor mockado em execução",
        "endpoints": dict(ENDPOINTS),
    }
