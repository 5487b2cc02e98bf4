"""Root API router that aggregates all endpoint modules."""
from fastapi import APIRouter

from mockserver.api.routes import health, metrics, players, server, stream

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router, tags=["health"])
api_router.include_router(server.router, tags=["server"])
api_router.include_router(players.router, tags=["players"])
api_router.include_router(metrics.router, tags=["metrics"])

# the push channel lives outside the /api prefix
stream_router = stream.router
