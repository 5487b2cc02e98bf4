"""Metrics endpoint for operational visibility."""
from fastapi import APIRouter

from mockserver.core.metrics import metrics

router = APIRouter()


@router.get("/metrics", summary="Return aggregated request metrics per route")
async def read_metrics() -> dict:
    return {
        "metrics": metrics.snapshot(),
    }
