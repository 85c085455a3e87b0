"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from graphseg import __version__
from graphseg.engine.metrics import METRICS
from graphseg.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        metrics=sorted(METRICS),
    )
