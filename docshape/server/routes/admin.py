"""
Health and service information endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from config import Settings

from ..models import HealthResponse
from ..dependencies import get_settings, get_store, get_uptime
from ...storage import BaseQueryStore

router = APIRouter()

_version = "0.1.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the server is healthy and running.",
)
def health_check(
    store: BaseQueryStore = Depends(get_store),
    uptime: float = Depends(get_uptime),
):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=_version,
        uptime_seconds=uptime,
        saved_queries=len(store),
    )


@router.get(
    "/settings",
    summary="Engine settings",
    description="Get the engine settings the server is running with.",
)
def engine_settings(
    settings: Settings = Depends(get_settings),
):
    """Get engine settings."""
    return settings.to_dict()
