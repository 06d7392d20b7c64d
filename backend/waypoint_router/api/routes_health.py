from __future__ import annotations

from fastapi import APIRouter
from waypoint_router.config import settings

router = APIRouter()


@router.get("/health")
def health():
    """Health check endpoint with planner defaults."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "strategies": ["grid", "visibility"],
        "grid_step": settings.grid_step,
        "version": "0.1.0",
    }
