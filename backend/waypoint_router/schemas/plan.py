from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from waypoint_router.schemas.geometry import CircleObstacle, Point, RoutePointIn, RoutePointOut


class GridPlanRequest(BaseModel):
    start: Point
    end: Point
    obstacles: List[CircleObstacle] = Field(default_factory=list)
    step: Optional[float] = Field(None, gt=0, description="Lattice spacing; defaults to GRID_STEP")


class VisibilityPlanRequest(BaseModel):
    start: Point
    end: Point
    obstacles: List[CircleObstacle] = Field(default_factory=list)


class VirtualPointsRequest(BaseModel):
    obstacles: List[CircleObstacle] = Field(default_factory=list)
    margin: Optional[float] = Field(None, ge=0)
    angle_step_deg: Optional[float] = Field(None, gt=0, le=360)


class RouteRequest(BaseModel):
    waypoints: List[RoutePointIn]
    obstacles: List[CircleObstacle] = Field(default_factory=list)
    strategy: Literal["grid", "visibility"] = "grid"


class PathOut(BaseModel):
    points: List[Point]
    # False when the result is a degraded fallback that crosses an obstacle
    is_clear: bool
    note: str = ""  # direct|detour|degraded


class VirtualPointsOut(BaseModel):
    points: List[Point]
    obstacles_version: str


class RouteOut(BaseModel):
    points: List[RoutePointOut]
    strategy: Literal["grid", "visibility"]
    is_clear: bool
    detour_count: int = 0
