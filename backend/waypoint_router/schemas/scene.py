from __future__ import annotations

from pydantic import BaseModel, Field
from typing import List, Optional
import datetime as dt

from waypoint_router.schemas.geometry import CircleObstacle, Point, RoutePointOut


class SceneCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    obstacles: List[CircleObstacle] = Field(default_factory=list)
    waypoints: List[Point] = Field(default_factory=list, description="Original waypoints in visiting order")


class ObstacleAdd(BaseModel):
    x: float
    y: float
    radius: Optional[float] = Field(None, gt=0, description="Omit to use the scene's next_radius")


class SceneOut(BaseModel):
    id: str
    title: str
    obstacles: List[CircleObstacle]
    waypoints: List[RoutePointOut]
    next_radius: float
    last_strategy: Optional[str] = None
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None
