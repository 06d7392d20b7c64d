from __future__ import annotations

from typing import List, Literal

from pydantic import AliasChoices, BaseModel, Field

from waypoint_router.services.geometry import Circle, Point as CorePoint


class Point(BaseModel):
    x: float
    y: float

    @classmethod
    def from_core(cls, p) -> "Point":
        return cls(x=p.x, y=p.y)


class CircleObstacle(BaseModel):
    x: float
    y: float
    # "r" accepted for compatibility with simulator world files
    radius: float = Field(..., gt=0, validation_alias=AliasChoices("radius", "r"))

    def to_core(self) -> Circle:
        return Circle(self.x, self.y, self.radius)


class RoutePointIn(BaseModel):
    x: float
    y: float
    kind: Literal["original", "detour"] = "original"


class RoutePointOut(BaseModel):
    x: float
    y: float
    kind: Literal["original", "detour"]


def to_circles(obstacles: List[CircleObstacle]) -> List[Circle]:
    return [o.to_core() for o in obstacles]


def to_point(p: Point) -> CorePoint:
    return CorePoint(p.x, p.y)
