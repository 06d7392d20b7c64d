from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Sequence

from waypoint_router.config import Settings, settings as default_settings
from waypoint_router.services.astar import grid_find_path
from waypoint_router.services.errors import InvalidInputError, WaypointInsideObstacleError
from waypoint_router.services.geometry import Circle, Point, make_blocked_predicate, path_is_clear, point_in_circle
from waypoint_router.services.visibility import visibility_find_path

logger = logging.getLogger("waypoint_router.route_stitcher")

Strategy = Literal["grid", "visibility"]
PointKind = Literal["original", "detour"]
STRATEGIES = ("grid", "visibility")


@dataclass(frozen=True)
class RoutePoint:
    x: float
    y: float
    kind: PointKind = "original"


@dataclass
class Route:
    points: List[RoutePoint] = field(default_factory=list)
    strategy: Strategy = "grid"
    # False when any leg still crosses an obstacle (degraded fallback)
    is_clear: bool = True

    @property
    def detours(self) -> List[RoutePoint]:
        return [p for p in self.points if p.kind == "detour"]


def _originals(waypoints: Sequence) -> List[RoutePoint]:
    out: List[RoutePoint] = []
    for w in waypoints:
        kind = getattr(w, "kind", "original")
        if kind == "original":
            out.append(RoutePoint(float(w.x), float(w.y), "original"))
    return out


def validate_waypoints(waypoints: Sequence[RoutePoint], circles: Sequence[Circle]) -> None:
    """Raise if any waypoint sits strictly inside an obstacle."""
    for wi, w in enumerate(waypoints):
        for ci, c in enumerate(circles):
            if point_in_circle(w, c):
                raise WaypointInsideObstacleError(wi, ci, w.x, w.y)


def _pathfinder(strategy: str, circles: Sequence[Circle], cfg: Settings) -> Callable[[RoutePoint, RoutePoint], List[Point]]:
    if strategy == "grid":
        is_blocked = make_blocked_predicate(circles)
        return lambda a, b: grid_find_path(
            a, b, cfg.grid_step, is_blocked, max_expansions=cfg.grid_max_expansions
        )
    if strategy == "visibility":
        return lambda a, b: visibility_find_path(
            a,
            b,
            circles,
            margin=cfg.virtual_point_margin,
            angle_step_deg=cfg.virtual_point_angle_step_deg,
            max_points=cfg.max_virtual_points,
        )
    raise InvalidInputError(f"unknown strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}")


def stitch_route(
    waypoints: Sequence,
    circles: Sequence[Circle],
    strategy: Strategy = "grid",
    *,
    settings: Optional[Settings] = None,
) -> Route:
    """Route through ``waypoints`` in order, splicing in detour points.

    Detour entries left over from an earlier run are discarded first. The
    caller's sequence is not modified; a new ``Route`` is returned.
    """
    cfg = settings or default_settings
    find = _pathfinder(strategy, circles, cfg)

    points = _originals(waypoints)
    validate_waypoints(points, circles)

    i = 0
    while i < len(points) - 1:
        path = find(points[i], points[i + 1])
        if len(path) > 2:
            inserted = [RoutePoint(p.x, p.y, "detour") for p in path[1:-1]]
            points[i + 1:i + 1] = inserted
            i += len(inserted)
        i += 1

    is_clear = path_is_clear(points, circles) if len(points) >= 2 else True
    route = Route(points=points, strategy=strategy, is_clear=is_clear)
    if not is_clear:
        logger.warning("Route via %s still crosses an obstacle (%d points)", strategy, len(points))
    logger.debug("Stitched route via %s: %d points, %d detours", strategy, len(points), len(route.detours))
    return route
