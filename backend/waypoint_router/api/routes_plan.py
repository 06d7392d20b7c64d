from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException

from waypoint_router.config import settings
from waypoint_router.schemas.geometry import Point, RoutePointOut, to_circles, to_point
from waypoint_router.schemas.plan import (
    GridPlanRequest,
    PathOut,
    RouteOut,
    RouteRequest,
    VirtualPointsOut,
    VirtualPointsRequest,
    VisibilityPlanRequest,
)
from waypoint_router.services.astar import grid_find_path
from waypoint_router.services.errors import RoutingError
from waypoint_router.services.geometry import make_blocked_predicate, path_is_clear
from waypoint_router.services.route_stitcher import RoutePoint, Route, stitch_route
from waypoint_router.services.visibility import generate_virtual_points, visibility_find_path
from waypoint_router.utils.hashing import obstacle_set_version

router = APIRouter(prefix="/plan", tags=["plan"])


def _path_out(points, circles) -> PathOut:
    clear = path_is_clear(points, circles)
    if not clear:
        note = "degraded"
    elif len(points) == 2:
        note = "direct"
    else:
        note = "detour"
    return PathOut(points=[Point.from_core(p) for p in points], is_clear=clear, note=note)


def route_out(route: Route) -> RouteOut:
    return RouteOut(
        points=[RoutePointOut(x=p.x, y=p.y, kind=p.kind) for p in route.points],
        strategy=route.strategy,
        is_clear=route.is_clear,
        detour_count=len(route.detours),
    )


@router.post("/grid", response_model=PathOut)
def plan_grid(payload: GridPlanRequest):
    """Grid A* between two points. Never fails; check ``is_clear``."""
    circles = to_circles(payload.obstacles)
    points = grid_find_path(
        to_point(payload.start),
        to_point(payload.end),
        payload.step or settings.grid_step,
        make_blocked_predicate(circles),
        max_expansions=settings.grid_max_expansions,
    )
    return _path_out(points, circles)


@router.post("/virtual_points", response_model=VirtualPointsOut)
def plan_virtual_points(payload: VirtualPointsRequest):
    try:
        points = generate_virtual_points(
            to_circles(payload.obstacles),
            settings.virtual_point_margin if payload.margin is None else payload.margin,
            payload.angle_step_deg or settings.virtual_point_angle_step_deg,
            settings.max_virtual_points,
        )
    except RoutingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return VirtualPointsOut(
        points=[Point.from_core(p) for p in points],
        obstacles_version=obstacle_set_version([o.model_dump() for o in payload.obstacles]),
    )


@router.post("/visibility", response_model=PathOut)
def plan_visibility(payload: VisibilityPlanRequest):
    """Visibility-graph Dijkstra between two points; check ``is_clear``."""
    circles = to_circles(payload.obstacles)
    try:
        points = visibility_find_path(
            to_point(payload.start),
            to_point(payload.end),
            circles,
            margin=settings.virtual_point_margin,
            angle_step_deg=settings.virtual_point_angle_step_deg,
            max_points=settings.max_virtual_points,
        )
    except RoutingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _path_out(points, circles)


@router.post("/route", response_model=RouteOut)
def plan_route(payload: RouteRequest):
    """Stitch a full route; 422 when a waypoint sits inside an obstacle."""
    waypoints: List[RoutePoint] = [RoutePoint(w.x, w.y, w.kind) for w in payload.waypoints]
    try:
        route = stitch_route(waypoints, to_circles(payload.obstacles), payload.strategy)
    except RoutingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return route_out(route)
