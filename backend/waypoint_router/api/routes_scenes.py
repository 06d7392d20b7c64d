from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Literal

from waypoint_router.deps import get_db
from waypoint_router.db.models import Scene
from waypoint_router.api.routes_plan import route_out
from waypoint_router.schemas.geometry import Point
from waypoint_router.schemas.plan import RouteOut, VirtualPointsOut
from waypoint_router.schemas.scene import ObstacleAdd, SceneCreate, SceneOut
from waypoint_router.services.errors import RoutingError
from waypoint_router.services.scene_service import SceneService
from waypoint_router.utils.hashing import obstacle_set_version

router = APIRouter(tags=["scenes"])
svc = SceneService()


def _to_out(s: Scene) -> SceneOut:
    return SceneOut(
        id=s.id,
        title=s.title,
        obstacles=svc.obstacles(s),
        waypoints=svc.waypoints(s),
        next_radius=s.next_radius,
        last_strategy=s.last_strategy,
        created_at=s.created_at,
        updated_at=s.updated_at,
    )


def _get_or_404(db: Session, scene_id: str) -> Scene:
    s = svc.get(db, scene_id)
    if not s:
        raise HTTPException(status_code=404, detail="scene not found")
    return s


@router.post("/scenes", response_model=SceneOut)
def create_scene(payload: SceneCreate, db: Session = Depends(get_db)):
    return _to_out(svc.create(db, payload))


@router.get("/scenes", response_model=List[SceneOut])
def list_scenes(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return [_to_out(s) for s in svc.list(db, limit=limit, offset=offset)]


@router.get("/scenes/{scene_id}", response_model=SceneOut)
def get_scene(scene_id: str, db: Session = Depends(get_db)):
    return _to_out(_get_or_404(db, scene_id))


@router.delete("/scenes/{scene_id}")
def delete_scene(scene_id: str, db: Session = Depends(get_db)):
    if not svc.delete(db, scene_id):
        raise HTTPException(status_code=404, detail="scene not found")
    return {"ok": True, "deleted": scene_id}


# ── Editing ────────────────────────────────────────────────

@router.post("/scenes/{scene_id}/waypoints", response_model=SceneOut)
def add_waypoint(scene_id: str, payload: Point, db: Session = Depends(get_db)):
    s = _get_or_404(db, scene_id)
    return _to_out(svc.add_waypoint(db, s, payload.x, payload.y))


@router.delete("/scenes/{scene_id}/waypoints", response_model=SceneOut)
def clear_waypoints(scene_id: str, db: Session = Depends(get_db)):
    s = _get_or_404(db, scene_id)
    return _to_out(svc.clear_waypoints(db, s))


@router.post("/scenes/{scene_id}/obstacles", response_model=SceneOut)
def add_obstacle(scene_id: str, payload: ObstacleAdd, db: Session = Depends(get_db)):
    s = _get_or_404(db, scene_id)
    return _to_out(svc.add_obstacle(db, s, payload))


@router.delete("/scenes/{scene_id}/obstacles", response_model=SceneOut)
def clear_obstacles(scene_id: str, db: Session = Depends(get_db)):
    s = _get_or_404(db, scene_id)
    return _to_out(svc.clear_obstacles(db, s))


@router.post("/scenes/{scene_id}/clear", response_model=SceneOut)
def clear_scene(scene_id: str, db: Session = Depends(get_db)):
    s = _get_or_404(db, scene_id)
    return _to_out(svc.clear(db, s))


# ── Planning ───────────────────────────────────────────────

@router.post("/scenes/{scene_id}/route", response_model=RouteOut)
def route_scene(
    scene_id: str,
    strategy: Literal["grid", "visibility"] = Query("grid"),
    db: Session = Depends(get_db),
):
    """Stitch the scene's waypoints and store the detours back into it."""
    s = _get_or_404(db, scene_id)
    try:
        route = svc.route(db, s, strategy)
    except RoutingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return route_out(route)


@router.get("/scenes/{scene_id}/virtual_points", response_model=VirtualPointsOut)
def scene_virtual_points(scene_id: str, db: Session = Depends(get_db)):
    s = _get_or_404(db, scene_id)
    try:
        points = svc.virtual_points(s)
    except RoutingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return VirtualPointsOut(
        points=[Point.from_core(p) for p in points],
        obstacles_version=obstacle_set_version(svc.obstacles(s)),
    )
