from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from waypoint_router.config import settings
from waypoint_router.db.models import Scene, utc_now
from waypoint_router.schemas.scene import ObstacleAdd, SceneCreate
from waypoint_router.services.geometry import Circle
from waypoint_router.services.route_stitcher import Route, RoutePoint, Strategy, stitch_route
from waypoint_router.services.visibility import generate_virtual_points
from waypoint_router.utils.ids import new_id

logger = logging.getLogger("waypoint_router.scene_service")


class SceneService:
    """Caller-side workspace: the obstacles and waypoints a user has placed.

    The planning core never sees the database; this service loads a scene's
    geometry, hands plain values to the core and stores what comes back.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # ── helpers ──────────────────────────────────────────────

    def _draw_radius(self) -> float:
        return self.rng.uniform(settings.min_circle_radius, settings.max_circle_radius)

    @staticmethod
    def obstacles(s: Scene) -> List[Dict[str, float]]:
        return json.loads(s.obstacles_json or "[]")

    @staticmethod
    def waypoints(s: Scene) -> List[Dict[str, Any]]:
        return json.loads(s.waypoints_json or "[]")

    def circles(self, s: Scene) -> List[Circle]:
        return [Circle(o["x"], o["y"], o["radius"]) for o in self.obstacles(s)]

    def _touch(self, db: Session, s: Scene) -> Scene:
        s.updated_at = utc_now()
        db.commit()
        db.refresh(s)
        return s

    # ── CRUD ─────────────────────────────────────────────────

    def create(self, db: Session, payload: SceneCreate) -> Scene:
        s = Scene(
            id=new_id("scn"),
            title=payload.title,
            obstacles_json=json.dumps([o.model_dump() for o in payload.obstacles]),
            waypoints_json=json.dumps(
                [{"x": p.x, "y": p.y, "kind": "original"} for p in payload.waypoints]
            ),
            next_radius=settings.default_circle_radius,
            created_at=utc_now(),
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        logger.info("Scene %s created (%d obstacles, %d waypoints)", s.id, len(payload.obstacles), len(payload.waypoints))
        return s

    def list(self, db: Session, limit: int = 50, offset: int = 0) -> List[Scene]:
        return db.query(Scene).order_by(Scene.created_at.desc()).offset(offset).limit(limit).all()

    def get(self, db: Session, scene_id: str) -> Scene | None:
        return db.query(Scene).filter(Scene.id == scene_id).first()

    def delete(self, db: Session, scene_id: str) -> bool:
        s = self.get(db, scene_id)
        if not s:
            return False
        db.delete(s)
        db.commit()
        return True

    # ── editing ──────────────────────────────────────────────

    def add_waypoint(self, db: Session, s: Scene, x: float, y: float) -> Scene:
        pts = self.waypoints(s)
        pts.append({"x": x, "y": y, "kind": "original"})
        s.waypoints_json = json.dumps(pts)
        return self._touch(db, s)

    def add_obstacle(self, db: Session, s: Scene, payload: ObstacleAdd) -> Scene:
        """Append a circle; without an explicit radius use the pending one and draw the next."""
        if payload.radius is not None:
            radius = payload.radius
        else:
            radius = s.next_radius
            s.next_radius = self._draw_radius()
        obs = self.obstacles(s)
        obs.append({"x": payload.x, "y": payload.y, "radius": radius})
        s.obstacles_json = json.dumps(obs)
        return self._touch(db, s)

    def clear_waypoints(self, db: Session, s: Scene) -> Scene:
        s.waypoints_json = "[]"
        s.last_strategy = None
        return self._touch(db, s)

    def clear_obstacles(self, db: Session, s: Scene) -> Scene:
        s.obstacles_json = "[]"
        return self._touch(db, s)

    def clear(self, db: Session, s: Scene) -> Scene:
        s.waypoints_json = "[]"
        s.obstacles_json = "[]"
        s.last_strategy = None
        return self._touch(db, s)

    # ── planning ─────────────────────────────────────────────

    def route(self, db: Session, s: Scene, strategy: Strategy) -> Route:
        """Stitch the scene's waypoints and persist originals + detours.

        Raises ``RouteValidationError`` without touching the scene when a
        waypoint sits inside an obstacle.
        """
        waypoints = [RoutePoint(p["x"], p["y"], p.get("kind", "original")) for p in self.waypoints(s)]
        route = stitch_route(waypoints, self.circles(s), strategy)
        s.waypoints_json = json.dumps([{"x": p.x, "y": p.y, "kind": p.kind} for p in route.points])
        s.last_strategy = strategy
        self._touch(db, s)
        return route

    def virtual_points(self, s: Scene):
        return generate_virtual_points(
            self.circles(s),
            settings.virtual_point_margin,
            settings.virtual_point_angle_step_deg,
            settings.max_virtual_points,
        )
