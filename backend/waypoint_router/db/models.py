from __future__ import annotations

import datetime as dt

from sqlalchemy import Column, String, DateTime, Text, Float

from waypoint_router.db.session import Base


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Scene(Base):
    __tablename__ = "scenes"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    # [{"x":..,"y":..,"radius":..}, ...] in insertion order
    obstacles_json = Column(Text, nullable=False, default="[]")
    # [{"x":..,"y":..,"kind":"original"|"detour"}, ...]
    waypoints_json = Column(Text, nullable=False, default="[]")
    next_radius = Column(Float, nullable=False)
    last_strategy = Column(String, nullable=True)  # grid|visibility
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
