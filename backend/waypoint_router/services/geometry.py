from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)


BlockedPredicate = Callable[[float, float], bool]


def distance(a, b) -> float:
    """Euclidean distance between anything carrying ``x``/``y``."""
    return math.hypot(a.x - b.x, a.y - b.y)


def point_in_circle(p, c: Circle) -> bool:
    """Strict containment: a point on the boundary is outside."""
    return distance(p, c) < c.radius


def closest_point_on_segment(p, a, b) -> Point:
    """Closest point to P on segment AB."""
    abx, aby = b.x - a.x, b.y - a.y
    ab2 = abx * abx + aby * aby
    if ab2 == 0.0:
        # zero-length segment collapses to its start
        return Point(a.x, a.y)
    t = ((p.x - a.x) * abx + (p.y - a.y) * aby) / ab2
    t = max(0.0, min(1.0, t))
    return Point(a.x + t * abx, a.y + t * aby)


def segment_intersects_circle(p1, p2, c: Circle) -> bool:
    closest = closest_point_on_segment(c, p1, p2)
    return distance(closest, c) < c.radius


def segment_is_clear(p1, p2, circles: Iterable[Circle]) -> bool:
    """True when the straight segment P1-P2 touches no obstacle interior."""
    for c in circles:
        if segment_intersects_circle(p1, p2, c):
            return False
    return True


def path_is_clear(points: Sequence, circles: Sequence[Circle]) -> bool:
    """Re-validate a polyline against the obstacle set.

    Pathfinders can hand back degraded results (straight fallbacks,
    truncated backtraces) that still cross an obstacle; callers use this
    to decide whether to accept them.
    """
    if len(points) < 2:
        return False
    return all(segment_is_clear(a, b, circles) for a, b in zip(points, points[1:]))


def make_blocked_predicate(circles: Sequence[Circle]) -> BlockedPredicate:
    """Build an ``is_blocked(x, y)`` check over a snapshot of ``circles``."""
    snapshot = tuple(circles)

    def is_blocked(x: float, y: float) -> bool:
        p = Point(x, y)
        return any(point_in_circle(p, c) for c in snapshot)

    return is_blocked
