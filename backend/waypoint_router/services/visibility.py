from __future__ import annotations

import math
from typing import List, Optional, Sequence

from waypoint_router.services.dijkstra import Edge, Graph, shortest_path
from waypoint_router.services.errors import InvalidInputError, PlanningLimitError
from waypoint_router.services.geometry import Circle, Point, distance, point_in_circle, segment_is_clear

DEFAULT_MARGIN = 15.0
DEFAULT_ANGLE_STEP_DEG = 30.0


def generate_virtual_points(
    circles: Sequence[Circle],
    margin: float = DEFAULT_MARGIN,
    angle_step_deg: float = DEFAULT_ANGLE_STEP_DEG,
    max_points: Optional[int] = None,
) -> List[Point]:
    """Sample points ``radius + margin`` out from every circle.

    One point per ``angle_step_deg`` starting at 0 degrees. A sample that
    lands strictly inside any other circle (by position in ``circles``, so
    duplicates still count) is dropped. Pure function of its inputs.
    """
    if not angle_step_deg > 0:
        raise InvalidInputError(f"angle step must be positive, got {angle_step_deg!r}")

    points: List[Point] = []
    for idx, circle in enumerate(circles):
        ring = circle.radius + margin
        k = 0
        while k * angle_step_deg < 360.0:
            rad = math.radians(k * angle_step_deg)
            k += 1
            p = Point(circle.x + ring * math.cos(rad), circle.y + ring * math.sin(rad))
            if any(point_in_circle(p, other) for j, other in enumerate(circles) if j != idx):
                continue
            points.append(p)
            if max_points is not None and len(points) > max_points:
                raise PlanningLimitError(
                    f"virtual point count exceeds the limit of {max_points} ({len(circles)} obstacles)"
                )
    return points


def build_graph(points: Sequence[Point], circles: Sequence[Circle]) -> Graph:
    """Visibility graph: an edge for every unobstructed pair, weighted by length."""
    graph: Graph = [[] for _ in points]
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            if segment_is_clear(points[i], points[j], circles):
                d = distance(points[i], points[j])
                graph[i].append(Edge(j, d))
                graph[j].append(Edge(i, d))
    return graph


def visibility_find_path(
    start,
    end,
    circles: Sequence[Circle],
    *,
    margin: float = DEFAULT_MARGIN,
    angle_step_deg: float = DEFAULT_ANGLE_STEP_DEG,
    max_points: Optional[int] = None,
) -> List[Point]:
    """Route from ``start`` to ``end`` through obstacle virtual points.

    Returns ``[start, end]`` when the straight segment is already clear.
    Does not guarantee a valid path: if no chain of visible virtual points
    joins the endpoints the result is the truncated Dijkstra backtrace.
    """
    start = Point(start.x, start.y)
    end = Point(end.x, end.y)
    if segment_is_clear(start, end, circles):
        return [start, end]

    virtual = generate_virtual_points(circles, margin, angle_step_deg, max_points)
    points = [start, *virtual, end]
    graph = build_graph(points, circles)
    return shortest_path(graph, 0, len(points) - 1, points)
