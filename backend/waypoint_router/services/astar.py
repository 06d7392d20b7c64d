from __future__ import annotations

import logging
from typing import Dict, List, Optional

from waypoint_router.config import settings
from waypoint_router.services.geometry import BlockedPredicate, Point, distance
from waypoint_router.services.grid import GridNode, neighbors, snap

logger = logging.getLogger("waypoint_router.astar")


def _heuristic(a: Point, b: Point) -> float:
    # Manhattan in raw coordinate units
    return abs(a.x - b.x) + abs(a.y - b.y)


def _lowest_f(open_set: Dict[GridNode, None], f_score: Dict[GridNode, float]) -> GridNode:
    # Linear scan; first inserted wins ties. A heap is the upgrade path if
    # lattices grow beyond a few thousand open nodes.
    best: Optional[GridNode] = None
    best_f = float("inf")
    for node in open_set:
        f = f_score[node]
        if best is None or f < best_f:
            best, best_f = node, f
    assert best is not None
    return best


def _reconstruct(came_from: Dict[GridNode, GridNode], current: GridNode, step: float) -> List[Point]:
    path = [current.to_point(step)]
    while current in came_from:
        current = came_from[current]
        path.append(current.to_point(step))
    path.reverse()
    return path


def grid_find_path(
    start,
    end,
    step: float,
    is_blocked: BlockedPredicate,
    *,
    max_expansions: Optional[int] = None,
) -> List[Point]:
    """A* over the implicit 8-connected lattice of spacing ``step``.

    Both endpoints are snapped to the lattice and the returned path runs
    from the snapped start to the snapped goal. Neighbours for which
    ``is_blocked(x, y)`` is true are never entered; the start node itself
    is not checked.

    The heuristic is Manhattan distance in raw coordinates while edge
    costs are euclidean (``step`` / ``step * sqrt(2)``). It is not
    admissible for diagonal moves, so the path is plausible rather than
    guaranteed shortest.

    Does not guarantee a valid path: when the goal cannot be reached (the
    open set drains, or ``max_expansions`` pops are spent) the raw
    ``[start, end]`` segment is returned, which may cross an obstacle.
    ``max_expansions`` defaults to ``settings.grid_max_expansions``.
    """
    if max_expansions is None:
        max_expansions = settings.grid_max_expansions

    start_node = snap(start, step)
    end_node = snap(end, step)
    goal = end_node.to_point(step)

    if start_node == end_node:
        p = start_node.to_point(step)
        return [p, p]

    open_set: Dict[GridNode, None] = {start_node: None}
    closed: set[GridNode] = set()
    came_from: Dict[GridNode, GridNode] = {}
    g_score: Dict[GridNode, float] = {start_node: 0.0}
    f_score: Dict[GridNode, float] = {start_node: _heuristic(start_node.to_point(step), goal)}

    expansions = 0
    while open_set:
        current = _lowest_f(open_set, f_score)
        if current == end_node:
            return _reconstruct(came_from, current, step)

        if expansions >= max_expansions:
            logger.warning(
                "A* gave up after %d expansions between (%.2f,%.2f) and (%.2f,%.2f); falling back to a straight segment",
                expansions, start.x, start.y, end.x, end.y,
            )
            break
        expansions += 1

        del open_set[current]
        closed.add(current)
        current_pt = current.to_point(step)

        for nb in neighbors(current):
            if nb in closed:
                continue
            nb_pt = nb.to_point(step)
            if is_blocked(nb_pt.x, nb_pt.y):
                continue

            tentative = g_score[current] + distance(current_pt, nb_pt)
            if nb not in open_set:
                open_set[nb] = None
            elif tentative >= g_score[nb]:
                continue

            came_from[nb] = current
            g_score[nb] = tentative
            f_score[nb] = tentative + _heuristic(nb_pt, goal)
    else:
        logger.warning(
            "A* found no route between (%.2f,%.2f) and (%.2f,%.2f); falling back to a straight segment",
            start.x, start.y, end.x, end.y,
        )

    return [Point(start.x, start.y), Point(end.x, end.y)]
