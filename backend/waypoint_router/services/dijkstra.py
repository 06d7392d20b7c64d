from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from waypoint_router.services.geometry import Point


@dataclass(frozen=True)
class Edge:
    to: int
    weight: float


Graph = List[List[Edge]]


def shortest_path(graph: Graph, start_index: int, end_index: int, points: Sequence[Point]) -> List[Point]:
    """Dijkstra with an array-scanned frontier.

    Fine for visibility graphs of a few hundred vertices; swap the scan for
    ``heapq`` if obstacle counts grow.

    If ``end_index`` is never reached the backtrace stops immediately and
    the result is just ``[points[end_index]]``. That degraded result is
    returned as-is; callers should re-validate it.
    """
    n = len(graph)
    dist = [math.inf] * n
    previous: List[Optional[int]] = [None] * n
    visited = [False] * n
    dist[start_index] = 0.0

    while True:
        current = -1
        best = math.inf
        for i in range(n):
            if not visited[i] and dist[i] < best:
                best = dist[i]
                current = i

        if current == -1 or current == end_index:
            break

        visited[current] = True
        for edge in graph[current]:
            candidate = dist[current] + edge.weight
            if candidate < dist[edge.to]:
                dist[edge.to] = candidate
                previous[edge.to] = current

    path: List[Point] = []
    node: Optional[int] = end_index
    while node is not None:
        path.append(points[node])
        node = previous[node]
    path.reverse()
    return path
