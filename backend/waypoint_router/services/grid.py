from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from waypoint_router.services.errors import InvalidInputError
from waypoint_router.services.geometry import Point


# +x, -x, +y, -y, then the four diagonals
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
)


@dataclass(frozen=True)
class GridNode:
    """Lattice position in step units; the node itself is the graph key."""

    i: int
    j: int

    def to_point(self, step: float) -> Point:
        return Point(self.i * step, self.j * step)


def _check_step(step: float) -> None:
    if not step > 0:
        raise InvalidInputError(f"grid step must be positive, got {step!r}")


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def snap(point, step: float) -> GridNode:
    """Nearest lattice node to ``point`` (halves round towards +inf)."""
    _check_step(step)
    return GridNode(_round_half_up(point.x / step), _round_half_up(point.y / step))


def neighbors(node: GridNode) -> List[GridNode]:
    return [GridNode(node.i + di, node.j + dj) for di, dj in DIRECTIONS]
