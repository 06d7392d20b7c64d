from __future__ import annotations


class RoutingError(Exception):
    """Base class for everything the planning core raises on purpose."""


class InvalidInputError(RoutingError, ValueError):
    pass


class RouteValidationError(InvalidInputError):
    """The caller's waypoints cannot be routed as given."""


class WaypointInsideObstacleError(RouteValidationError):
    def __init__(self, waypoint_index: int, obstacle_index: int, x: float, y: float):
        self.waypoint_index = waypoint_index
        self.obstacle_index = obstacle_index
        super().__init__(
            f"Waypoint {waypoint_index} at ({x:.2f},{y:.2f}) is inside obstacle {obstacle_index}."
        )


class PlanningLimitError(RoutingError):
    """A query would exceed a configured size bound."""
