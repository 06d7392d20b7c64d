import pytest

from waypoint_router.config import Settings
from waypoint_router.services.errors import InvalidInputError, RouteValidationError, WaypointInsideObstacleError
from waypoint_router.services.geometry import Circle, Point, point_in_circle
from waypoint_router.services.route_stitcher import RoutePoint, stitch_route

CIRCLE = Circle(100, 100, 50)


@pytest.mark.parametrize("strategy", ["grid", "visibility"])
def test_rejects_waypoint_inside_obstacle(strategy):
    waypoints = [Point(0, 100), Point(110, 90), Point(300, 100)]
    with pytest.raises(WaypointInsideObstacleError) as exc:
        stitch_route(waypoints, [CIRCLE], strategy)
    assert exc.value.waypoint_index == 1
    assert exc.value.obstacle_index == 0
    assert isinstance(exc.value, RouteValidationError)


@pytest.mark.parametrize("strategy", ["grid", "visibility"])
def test_waypoint_on_boundary_is_accepted(strategy):
    route = stitch_route([Point(150, 100), Point(150, 300)], [CIRCLE], strategy)
    assert route.points[0] == RoutePoint(150, 100, "original")
    assert route.points[-1] == RoutePoint(150, 300, "original")


def test_visibility_inserts_detours_between_originals():
    route = stitch_route([Point(0, 100), Point(200, 100)], [CIRCLE], "visibility")

    assert len(route.points) >= 3
    assert route.points[0] == RoutePoint(0, 100, "original")
    assert route.points[-1] == RoutePoint(200, 100, "original")
    assert all(p.kind == "detour" for p in route.points[1:-1])
    assert len(route.detours) >= 1
    assert route.is_clear
    assert route.strategy == "visibility"


def test_grid_inserts_detours_outside_the_obstacle():
    route = stitch_route([Point(0, 100), Point(200, 100)], [CIRCLE], "grid")

    assert route.points[0] == RoutePoint(0, 100, "original")
    assert route.points[-1] == RoutePoint(200, 100, "original")
    assert len(route.detours) >= 1
    assert not any(point_in_circle(p, CIRCLE) for p in route.points)


def test_grid_adds_lattice_points_even_in_open_space():
    cfg = Settings(grid_step=40)
    route = stitch_route([Point(0, 0), Point(200, 0)], [], "grid", settings=cfg)
    assert [(p.x, p.y) for p in route.detours] == [(40, 0), (80, 0), (120, 0), (160, 0)]


def test_stale_detours_are_dropped():
    waypoints = [
        RoutePoint(0, 0, "original"),
        RoutePoint(50, 80, "detour"),
        RoutePoint(300, 0, "original"),
    ]
    route = stitch_route(waypoints, [], "visibility")
    assert route.points == [RoutePoint(0, 0, "original"), RoutePoint(300, 0, "original")]


def test_detours_land_in_the_right_leg():
    waypoints = [Point(0, 100), Point(200, 100), Point(200, 300), Point(400, 300)]
    route = stitch_route(waypoints, [CIRCLE], "visibility")

    originals = [(p.x, p.y) for p in route.points if p.kind == "original"]
    assert originals == [(0, 100), (200, 100), (200, 300), (400, 300)]
    second = route.points.index(RoutePoint(200, 100, "original"))
    assert second >= 2
    # only the first leg is blocked
    assert route.points[second + 1:] == [RoutePoint(200, 300, "original"), RoutePoint(400, 300, "original")]


def test_callers_waypoints_are_not_modified():
    waypoints = [RoutePoint(0, 100), RoutePoint(200, 100)]
    stitch_route(waypoints, [CIRCLE], "visibility")
    assert waypoints == [RoutePoint(0, 100), RoutePoint(200, 100)]


def test_restitching_a_route_is_stable():
    first = stitch_route([Point(0, 100), Point(200, 100)], [CIRCLE], "visibility")
    second = stitch_route(first.points, [CIRCLE], "visibility")
    assert second.points == first.points


def test_single_waypoint_route():
    route = stitch_route([Point(5, 5)], [CIRCLE], "grid")
    assert route.points == [RoutePoint(5, 5, "original")]
    assert route.is_clear


def test_unknown_strategy():
    with pytest.raises(InvalidInputError):
        stitch_route([Point(0, 0), Point(1, 1)], [], "bfs")


def test_unreachable_leg_is_flagged_not_raised():
    # end waypoint fenced in by overlapping circles
    fence = [Circle(200 + dx, dy, 30) for dx, dy in [(-40, 0), (40, 0), (0, -40), (0, 40), (-30, -30), (30, 30), (-30, 30), (30, -30)]]
    route = stitch_route([Point(0, 0), Point(200, 0)], fence, "visibility")
    assert route.points[0] == RoutePoint(0, 0, "original")
    assert route.points[-1] == RoutePoint(200, 0, "original")
    assert not route.is_clear
