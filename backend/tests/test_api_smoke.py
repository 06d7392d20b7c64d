"""API smoke tests using FastAPI TestClient."""

import pytest
from fastapi.testclient import TestClient

from waypoint_router.main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c


BLOCKING = [{"x": 100, "y": 100, "radius": 50}]


def test_root(client: TestClient):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["strategies"] == ["grid", "visibility"]


def test_plan_grid_open_space(client: TestClient):
    payload = {"start": {"x": 0, "y": 0}, "end": {"x": 80, "y": 0}, "step": 40}
    r = client.post("/plan/grid", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert [(p["x"], p["y"]) for p in data["points"]] == [(0, 0), (40, 0), (80, 0)]
    assert data["is_clear"] is True


def test_plan_grid_rejects_bad_step(client: TestClient):
    payload = {"start": {"x": 0, "y": 0}, "end": {"x": 80, "y": 0}, "step": 0}
    r = client.post("/plan/grid", json=payload)
    assert r.status_code == 422


def test_plan_visibility_direct(client: TestClient):
    payload = {"start": {"x": 0, "y": 0}, "end": {"x": 200, "y": 0}}
    r = client.post("/plan/visibility", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["points"] == [{"x": 0, "y": 0}, {"x": 200, "y": 0}]
    assert data["note"] == "direct"


def test_plan_visibility_detour(client: TestClient):
    payload = {"start": {"x": 0, "y": 100}, "end": {"x": 200, "y": 100}, "obstacles": BLOCKING}
    r = client.post("/plan/visibility", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert len(data["points"]) >= 3
    assert data["is_clear"] is True
    assert data["note"] == "detour"


def test_plan_visibility_degraded(client: TestClient):
    payload = {"start": {"x": 0, "y": 0}, "end": {"x": 100, "y": 0}, "obstacles": [{"x": 100, "y": 0, "r": 50}]}
    r = client.post("/plan/visibility", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["is_clear"] is False
    assert data["note"] == "degraded"


def test_virtual_points(client: TestClient):
    r = client.post("/plan/virtual_points", json={"obstacles": [{"x": 0, "y": 0, "radius": 50}]})
    assert r.status_code == 200
    data = r.json()
    assert len(data["points"]) == 12
    assert data["obstacles_version"].startswith("sha256:")

    again = client.post("/plan/virtual_points", json={"obstacles": [{"x": 0, "y": 0, "radius": 50}]}).json()
    moved = client.post("/plan/virtual_points", json={"obstacles": [{"x": 1, "y": 0, "radius": 50}]}).json()
    assert again["obstacles_version"] == data["obstacles_version"]
    assert moved["obstacles_version"] != data["obstacles_version"]


def test_virtual_points_empty(client: TestClient):
    r = client.post("/plan/virtual_points", json={})
    assert r.status_code == 200
    assert r.json()["points"] == []


def test_obstacle_radius_must_be_positive(client: TestClient):
    r = client.post("/plan/virtual_points", json={"obstacles": [{"x": 0, "y": 0, "radius": 0}]})
    assert r.status_code == 422


@pytest.mark.parametrize("strategy", ["grid", "visibility"])
def test_plan_route_inserts_detours(client: TestClient, strategy):
    payload = {
        "waypoints": [{"x": 0, "y": 100}, {"x": 200, "y": 100}],
        "obstacles": BLOCKING,
        "strategy": strategy,
    }
    r = client.post("/plan/route", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["strategy"] == strategy
    assert data["detour_count"] >= 1
    assert data["points"][0] == {"x": 0, "y": 100, "kind": "original"}
    assert data["points"][-1] == {"x": 200, "y": 100, "kind": "original"}


@pytest.mark.parametrize("strategy", ["grid", "visibility"])
def test_plan_route_rejects_waypoint_inside_obstacle(client: TestClient, strategy):
    payload = {
        "waypoints": [{"x": 0, "y": 100}, {"x": 100, "y": 100}],
        "obstacles": BLOCKING,
        "strategy": strategy,
    }
    r = client.post("/plan/route", json=payload)
    assert r.status_code == 422
    assert "inside obstacle 0" in r.json()["detail"]


def test_plan_route_unknown_strategy(client: TestClient):
    payload = {"waypoints": [{"x": 0, "y": 0}], "strategy": "bfs"}
    r = client.post("/plan/route", json=payload)
    assert r.status_code == 422
