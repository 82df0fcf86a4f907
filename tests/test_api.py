"""Integration tests for the plan API endpoints."""

import pytest
from fastapi.testclient import TestClient

from run_planner.api.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def _request(**overrides):
    body = {
        "distance": "5k",
        "current_pace": {"minutes": 6, "seconds": 0},
        "target_pace": {"minutes": 5, "seconds": 30},
        "training_days": 4,
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_distances(client):
    response = client.get("/api/distances")
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 4
    weeks = {entry["key"]: entry["info"]["weeks"] for entry in data["distances"]}
    assert weeks == {"5k": 8, "10k": 10, "half": 12, "full": 16}


def test_generate_plan(client):
    response = client.post("/api/plans", json=_request())
    assert response.status_code == 200
    data = response.json()

    plan = data["plan"]
    assert plan["trainingDays"] == 4
    assert len(plan["weeks"]) == 8
    assert "4 days/week" in plan["summary"]
    assert len(data["qualityFractions"]) == 8
    assert data["warnings"] == []


def test_generate_plan_warns_on_slower_target(client):
    response = client.post(
        "/api/plans",
        json=_request(current_pace={"minutes": 5, "seconds": 0}),
    )
    assert response.status_code == 200
    assert len(response.json()["warnings"]) == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"distance": "ultra"},
        {"training_days": 7},
        {"training_days": 2},
        {"current_pace": {"minutes": "fast", "seconds": 0}},
        {"current_pace": {"minutes": -3, "seconds": 0}},
        {"current_pace": {"minutes": 5, "seconds": 130}},
        {"target_pace": {"minutes": 60, "seconds": 0}},
    ],
)
def test_generate_plan_invalid_request(client, overrides):
    response = client.post("/api/plans", json=_request(**overrides))
    assert response.status_code == 422


def test_generate_plan_response_uses_camel_case(client):
    response = client.post("/api/plans", json=_request())
    data = response.json()
    assert "qualityFractions" in data
    assert "quality_fractions" not in data
    assert data["plan"]["currentPace"] == {"minutes": 6, "seconds": 0}
