"""Integration tests for the FastAPI adapter."""

import pytest
from fastapi.testclient import TestClient

from breathing_coach.application.api import create_app
from breathing_coach.application.config import Settings
from breathing_coach.application.controller import BreathingCoachController


@pytest.fixture
def coach(storage, ticker, clock):
    """Controller wired with deterministic time and in-memory storage."""
    settings = Settings(_env_file=None, storage_backend="local", view_push_interval_seconds=30)
    return BreathingCoachController.from_settings(settings, storage=storage, ticker=ticker, clock=clock)


@pytest.fixture
def client(coach):
    with TestClient(create_app(coach)) as client:
        yield client


def test_health(client):
    """Test that startup loaded the quota."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["session_status"] == "idle"
    assert data["providers"]["ticker"] == "ManualTicker"


def test_list_exercises(client):
    response = client.get("/exercises")

    assert response.status_code == 200
    ids = [e["id"] for e in response.json()["exercises"]]
    assert ids == ["flower", "candle", "bee"]


def test_start_and_stop(client):
    """Test the start/stop cycle over HTTP."""
    response = client.post("/session/start", json={"exercise_id": "flower"})
    assert response.status_code == 200
    assert response.json()["status"] == "running"
    assert response.json()["remaining_formatted"] == "3:00"

    assert client.get("/session").json()["exercise_id"] == "flower"

    response = client.post("/session/start", json={"exercise_id": "candle"})
    assert response.status_code == 409

    response = client.post("/session/stop")
    assert response.status_code == 200
    assert response.json()["status"] == "idle"
    assert response.json()["completed_count"] == 0


def test_abort(client):
    client.post("/session/start", json={"exercise_id": "bee"})

    response = client.post("/session/abort")

    assert response.json()["status"] == "aborted"


def test_unknown_exercise(client):
    response = client.post("/session/start", json={"exercise_id": "yoga"})

    assert response.status_code == 404
    assert "yoga" in response.json()["detail"]


def test_quota_exceeded(storage, coach):
    """Test that an exhausted quota maps to 429."""
    storage._values.update({"meditationDate": "2024-03-01", "meditationCount": "5"})

    with TestClient(create_app(coach)) as client:
        assert client.get("/session").json()["completed_count"] == 5
        response = client.post("/session/start", json={"exercise_id": "flower"})

    assert response.status_code == 429


def test_storage_unavailable(storage, coach):
    """Test that an unreadable quota degrades health and refuses starts."""
    storage.fail_reads = True

    with TestClient(create_app(coach)) as client:
        assert client.get("/health").json()["status"] == "degraded"
        assert client.get("/session").json()["completed_count"] is None
        response = client.post("/session/start", json={"exercise_id": "flower"})

    assert response.status_code == 503


def test_quota_retry_without_pending_write(client):
    response = client.post("/quota/retry")

    assert response.status_code == 200
    assert response.json()["pending_quota_writes"] == 0
    assert response.json()["quota"]["completed_count"] == 0


def test_websocket_view(client):
    """Test requesting a view over the WebSocket."""
    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "session.view"})
        message = websocket.receive_json()

    assert message["type"] == "session.view"
    assert message["view"]["status"] == "idle"
    assert message["view"]["goal"] == 5


def test_websocket_client_does_not_see_earlier_rest_sessions(client):
    """Test that a client connecting late gets no events from finished sessions."""
    for exercise_id in ("flower", "candle", "bee"):
        assert client.post("/session/start", json={"exercise_id": exercise_id}).status_code == 200
        assert client.post("/session/stop").status_code == 200

    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "session.view"})
        message = websocket.receive_json()

    assert message["type"] == "session.view"
    assert message["view"]["status"] == "idle"
