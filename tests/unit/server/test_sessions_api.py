import pytest
from fastapi.testclient import TestClient

from ssx.server.assistant.controller import EXECUTE_MARKER
from ssx.server.assistant.dispatcher import dispatch
from ssx.server.session.dependencies import build_controller, set_controller


@pytest.fixture
def client(tmp_path):
    controller = build_controller(str(tmp_path / "sessions_api.db"), reply_delay=0)
    set_controller(controller)

    from ssx.server.app import app

    with TestClient(app) as test_client:
        yield test_client

    set_controller(None)


def test_session_flow(client: TestClient):
    response = client.get("/api/sessions")
    assert response.status_code == 200
    listing = response.json()
    assert len(listing["sessions"]) == 1
    first_id = listing["active_session_id"]
    assert listing["sessions"][0]["title"] == "New chat"

    response = client.post("/api/sessions")
    assert response.status_code == 201
    created = response.json()["session"]
    assert created["messages"] == []

    response = client.get("/api/sessions")
    ids = [session["id"] for session in response.json()["sessions"]]
    assert ids == [created["id"], first_id]
    assert response.json()["active_session_id"] == created["id"]

    response = client.post(f"/api/sessions/{first_id}/select")
    assert response.status_code == 200
    assert response.json()["active_session_id"] == first_id

    response = client.post("/api/sessions/sess_missing/select")
    assert response.status_code == 200
    assert response.json()["active_session_id"] == first_id


def test_turn_flow(client: TestClient):
    text = "I have a tough feedback conversation coming up"

    response = client.post("/api/turns", json={"text": text, "mode": "Draft"})
    assert response.status_code == 200
    body = response.json()
    assert [message["role"] for message in body["session"]["messages"]] == ["user", "assistant"]
    assert body["session"]["title"] == "I have a tough feedback conversa…"
    assert body["options"] == list(dispatch(text).options)

    response = client.get("/api/sessions/current")
    assert response.json()["options"] == body["options"]

    response = client.post("/api/turns", json={"text": "hello", "mode": "Execute"})
    assert response.json()["session"]["messages"][-1]["content"].startswith(EXECUTE_MARKER)


def test_blank_turn_and_invalid_mode(client: TestClient):
    response = client.post("/api/turns", json={"text": "   "})
    assert response.status_code == 200
    assert response.json()["session"]["messages"] == []

    response = client.post("/api/turns", json={"text": "hello", "mode": "Shout"})
    assert response.status_code == 422


def test_instruments(client: TestClient):
    response = client.get("/api/instruments", params={"q": "audit"})
    assert response.status_code == 200
    groups = response.json()["groups"]
    assert [group["group"] for group in groups] == ["Audit & Reporting"]
    assert [item["id"] for item in groups[0]["instruments"]] == ["audit", "telemetry"]

    response = client.post("/api/instruments/hitl/run", json={"mode": "Draft"})
    assert response.status_code == 200
    assert response.json()["session"]["messages"][0]["content"] == "Run instrument: Human approval"

    response = client.post("/api/instruments/missing/run")
    assert response.status_code == 404


def test_suggestions(client: TestClient):
    response = client.get("/api/suggestions")
    assert response.status_code == 200
    assert len(response.json()["suggestions"]) == 4
