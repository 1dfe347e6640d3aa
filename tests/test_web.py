"""
Tests for the HTTP interface
"""

import pytest
from fastapi.testclient import TestClient
from study_tracker.web import main as web_main
from study_tracker.web.main import app, get_tracker


@pytest.fixture
def client(tracker):
    """Test client bound to the fixture tracker"""
    app.dependency_overrides[get_tracker] = lambda: tracker
    yield TestClient(app)
    app.dependency_overrides.clear()


def create(client, text, **fields):
    response = client.post("/api/tasks", json={"text": text, **fields})
    assert response.status_code == 201
    return response.json()["data"]


def test_health(client):
    response = client.get("/api/health")
    assert response.json() == {"status": "ok"}


def test_create_and_list(client):
    create(client, "Low task", priority="low")
    create(client, "Overdue essay", priority="high", dueDate="2026-10-18")
    
    response = client.get("/api/tasks")
    assert [t["text"] for t in response.json()["data"]] == ["Overdue essay", "Low task"]
    
    response = client.get("/api/tasks", params={"filter": "overdue"})
    data = response.json()["data"]
    assert [t["text"] for t in data] == ["Overdue essay"]
    assert data[0]["dueDate"] == "2026-10-18"


def test_create_blank_task_rejected(client, tracker):
    response = client.post("/api/tasks", json={"text": "  "})
    
    assert response.status_code == 422
    assert response.json()["detail"] == "Please enter a task!"
    assert len(tracker.task_store) == 0


def test_unknown_filter_rejected(client):
    assert client.get("/api/tasks", params={"filter": "someday"}).status_code == 422


def test_toggle_and_delete(client):
    task = create(client, "Read")
    
    response = client.post(f"/api/tasks/{task['id']}/toggle")
    assert response.json()["data"]["completed"] is True
    
    assert client.delete(f"/api/tasks/{task['id']}").json()["data"] == {"removed": True}
    assert client.delete(f"/api/tasks/{task['id']}").json()["data"] == {"removed": False}
    
    response = client.post(f"/api/tasks/{task['id']}/toggle")
    assert response.status_code == 200
    assert response.json()["message"] == "Nothing to update"
    assert response.json()["data"] is None
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_reorder(client):
    a = create(client, "A")
    b = create(client, "B")
    
    response = client.post("/api/tasks/reorder", json={"ids": [b["id"], a["id"]]})
    assert [t["text"] for t in response.json()["data"]] == ["B", "A"]
    
    response = client.get("/api/tasks", params={"manual": "true"})
    assert [t["text"] for t in response.json()["data"]] == ["B", "A"]


def test_reorder_switches_view_to_manual_order(client):
    high = create(client, "High", priority="high")
    low = create(client, "Low", priority="low")
    
    client.post("/api/tasks/reorder", json={"ids": [low["id"], high["id"]]})
    
    body = client.get("/api/view").json()
    assert body["manual_order"] is True
    assert [t["text"] for t in body["tasks"]] == ["Low", "High"]


def test_stats(client):
    task = create(client, "A")
    create(client, "B")
    client.post(f"/api/tasks/{task['id']}/toggle")
    
    data = client.get("/api/stats").json()["data"]
    
    assert data["percent"] == 50
    assert data["streak"] == 1
    assert len(data["weekly"]) == 7


def test_calendar(client):
    create(client, "Essay", dueDate="2026-10-25")
    
    data = client.get("/api/calendar/2026/10").json()["data"]
    
    assert len(data) == 31
    assert data[24]["due"] == 1
    assert client.get("/api/calendar/2026/13").status_code == 422


def test_settings(client):
    response = client.put("/api/settings", json={"theme": "dark", "focusDuration": 50})
    
    assert response.json()["data"] == {"theme": "dark", "focusDuration": 50}
    assert client.put("/api/settings", json={"focusDuration": 0}).status_code == 422


def test_timer_flow(client, tracker, scheduler):
    assert client.post("/api/timer/start").json()["data"]["status"] == "running"
    scheduler.fire()
    
    data = client.post("/api/timer/pause").json()["data"]
    assert data["status"] == "paused"
    assert data["display"] == "24:59"
    
    assert client.post("/api/timer/reset").json()["data"]["remaining_seconds"] == 1500
    assert client.post("/api/timer/stop").status_code == 404


def test_sessions_today(client, tracker):
    for _ in range(3):
        tracker.session_store.record_completion(25)
    
    assert len(client.get("/api/sessions/today").json()["data"]) == 3
    assert len(client.get("/api/sessions/today", params={"limit": 2}).json()["data"]) == 2


def test_generic_event(client):
    response = client.post("/api/events", json={"action": "create_task", "text": ""})
    
    body = response.json()
    assert body["success"] is False
    assert body["transient"] is True


def test_view(client):
    create(client, "A")
    
    body = client.get("/api/view").json()
    
    assert body["filter"] == "all"
    assert body["timer"]["status"] == "idle"
    assert body["summary"]["total"] == 1


def test_export(client):
    create(client, "History essay")
    
    response = client.get("/api/export")
    
    assert response.status_code == 200
    assert "History essay" in response.text
    assert "tasks-2026-10-19.txt" in response.headers["content-disposition"]


@pytest.mark.asyncio
async def test_shared_tracker_built_once(monkeypatch, tracker):
    """Test the tracker dependency runs on the loop and builds one instance"""
    built = []
    
    def build():
        built.append(tracker)
        return tracker
    
    monkeypatch.setattr(web_main, "_tracker", None)
    monkeypatch.setattr(web_main, "StudyTracker", build)
    
    first = await get_tracker()
    second = await get_tracker()
    
    assert first is second is tracker
    assert len(built) == 1
