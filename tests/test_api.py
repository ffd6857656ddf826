"""
Tests for the HTTP API.

These tests use FastAPI TestClient against the real app, with the
DB‑backed tracker swapped for an in‑memory one on a fixed clock.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from api.deps import get_tracker
from api.main import app
from fliptrack.tracker import FlipTracker

from conftest import NOW


@pytest.fixture
def client(clock):
    tracker = FlipTracker.in_memory(clock=clock)
    app.dependency_overrides[get_tracker] = lambda: tracker
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _new_project(client, **extra):
    body = {"name": "Oak Street Flip", "address": "1423 Oak St", **extra}
    resp = client.post("/projects", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/").json()["status"] == "ok"


def test_stages_endpoint(client):
    stages = client.get("/stages").json()
    assert [s["key"] for s in stages] == ["Planning", "Demo", "Rough-In", "Finishes", "Complete"]
    assert stages[0]["progress"] == 20
    assert stages[-1]["progress"] == 100


def test_create_and_get_project(client):
    created = _new_project(client, lockbox_code="4782")
    assert created["current_stage"] == "Planning"
    assert created["stage_label"] == "Planning"
    assert created["progress"] == 20
    assert created["status"] == "In Progress"

    fetched = client.get(f"/projects/{created['id']}").json()
    assert fetched["lockbox_code"] == "4782"
    assert len(client.get("/projects").json()) == 1


@pytest.mark.parametrize(
    "body",
    [
        {"name": "", "address": "1 Main"},
        {"name": "   ", "address": "1 Main"},
        {"name": "Oak", "address": ""},
        {"name": "Oak", "address": "1 Main", "start_date": "2024-05-01", "target_date": "2024-04-01"},
    ],
)
def test_create_project_validation(client, body):
    assert client.post("/projects", json=body).status_code == 422


def test_missing_project_404(client):
    assert client.get("/projects/99").status_code == 404
    assert client.get("/compliance/99").status_code == 404
    assert client.get("/projects/99/report").status_code == 404
    assert client.put("/projects/99/stage", json={"stage": "Demo"}).status_code == 404


def test_patch_and_delete_project(client):
    p = _new_project(client)
    resp = client.patch(f"/projects/{p['id']}", json={"status": "Sold"})
    assert resp.json()["status"] == "Sold"
    assert client.delete(f"/projects/{p['id']}").status_code == 204
    assert client.get(f"/projects/{p['id']}").status_code == 404


def test_change_and_advance_stage(client):
    p = _new_project(client)
    resp = client.put(f"/projects/{p['id']}/stage", json={"stage": "Finishes"})
    assert resp.json()["progress"] == 80
    assert client.put(f"/projects/{p['id']}/stage", json={"stage": "Painting"}).status_code == 422

    assert client.post(f"/projects/{p['id']}/advance").json()["current_stage"] == "Complete"
    assert client.post(f"/projects/{p['id']}/advance").status_code == 409


def test_compliance_lifecycle(client, clock):
    p = _new_project(client)
    first = client.get(f"/compliance/{p['id']}").json()
    assert first["is_compliant"] and not first["requires_update"]
    assert first["threshold_days"] == 7

    clock.now = NOW + timedelta(days=7)
    swept = client.post("/compliance/check").json()
    assert swept[0]["requires_update"] and swept[0]["days_since_update"] == 7
    assert client.get("/stats").json()["needs_update"] == 1

    fresh = client.post(f"/compliance/{p['id']}/mark-updated").json()
    assert fresh["days_since_update"] == 0 and not fresh["requires_update"]
    assert client.get("/compliance").json()[0]["is_compliant"]


def test_media_capture_marks_project_updated(client, clock):
    p = _new_project(client)
    client.get(f"/compliance/{p['id']}")
    clock.now = NOW + timedelta(days=10)
    client.post("/compliance/check")

    resp = client.post("/media", json={"project_id": p["id"], "type": "photo", "stage": "Demo",
                                       "notes": "kitchen gutted"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["media"]["stage_label"] == "Demolition"
    assert data["compliance"]["requires_update"] is False
    assert client.get("/stats").json()["needs_update"] == 0


def test_media_validation(client):
    p = _new_project(client)
    bad_stage = {"project_id": p["id"], "type": "photo", "stage": "Painting"}
    bad_type = {"project_id": p["id"], "type": "audio", "stage": "Demo"}
    missing = {"project_id": 99, "type": "photo", "stage": "Demo"}
    assert client.post("/media", json=bad_stage).status_code == 422
    assert client.post("/media", json=bad_type).status_code == 422
    assert client.post("/media", json=missing).status_code == 404


def test_timeline_filters_and_delete(client, clock):
    p = _new_project(client)
    for hours, kind, stage in ((0, "photo", "Demo"), (1, "video", "Demo"), (2, "photo", "Finishes")):
        clock.now = NOW + timedelta(hours=hours)
        client.post("/media", json={"project_id": p["id"], "type": kind, "stage": stage})

    url = f"/projects/{p['id']}/media"
    assert [m["stage"] for m in client.get(url).json()] == ["Finishes", "Demo", "Demo"]
    assert len(client.get(url, params={"stage": "Demo"}).json()) == 2
    assert len(client.get(url, params={"type": "video"}).json()) == 1

    media_id = client.get(url).json()[0]["id"]
    assert client.delete(f"/media/{media_id}").status_code == 204
    assert client.delete(f"/media/{media_id}").status_code == 404


def test_report_endpoints(client):
    p = _new_project(client)
    client.put(f"/projects/{p['id']}/stage", json={"stage": "Rough-In"})
    client.post("/media", json={"project_id": p["id"], "type": "video", "stage": "Rough-In"})

    report = client.get(f"/projects/{p['id']}/report").json()
    assert report["progress"] == 60
    assert report["video_count"] == 1
    assert report["recent"][0]["type"] == "video"

    text = client.get(f"/projects/{p['id']}/report.txt").text
    assert "Oak Street Flip - Project Report" in text


@pytest.mark.parametrize("body", [{"status": None}, {"name": None}, {"name": None, "status": "On Hold"}])
def test_patch_ignores_null_fields(client, body):
    p = _new_project(client)
    resp = client.patch(f"/projects/{p['id']}", json=body)
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Oak Street Flip"
    assert resp.json()["status"] == (body.get("status") or "In Progress")


def test_delete_project_drops_its_records(client, clock):
    p = _new_project(client)
    resp = client.post("/media", json={"project_id": p["id"], "type": "photo", "stage": "Demo"})
    media_id = resp.json()["media"]["id"]
    assert client.delete(f"/projects/{p['id']}").status_code == 204

    clock.now = NOW + timedelta(days=9)
    assert client.post("/compliance/check").json() == []
    assert client.get("/stats").json()["needs_update"] == 0
    assert client.delete(f"/media/{media_id}").status_code == 404


def test_default_start_date_follows_tracker_clock(client):
    # NOW is 2024-03-15
    ok = client.post("/projects", json={"name": "Oak", "address": "1 Main", "target_date": "2024-03-20"})
    assert ok.status_code == 201
    assert ok.json()["start_date"] == "2024-03-15"

    early = client.post("/projects", json={"name": "Oak", "address": "1 Main", "target_date": "2024-03-10"})
    assert early.status_code == 400


def test_get_tracker_opens_a_session_per_request(monkeypatch):
    from api import deps
    from fliptrack.db import SessionLocal, create_all, make_engine
    from fliptrack.stores_db import DBProjectStore

    engine = make_engine("sqlite://")
    monkeypatch.setattr(deps, "SessionLocal", lambda: SessionLocal(engine))
    monkeypatch.setattr(deps, "create_all", lambda: create_all(engine))
    deps.init_schema.cache_clear()

    first_gen, second_gen = deps.get_tracker(), deps.get_tracker()
    first, second = next(first_gen), next(second_gen)
    assert isinstance(first.projects, DBProjectStore)
    assert first.projects._session is not second.projects._session

    p = first.create_project("Oak St", "12 Oak St")
    assert second.projects.get_by_id(p.id).name == "Oak St"
    first_gen.close()
    second_gen.close()
    deps.init_schema.cache_clear()
    engine.dispose()
