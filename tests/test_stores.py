"""
tests/test_stores.py
====================

Unit tests for the in‑memory stores in fliptrack.stores
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from fliptrack.models import MediaType, MediaUpdate, Project, ProjectStatus
from fliptrack.stores import ComplianceStore, MediaStore, ProjectStore


def _demo_projects():
    ps = ProjectStore()
    ps.create(Project("Oak St", "12 Oak St", date(2024, 5, 1)))
    ps.create(Project("Maple Ave", "8 Maple Ave", date(2024, 4, 1), current_stage="Demo"))
    ps.create(Project("Elm Row", "52 Elm Row", date(2023, 9, 1), status=ProjectStatus.SOLD))
    return ps


def test_create_assigns_sequential_ids():
    ps = _demo_projects()
    assert [p.id for p in ps.get_all()] == [1, 2, 3]
    assert ps.get_by_id(2).name == "Maple Ave"


def test_create_stamps_last_update_date():
    ps = ProjectStore()
    p = ps.create(Project("Oak St", "12 Oak St", date(2024, 5, 1)))
    assert p.last_update_date is not None


def test_returned_records_are_copies():
    ps = _demo_projects()
    p = ps.get_by_id(1)
    p.current_stage = "Complete"
    assert ps.get_by_id(1).current_stage == "Planning"


def test_update_and_missing_ids():
    ps = _demo_projects()
    assert ps.update(1, current_stage="Rough-In").current_stage == "Rough-In"
    with pytest.raises(KeyError):
        ps.update(99, name="ghost")
    with pytest.raises(KeyError):
        ps.get_by_id(99)


def test_delete_and_len_and_iter():
    ps = _demo_projects()
    ps.delete(2)
    assert len(ps) == 2
    assert {p.name for p in ps} == {"Oak St", "Elm Row"}


def test_compliance_upsert_creates_then_merges():
    cs = ComplianceStore()
    assert cs.get_by_project_id(7) is None
    created = cs.upsert(7, days_since_update=3)
    assert created.project_id == 7 and created.days_since_update == 3
    merged = cs.upsert(7, requires_update=True, is_compliant=False)
    assert merged.days_since_update == 3 and merged.requires_update
    assert len(cs) == 1


def test_compliance_get_all_in_insertion_order():
    cs = ComplianceStore()
    for pid in (3, 1, 2):
        cs.upsert(pid)
    assert [s.project_id for s in cs.get_all()] == [3, 1, 2]


def test_media_create_fills_upload_metadata():
    ms = MediaStore()
    m = ms.create(MediaUpdate(1, MediaType.PHOTO, "Demo"))
    assert m.id == 1
    assert m.timestamp is not None
    assert m.url and m.thumbnail_url
    assert m.uploaded_by == "Field Manager"


def test_media_by_project_newest_first():
    ms = MediaStore()
    t0 = datetime(2024, 3, 1, tzinfo=timezone.utc)
    ms.create(MediaUpdate(1, MediaType.PHOTO, "Demo", timestamp=t0))
    ms.create(MediaUpdate(1, MediaType.VIDEO, "Demo", timestamp=t0 + timedelta(days=2)))
    ms.create(MediaUpdate(2, MediaType.PHOTO, "Planning", timestamp=t0 + timedelta(days=5)))
    items = ms.get_by_project_id(1)
    assert [m.type for m in items] == [MediaType.VIDEO, MediaType.PHOTO]


def test_media_update_delete():
    ms = MediaStore()
    m = ms.create(MediaUpdate(1, MediaType.PHOTO, "Demo"))
    assert ms.update(m.id, notes="kitchen gutted").notes == "kitchen gutted"
    ms.delete(m.id)
    with pytest.raises(KeyError):
        ms.get_by_id(m.id)


def test_compliance_delete_ignores_missing():
    cs = ComplianceStore()
    cs.upsert(1)
    cs.upsert(2)
    cs.delete(1)
    cs.delete(42)
    assert [s.project_id for s in cs.get_all()] == [2]
