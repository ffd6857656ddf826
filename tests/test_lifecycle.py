"""
tests/test_lifecycle.py
=======================

Unit tests for fliptrack.lifecycle.set_stage / advance_stage
"""

from datetime import date

import pytest

from fliptrack.lifecycle import advance_stage, set_stage
from fliptrack.models import Project

TODAY = date(2024, 3, 15)


def _project(stage="Planning"):
    return Project("Oak St", "12 Oak St", date(2024, 1, 1), current_stage=stage,
                   last_update_date=date(2024, 1, 1))


def test_set_stage_stamps_update_date():
    p = _project()
    stage = set_stage(p, "Finishes", TODAY)
    assert stage.key == p.current_stage == "Finishes"
    assert p.last_update_date == TODAY


def test_set_stage_may_move_backwards_explicitly():
    p = _project("Finishes")
    set_stage(p, "Rough-In", TODAY)
    assert p.current_stage == "Rough-In"


def test_unknown_stage_raises_and_leaves_project_alone():
    p = _project("Demo")
    with pytest.raises(ValueError):
        set_stage(p, "Painting", TODAY)
    assert p.current_stage == "Demo"
    assert p.last_update_date == date(2024, 1, 1)


def test_advance_walks_the_sequence():
    p = _project()
    seen = [advance_stage(p, TODAY).key for _ in range(4)]
    assert seen == ["Demo", "Rough-In", "Finishes", "Complete"]


def test_advance_past_complete_raises():
    p = _project("Complete")
    with pytest.raises(ValueError):
        advance_stage(p, TODAY)
    assert p.current_stage == "Complete"


def test_advance_from_unknown_stage_raises():
    with pytest.raises(ValueError):
        advance_stage(_project("Sold"), TODAY)
