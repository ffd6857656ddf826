"""
fliptrack.lifecycle
===================

State‑transition guard for a :class:`fliptrack.models.Project`'s stage.

Reads through :pymod:`fliptrack.stages` are lenient, but writes are not:
the helpers below validate the target stage and mutate the project
**in‑place**, stamping ``last_update_date``.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from .models import Project
from .stages import LAST_STAGE_KEY, Stage, is_valid_stage, next_stage, stage_info


def set_stage(project: Project, stage_key: str, today: Optional[date] = None) -> Stage:
    """
    Move *project* to *stage_key*, or raise :class:`ValueError` if the key
    is not a known stage.

    Examples
    --------
    >>> p = Project("Oak St", "12 Oak St", date(2024, 1, 1))
    >>> set_stage(p, "Rough-In").label
    'Rough-In'
    >>> set_stage(p, "Painting")
    Traceback (most recent call last):
        ...
    ValueError: unknown stage 'Painting'
    """
    if not is_valid_stage(stage_key):
        raise ValueError(f"unknown stage {stage_key!r}")
    project.current_stage = stage_key
    project.last_update_date = today or date.today()
    return stage_info(stage_key)


def advance_stage(project: Project, today: Optional[date] = None) -> Stage:
    """Move *project* one stage forward; :class:`ValueError` once complete."""
    if project.current_stage == LAST_STAGE_KEY:
        raise ValueError(f"project already at {LAST_STAGE_KEY}")
    target = next_stage(project.current_stage)
    if target is None:
        raise ValueError(f"cannot advance from unknown stage {project.current_stage!r}")
    return set_stage(project, target.key, today)
