"""
fliptrack.stages
================

The fixed renovation sequence and the arithmetic derived from it.

Stages are plain table rows, looked up by key.  Every helper here is a
pure function over :data:`PROJECT_STAGES` and never raises: unknown keys
resolve to the first stage in :pyfunc:`stage_info` but to ``0`` in
:pyfunc:`progress_percent`.  Both behaviours are relied upon by callers.

>>> stage_info("Demo").label
'Demolition'
>>> progress_percent("Finishes")
80.0
>>> next_stage("Complete") is None
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Stage:
    key: str
    label: str
    icon: str

    @property
    def order(self) -> int:
        """Position of this stage in :data:`PROJECT_STAGES`."""
        return PROJECT_STAGES.index(self)


PROJECT_STAGES: Tuple[Stage, ...] = (
    Stage("Planning", "Planning", "FileText"),
    Stage("Demo", "Demolition", "Hammer"),
    Stage("Rough-In", "Rough-In", "Wrench"),
    Stage("Finishes", "Finishes", "Paintbrush"),
    Stage("Complete", "Complete", "CheckCircle"),
)

FIRST_STAGE_KEY = PROJECT_STAGES[0].key
LAST_STAGE_KEY = PROJECT_STAGES[-1].key

_INDEX = {stage.key: i for i, stage in enumerate(PROJECT_STAGES)}


def stage_index(key: Optional[str]) -> int:
    """0‑based position of *key*, or ``-1`` when unknown."""
    if not isinstance(key, str):
        return -1
    return _INDEX.get(key, -1)


def is_valid_stage(key: Optional[str]) -> bool:
    return stage_index(key) >= 0


def all_stage_keys() -> Tuple[str, ...]:
    """Stage keys in renovation order."""
    return tuple(stage.key for stage in PROJECT_STAGES)


def stage_info(key: Optional[str]) -> Stage:
    """Return the stage for *key*; unknown keys fall back to the first stage."""
    i = stage_index(key)
    return PROJECT_STAGES[i] if i >= 0 else PROJECT_STAGES[0]


def progress_percent(key: Optional[str]) -> float:
    """Linear progress ``(index + 1) / total * 100``; ``0`` for unknown keys."""
    i = stage_index(key)
    if i < 0:
        return 0
    return (i + 1) * 100 / len(PROJECT_STAGES)


def next_stage(key: Optional[str]) -> Optional[Stage]:
    i = stage_index(key)
    if 0 <= i < len(PROJECT_STAGES) - 1:
        return PROJECT_STAGES[i + 1]
    return None


def previous_stage(key: Optional[str]) -> Optional[Stage]:
    i = stage_index(key)
    if i > 0:
        return PROJECT_STAGES[i - 1]
    return None
