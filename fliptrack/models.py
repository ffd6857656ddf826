"""
fliptrack.models
================

Dataclasses and enums representing a renovation project, the media
captured for it and its update-compliance record.  These objects are
intentionally lightweight; they carry **no** external‑library
dependencies so that importing `fliptrack` stays fast.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


class ProjectStatus(Enum):
    """Business status of a flip (independent of the renovation stage)."""
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    COMPLETE = "Complete"
    SOLD = "Sold"

    def __str__(self) -> str:        # nicer REPL display
        return self.value


class MediaType(Enum):
    PHOTO = "photo"
    VIDEO = "video"

    def __str__(self) -> str:
        return self.value


@dataclass
class Project:
    """
    Core record tracked by FlipTrack.

    Parameters
    ----------
    id : int | None
        Store‑assigned identifier (``None`` until created).
    name : str
        Short project name (e.g., "Oak Street Flip").
    address : str
        Street address of the property.
    start_date : datetime.date
        Date the renovation began.
    target_date : datetime.date | None
        Planned completion date.
    current_stage : str, default="Planning"
        Key of the renovation stage (see :pymod:`fliptrack.stages`).
    last_update_date : datetime.date | None
        Day the project record was last touched.
    lockbox_code : str | None
        Access code for the property lockbox.
    status : ProjectStatus, default=IN_PROGRESS
    thumbnail_url : str | None
    """
    name: str
    address: str
    start_date: date
    id: Optional[int] = None
    target_date: Optional[date] = None
    current_stage: str = "Planning"
    last_update_date: Optional[date] = None
    lockbox_code: Optional[str] = None
    status: ProjectStatus = ProjectStatus.IN_PROGRESS
    thumbnail_url: Optional[str] = None

    def __post_init__(self):
        if self.target_date and self.start_date and self.target_date < self.start_date:
            raise ValueError("target date cannot be before start date")

    # Convenience helpers -------------------------------------------------
    def days_elapsed(self, today: Optional[date] = None) -> int:
        """Return days since the project started (0 if no start date)."""
        if not self.start_date:
            return 0
        today = today or date.today()
        return (today - self.start_date).days

    def is_overdue(self, today: Optional[date] = None) -> bool:
        """True once *today* is past the target completion date."""
        if not self.target_date:
            return False
        today = today or date.today()
        return today > self.target_date


@dataclass
class MediaUpdate:
    """A photo or video documenting a project at a given stage."""
    project_id: int
    type: MediaType
    stage: str
    notes: str = ""
    id: Optional[int] = None
    timestamp: Optional[datetime] = None
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    uploaded_by: Optional[str] = None


@dataclass
class ComplianceStatus:
    """
    Update‑compliance record, one per project.

    ``requires_update`` is always the negation of ``is_compliant``; both
    are derived from ``days_since_update`` by
    :pyfunc:`fliptrack.compliance.evaluate`.  ``last_notification_date``
    may arrive from a store as an ISO string (or garbage); the evaluator
    copes with either.
    """
    project_id: int
    is_compliant: bool = True
    days_since_update: int = 0
    requires_update: bool = False
    last_notification_date: Union[datetime, str, None] = None
