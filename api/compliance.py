"""
api.compliance
==============

Endpoints exposing update compliance: per‑project lookup (created on
first query), the batch sweep and the manual "mark updated" reset.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from fliptrack.compliance import STALENESS_THRESHOLD_DAYS
from fliptrack.dates import parse_timestamp
from fliptrack.models import ComplianceStatus
from fliptrack.tracker import FlipTracker
from api.deps import get_tracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compliance", tags=["compliance"])


class ComplianceView(BaseModel):
    project_id: int
    is_compliant: bool
    days_since_update: int
    requires_update: bool
    last_notification_date: Optional[datetime] = None
    threshold_days: int = STALENESS_THRESHOLD_DAYS

    @classmethod
    def of(cls, s: ComplianceStatus) -> "ComplianceView":
        return cls(
            project_id=s.project_id,
            is_compliant=s.is_compliant,
            days_since_update=s.days_since_update,
            requires_update=s.requires_update,
            last_notification_date=parse_timestamp(s.last_notification_date),
        )


def _require_project(tracker: FlipTracker, project_id: int) -> None:
    try:
        tracker.projects.get_by_id(project_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Project not found")


# ---------- GET /compliance ----------
@router.get("", response_model=List[ComplianceView])
def list_compliance(tracker: FlipTracker = Depends(get_tracker)):
    """Stored records as last evaluated (no sweep)."""
    return [ComplianceView.of(s) for s in tracker.compliance.get_all()]


# ---------- POST /compliance/check ----------
@router.post("/check", response_model=List[ComplianceView])
def check_compliance(tracker: FlipTracker = Depends(get_tracker)):
    """Re‑evaluate every record against the current time and persist it."""
    return [ComplianceView.of(s) for s in tracker.check_compliance()]


# ---------- GET /compliance/{project_id} ----------
@router.get("/{project_id}", response_model=ComplianceView)
def get_compliance(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    _require_project(tracker, project_id)
    return ComplianceView.of(tracker.get_compliance(project_id))


# ---------- POST /compliance/{project_id}/mark-updated ----------
@router.post("/{project_id}/mark-updated", response_model=ComplianceView)
def mark_updated(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    _require_project(tracker, project_id)
    logger.info(f"Project {project_id} marked updated")
    return ComplianceView.of(tracker.mark_updated(project_id))
