"""
api.media
=========

Media capture and the per‑project timeline.  Saving media is the event
that resets a project's compliance record.
"""

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, field_validator

from fliptrack.models import MediaType, MediaUpdate
from fliptrack.stages import is_valid_stage, stage_info
from fliptrack.tracker import FlipTracker
from api.compliance import ComplianceView
from api.deps import get_tracker

router = APIRouter(tags=["media"])


class MediaCreate(BaseModel):
    project_id: int
    type: MediaType
    stage: str
    notes: str = ""
    url: Optional[str] = None

    @field_validator("stage")
    @classmethod
    def _known_stage(cls, v: str) -> str:
        if not is_valid_stage(v):
            raise ValueError(f"unknown stage {v!r}")
        return v


class MediaView(BaseModel):
    id: int
    project_id: int
    type: MediaType
    stage: str
    stage_label: str
    notes: str
    timestamp: datetime
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    uploaded_by: Optional[str] = None

    @classmethod
    def of(cls, m: MediaUpdate) -> "MediaView":
        return cls(stage_label=stage_info(m.stage).label, **vars(m))


class CaptureResult(BaseModel):
    media: MediaView
    compliance: ComplianceView


# ---------- POST /media ----------
@router.post("/media", response_model=CaptureResult, status_code=201)
def capture_media(body: MediaCreate, tracker: FlipTracker = Depends(get_tracker)):
    try:
        media, status = tracker.capture_media(
            body.project_id, body.type, body.stage, notes=body.notes, url=body.url
        )
    except KeyError:
        raise HTTPException(status_code=404, detail="Project not found")
    return CaptureResult(media=MediaView.of(media), compliance=ComplianceView.of(status))


# ---------- GET /projects/{id}/media ----------
@router.get("/projects/{project_id}/media", response_model=List[MediaView])
def project_timeline(
    project_id: int,
    stage: str = Query("all", description="Stage key or 'all'"),
    type: Literal["all", "photo", "video"] = Query("all", description="Media type filter"),
    tracker: FlipTracker = Depends(get_tracker),
):
    """Media for one project, newest first."""
    try:
        tracker.projects.get_by_id(project_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Project not found")
    return [MediaView.of(m) for m in tracker.timeline(project_id, stage=stage, media_type=type)]


# ---------- DELETE /media/{id} ----------
@router.delete("/media/{media_id}", status_code=204)
def delete_media(media_id: int, tracker: FlipTracker = Depends(get_tracker)):
    try:
        tracker.media.delete(media_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Media not found")
