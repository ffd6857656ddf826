"""
api.projects
============

Project CRUD plus the two stage‑change endpoints.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator, model_validator

from fliptrack.models import Project, ProjectStatus
from fliptrack.stages import is_valid_stage, progress_percent, stage_info
from fliptrack.tracker import FlipTracker
from api.deps import get_tracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectCreate(BaseModel):
    """Body for POST /projects (mirrors the creation form)."""
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    start_date: Optional[date] = None
    target_date: Optional[date] = None
    lockbox_code: Optional[str] = None

    @field_validator("name", "address")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def _target_after_start(self):
        # a missing start defaults to the tracker clock, checked on creation
        if self.start_date and self.target_date and self.target_date < self.start_date:
            raise ValueError("Target date cannot be before start date")
        return self


class ProjectPatch(BaseModel):
    """Body for PATCH /projects/{id}; stage changes go through /stage."""
    name: Optional[str] = None
    address: Optional[str] = None
    target_date: Optional[date] = None
    lockbox_code: Optional[str] = None
    status: Optional[ProjectStatus] = None
    thumbnail_url: Optional[str] = None


class StageChange(BaseModel):
    stage: str

    @field_validator("stage")
    @classmethod
    def _known_stage(cls, v: str) -> str:
        if not is_valid_stage(v):
            raise ValueError(f"unknown stage {v!r}")
        return v


class ProjectView(BaseModel):
    """A project plus the display values derived from its stage."""
    id: int
    name: str
    address: str
    start_date: date
    target_date: Optional[date] = None
    current_stage: str
    stage_label: str
    progress: float
    days_elapsed: int
    is_overdue: bool
    last_update_date: Optional[date] = None
    lockbox_code: Optional[str] = None
    status: ProjectStatus
    thumbnail_url: Optional[str] = None

    @classmethod
    def of(cls, p: Project, today: date) -> "ProjectView":
        return cls(
            id=p.id,
            name=p.name,
            address=p.address,
            start_date=p.start_date,
            target_date=p.target_date,
            current_stage=p.current_stage,
            stage_label=stage_info(p.current_stage).label,
            progress=progress_percent(p.current_stage),
            days_elapsed=p.days_elapsed(today),
            is_overdue=p.is_overdue(today),
            last_update_date=p.last_update_date,
            lockbox_code=p.lockbox_code,
            status=p.status,
            thumbnail_url=p.thumbnail_url,
        )


def _fetch(tracker: FlipTracker, project_id: int) -> Project:
    try:
        return tracker.projects.get_by_id(project_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Project not found")


# ---------- GET /projects ----------
@router.get("", response_model=List[ProjectView])
def list_projects(tracker: FlipTracker = Depends(get_tracker)):
    today = tracker.clock().date()
    return [ProjectView.of(p, today) for p in tracker.projects.get_all()]


# ---------- POST /projects ----------
@router.post("", response_model=ProjectView, status_code=201)
def create_project(body: ProjectCreate, tracker: FlipTracker = Depends(get_tracker)):
    try:
        project = tracker.create_project(
            body.name,
            body.address,
            start_date=body.start_date,
            target_date=body.target_date,
            lockbox_code=body.lockbox_code,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProjectView.of(project, tracker.clock().date())


# ---------- GET /projects/{id} ----------
@router.get("/{project_id}", response_model=ProjectView)
def get_project(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    return ProjectView.of(_fetch(tracker, project_id), tracker.clock().date())


# ---------- PATCH /projects/{id} ----------
@router.patch("/{project_id}", response_model=ProjectView)
def update_project(project_id: int, body: ProjectPatch, tracker: FlipTracker = Depends(get_tracker)):
    _fetch(tracker, project_id)
    try:
        project = tracker.projects.update(project_id, **body.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ProjectView.of(project, tracker.clock().date())


# ---------- DELETE /projects/{id} ----------
@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    _fetch(tracker, project_id)
    tracker.delete_project(project_id)


# ---------- PUT /projects/{id}/stage ----------
@router.put("/{project_id}/stage", response_model=ProjectView)
def change_stage(project_id: int, body: StageChange, tracker: FlipTracker = Depends(get_tracker)):
    _fetch(tracker, project_id)
    project = tracker.change_stage(project_id, body.stage)
    return ProjectView.of(project, tracker.clock().date())


# ---------- POST /projects/{id}/advance ----------
@router.post("/{project_id}/advance", response_model=ProjectView)
def advance_stage(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    _fetch(tracker, project_id)
    try:
        project = tracker.advance_stage(project_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ProjectView.of(project, tracker.clock().date())
