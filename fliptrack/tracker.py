"""
fliptrack.tracker
=================

Application service tying the stores to the pure stage and compliance
rules.  The tracker owns the ordering the core itself cannot enforce: a
media save is followed by exactly one mark‑updated write for its
project, and that write is the last one for the record.

>>> t = FlipTracker.in_memory()
>>> p = t.create_project("Oak St", "12 Oak St")
>>> t.get_compliance(p.id).requires_update
False
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Tuple

from . import compliance as rules
from . import lifecycle
from .models import ComplianceStatus, MediaType, MediaUpdate, Project, ProjectStatus
from .reports import ProjectReport, build_report
from .settings import settings
from .stages import FIRST_STAGE_KEY, is_valid_stage
from .stores import ComplianceStore, MediaStore, ProjectStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProjectStats:
    """Dashboard counters."""
    total: int
    active: int
    completed: int
    needs_update: int


class FlipTracker:
    """
    Facade over a project store, a compliance store and a media store.

    Any objects exposing the :pymod:`fliptrack.stores` surface work,
    in‑memory or database backed.  *clock* returns the current time and
    defaults to timezone‑aware UTC.
    """

    def __init__(
        self,
        projects,
        compliance,
        media,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.projects = projects
        self.compliance = compliance
        self.media = media
        self.clock = clock

    @classmethod
    def in_memory(cls, clock: Callable[[], datetime] = utcnow) -> "FlipTracker":
        return cls(ProjectStore(), ComplianceStore(), MediaStore(), clock=clock)

    def _today(self) -> date:
        return self.clock().date()

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------
    def create_project(
        self,
        name: str,
        address: str,
        start_date: Optional[date] = None,
        target_date: Optional[date] = None,
        lockbox_code: Optional[str] = None,
    ) -> Project:
        today = self._today()
        project = Project(
            name=name,
            address=address,
            start_date=start_date or today,
            target_date=target_date,
            current_stage=FIRST_STAGE_KEY,
            last_update_date=today,
            lockbox_code=lockbox_code,
            status=ProjectStatus.IN_PROGRESS,
            thumbnail_url=settings.project_placeholder_url,
        )
        return self.projects.create(project)

    def change_stage(self, project_id: int, stage_key: str) -> Project:
        """Set the stage explicitly (raise ValueError for unknown keys)."""
        project = self.projects.get_by_id(project_id)
        lifecycle.set_stage(project, stage_key, self._today())
        logger.info(f"Project {project_id} moved to {stage_key}")
        return self.projects.update(
            project_id,
            current_stage=project.current_stage,
            last_update_date=project.last_update_date,
        )

    def advance_stage(self, project_id: int) -> Project:
        """Move one stage forward (raise ValueError once Complete)."""
        project = self.projects.get_by_id(project_id)
        stage = lifecycle.advance_stage(project, self._today())
        logger.info(f"Project {project_id} advanced to {stage.key}")
        return self.projects.update(
            project_id,
            current_stage=project.current_stage,
            last_update_date=project.last_update_date,
        )

    def delete_project(self, project_id: int) -> None:
        """Remove a project with its media and compliance record (KeyError if unknown)."""
        self.projects.get_by_id(project_id)
        media = self.media.get_by_project_id(project_id)
        for item in media:
            self.media.delete(item.id)
        self.compliance.delete(project_id)
        self.projects.delete(project_id)
        logger.info(f"Deleted project {project_id} and {len(media)} media")

    # ------------------------------------------------------------------
    # Compliance
    # ------------------------------------------------------------------
    def _save(self, status: ComplianceStatus) -> ComplianceStatus:
        patch = dict(vars(status))
        project_id = patch.pop("project_id")
        return self.compliance.upsert(project_id, **patch)

    def get_compliance(self, project_id: int) -> ComplianceStatus:
        """Current status for one project, created with defaults if absent."""
        now = self.clock()
        status = self.compliance.get_by_project_id(project_id)
        if status is None:
            logger.debug(f"No compliance record for project {project_id}, creating default")
            fresh = rules.default_status(project_id, now)
            return self._save(fresh)
        return rules.evaluate(status, now)

    def check_compliance(self) -> List[ComplianceStatus]:
        """Re‑evaluate and persist every stored record."""
        evaluated = rules.evaluate_all(self.compliance.get_all(), self.clock())
        return [self._save(s) for s in evaluated]

    def mark_updated(self, project_id: int) -> ComplianceStatus:
        now = self.clock()
        current = self.compliance.get_by_project_id(project_id) or rules.default_status(project_id, now)
        fresh = rules.mark_updated(current, now)
        return self._save(fresh)

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------
    def capture_media(
        self,
        project_id: int,
        media_type: MediaType,
        stage: str,
        notes: str = "",
        url: Optional[str] = None,
    ) -> Tuple[MediaUpdate, ComplianceStatus]:
        """
        Save a photo/video and clear the project's compliance flag.

        Raises KeyError for an unknown project and ValueError for an
        unknown stage; nothing is written in either case.
        """
        self.projects.get_by_id(project_id)
        if not is_valid_stage(stage):
            raise ValueError(f"unknown stage {stage!r}")

        saved = self.media.create(
            MediaUpdate(
                project_id=project_id,
                type=MediaType(media_type),
                stage=stage,
                notes=(notes or "").strip(),
                timestamp=self.clock(),
                url=url,
            )
        )
        logger.info(f"Saved {saved.type.value} {saved.id} for project {project_id}")
        # only after the save succeeded
        return saved, self.mark_updated(project_id)

    def timeline(
        self,
        project_id: int,
        stage: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> List[MediaUpdate]:
        """Media newest first; ``None`` or ``"all"`` disables a filter."""
        items = self.media.get_by_project_id(project_id)
        if stage and stage != "all":
            items = [m for m in items if m.stage == stage]
        if media_type and media_type != "all":
            items = [m for m in items if m.type.value == media_type]
        return items

    # ------------------------------------------------------------------
    # Dashboard / reporting
    # ------------------------------------------------------------------
    def stats(self) -> ProjectStats:
        projects = self.projects.get_all()
        statuses = self.compliance.get_all()
        return ProjectStats(
            total=len(projects),
            active=sum(1 for p in projects if p.status is ProjectStatus.IN_PROGRESS),
            completed=sum(
                1 for p in projects if p.status in (ProjectStatus.COMPLETE, ProjectStatus.SOLD)
            ),
            needs_update=sum(1 for s in statuses if rules.needs_update(s)),
        )

    def report(self, project_id: int) -> ProjectReport:
        project = self.projects.get_by_id(project_id)
        return build_report(
            project,
            self.media.get_by_project_id(project_id),
            self.get_compliance(project_id),
            now=self.clock(),
        )
