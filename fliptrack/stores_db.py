"""
fliptrack.stores_db
===================

SQLite‑backed implementation of the :pymod:`fliptrack.stores` surface.

These adapters wrap the ORM rows in :pymod:`fliptrack.db` so that any
code expecting the in‑memory stores can switch to a persistent database
without changing its calls.  All three stores may share one session.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Iterator, List, Optional

from sqlmodel import Session, select

from fliptrack.db import ComplianceStatusDB, MediaUpdateDB, ProjectDB, SessionLocal
from fliptrack.models import ComplianceStatus, MediaUpdate, Project
from fliptrack.settings import settings

logger = logging.getLogger(__name__)


class _SessionOwner:
    def __init__(self, session: Session | None = None) -> None:
        self._session: Session = session or SessionLocal()

    # ----------------------------------------------------- context manager
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._session.close()


class DBProjectStore(_SessionOwner):
    """
    Drop‑in replacement for :class:`fliptrack.stores.ProjectStore`.

    Methods mirror the in‑memory store:
    * get_all() / get_by_id(id)
    * create(project) / update(id, **patch) / delete(id)
    * iteration / len()
    """

    def _row(self, project_id: int) -> ProjectDB:
        row = self._session.get(ProjectDB, project_id)
        if row is None:
            raise KeyError(project_id)
        return row

    # ------------------------------------------------------------------ CRUD
    def get_all(self) -> List[Project]:
        rows = self._session.exec(select(ProjectDB).order_by(ProjectDB.id)).all()
        return [row.to_project() for row in rows]

    def get_by_id(self, project_id: int) -> Project:
        return self._row(project_id).to_project()

    def create(self, project: Project) -> Project:
        row = ProjectDB.from_project(project)
        row.id = None
        if row.last_update_date is None:
            row.last_update_date = date.today()
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        logger.info(f"Created project {row.id} ({row.name})")
        return row.to_project()

    def update(self, project_id: int, **patch) -> Project:
        patch.pop("id", None)
        merged = ProjectDB.from_project(
            Project(**{**vars(self._row(project_id).to_project()), **patch})
        )
        row = self._session.merge(merged)
        self._session.commit()
        return row.to_project()

    def delete(self, project_id: int) -> None:
        self._session.delete(self._row(project_id))
        self._session.commit()

    # ------------------------------------------------------ dunder helpers
    def __iter__(self) -> Iterator[Project]:
        yield from self.get_all()

    def __len__(self) -> int:
        return len(self.get_all())


class DBComplianceStore(_SessionOwner):
    """Compliance rows, one per project id."""

    def get_all(self) -> List[ComplianceStatus]:
        rows = self._session.exec(
            select(ComplianceStatusDB).order_by(ComplianceStatusDB.project_id)
        ).all()
        return [row.to_status() for row in rows]

    def get_by_project_id(self, project_id: int) -> Optional[ComplianceStatus]:
        row = self._session.get(ComplianceStatusDB, project_id)
        return row.to_status() if row else None

    def upsert(self, project_id: int, **patch) -> ComplianceStatus:
        patch.pop("project_id", None)
        current = self.get_by_project_id(project_id) or ComplianceStatus(project_id=project_id)
        merged = ComplianceStatusDB.from_status(
            ComplianceStatus(**{**vars(current), **patch})
        )
        row = self._session.merge(merged)
        self._session.commit()
        return row.to_status()

    def delete(self, project_id: int) -> None:
        row = self._session.get(ComplianceStatusDB, project_id)
        if row is not None:
            self._session.delete(row)
            self._session.commit()

    def __len__(self) -> int:
        return len(self.get_all())


class DBMediaStore(_SessionOwner):
    """Captured media rows."""

    def _row(self, media_id: int) -> MediaUpdateDB:
        row = self._session.get(MediaUpdateDB, media_id)
        if row is None:
            raise KeyError(media_id)
        return row

    def get_all(self) -> List[MediaUpdate]:
        rows = self._session.exec(select(MediaUpdateDB).order_by(MediaUpdateDB.id)).all()
        return [row.to_media() for row in rows]

    def get_by_id(self, media_id: int) -> MediaUpdate:
        return self._row(media_id).to_media()

    def get_by_project_id(self, project_id: int) -> List[MediaUpdate]:
        """Media for *project_id*, newest first."""
        rows = self._session.exec(
            select(MediaUpdateDB)
            .where(MediaUpdateDB.project_id == project_id)
            .order_by(MediaUpdateDB.timestamp.desc(), MediaUpdateDB.id.desc())
        ).all()
        return [row.to_media() for row in rows]

    def create(self, media: MediaUpdate) -> MediaUpdate:
        row = MediaUpdateDB.from_media(media)
        row.id = None
        if row.timestamp is None:
            row.timestamp = datetime.now(timezone.utc)
        row.url = row.url or settings.media_placeholder_url
        row.thumbnail_url = row.thumbnail_url or settings.thumbnail_placeholder_url
        row.uploaded_by = row.uploaded_by or settings.default_uploader
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        return row.to_media()

    def update(self, media_id: int, **patch) -> MediaUpdate:
        patch.pop("id", None)
        merged = MediaUpdateDB.from_media(
            MediaUpdate(**{**vars(self._row(media_id).to_media()), **patch})
        )
        row = self._session.merge(merged)
        self._session.commit()
        return row.to_media()

    def delete(self, media_id: int) -> None:
        self._session.delete(self._row(media_id))
        self._session.commit()

    def __len__(self) -> int:
        return len(self.get_all())
