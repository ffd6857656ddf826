"""
fliptrack.stores
================

In‑memory record stores for projects, media and compliance statuses.

These are the collaborators the tracker talks to.  They use only the
standard library so the whole domain can be unit‑tested without a
database; :pymod:`fliptrack.stores_db` offers the same surface on top of
SQLite.  Missing ids raise :class:`KeyError`.  Records are copied in and
out so callers never share state with the store.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Dict, Iterator, List, Optional

from .models import ComplianceStatus, MediaUpdate, Project
from .settings import settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProjectStore:
    """
    Dictionary‑backed project registry with auto‑incrementing ids.

    Example
    -------
    >>> ps = ProjectStore()
    >>> p = ps.create(Project("Oak St", "12 Oak St", date(2024, 5, 1)))
    >>> ps.get_by_id(p.id).name
    'Oak St'
    """

    def __init__(self) -> None:
        self._projects: Dict[int, Project] = {}

    def _next_id(self) -> int:
        return max(self._projects, default=0) + 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_all(self) -> List[Project]:
        return [replace(p) for p in self._projects.values()]

    def get_by_id(self, project_id: int) -> Project:
        """Retrieve by id (raise KeyError if not present)."""
        return replace(self._projects[project_id])

    def create(self, project: Project) -> Project:
        new = replace(project, id=self._next_id())
        if new.last_update_date is None:
            new.last_update_date = date.today()
        self._projects[new.id] = new
        return replace(new)

    def update(self, project_id: int, **patch) -> Project:
        current = self._projects[project_id]
        patch.pop("id", None)
        self._projects[project_id] = replace(current, **patch)
        return replace(self._projects[project_id])

    def delete(self, project_id: int) -> None:
        del self._projects[project_id]

    def __iter__(self) -> Iterator[Project]:
        return iter(self.get_all())

    def __len__(self) -> int:
        return len(self._projects)


class ComplianceStore:
    """One :class:`ComplianceStatus` per project id, in insertion order."""

    def __init__(self) -> None:
        self._statuses: Dict[int, ComplianceStatus] = {}

    def get_all(self) -> List[ComplianceStatus]:
        return [replace(s) for s in self._statuses.values()]

    def get_by_project_id(self, project_id: int) -> Optional[ComplianceStatus]:
        status = self._statuses.get(project_id)
        return replace(status) if status else None

    def upsert(self, project_id: int, **patch) -> ComplianceStatus:
        """Create the record if absent, otherwise merge *patch* into it."""
        patch.pop("project_id", None)
        current = self._statuses.get(project_id) or ComplianceStatus(project_id=project_id)
        self._statuses[project_id] = replace(current, **patch)
        return replace(self._statuses[project_id])

    def delete(self, project_id: int) -> None:
        """Drop the record for *project_id*; a missing record is ignored."""
        self._statuses.pop(project_id, None)

    def __len__(self) -> int:
        return len(self._statuses)


class MediaStore:
    """Photo / video records; ``create`` fills in upload metadata."""

    def __init__(self) -> None:
        self._media: Dict[int, MediaUpdate] = {}

    def get_all(self) -> List[MediaUpdate]:
        return [replace(m) for m in self._media.values()]

    def get_by_id(self, media_id: int) -> MediaUpdate:
        return replace(self._media[media_id])

    def get_by_project_id(self, project_id: int) -> List[MediaUpdate]:
        """Media for *project_id*, newest first."""
        items = [replace(m) for m in self._media.values() if m.project_id == project_id]
        return sorted(items, key=lambda m: m.timestamp, reverse=True)

    def create(self, media: MediaUpdate) -> MediaUpdate:
        new = replace(
            media,
            id=max(self._media, default=0) + 1,
            timestamp=media.timestamp or _utcnow(),
            url=media.url or settings.media_placeholder_url,
            thumbnail_url=media.thumbnail_url or settings.thumbnail_placeholder_url,
            uploaded_by=media.uploaded_by or settings.default_uploader,
        )
        self._media[new.id] = new
        return replace(new)

    def update(self, media_id: int, **patch) -> MediaUpdate:
        current = self._media[media_id]
        patch.pop("id", None)
        self._media[media_id] = replace(current, **patch)
        return replace(self._media[media_id])

    def delete(self, media_id: int) -> None:
        del self._media[media_id]

    def __len__(self) -> int:
        return len(self._media)
