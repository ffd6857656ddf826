"""
fliptrack.db
============

SQLite persistence layer for FlipTrack.

This module exposes:

* ``engine`` – a global SQLModel engine pointing at *fliptrack.db*
* ``make_engine(url)`` – build an engine for another database (tests use
  an in‑memory SQLite URL)
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables at first run
* ORM rows mirroring the dataclasses in :pymod:`fliptrack.models`
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine

from fliptrack.dates import parse_timestamp
from fliptrack.models import ComplianceStatus, MediaType, MediaUpdate, Project, ProjectStatus
from fliptrack.settings import DB_ECHO, DB_URL


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def make_engine(url: str = DB_URL, echo: bool = DB_ECHO) -> Engine:
    """Create an engine; in‑memory SQLite shares one connection across threads."""
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


engine = make_engine()


# Timestamps are written as aware UTC; naive inputs are taken to be UTC.
# SQLite returns them without tzinfo, so reads reattach UTC.
def _to_db_time(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_db_time(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802 (factory camel‑case for consistency with FastAPI docs)
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM models
# ---------------------------------------------------------------------------
class ProjectDB(SQLModel, table=True):
    """SQLite‑backed representation of a :class:`fliptrack.models.Project`."""

    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    address: str
    start_date: date
    target_date: Optional[date] = None
    current_stage: str = "Planning"
    last_update_date: Optional[date] = None
    lockbox_code: Optional[str] = None
    status: str = ProjectStatus.IN_PROGRESS.value
    thumbnail_url: Optional[str] = None

    @classmethod
    def from_project(cls, p: Project) -> "ProjectDB":
        return cls(
            id=p.id,
            name=p.name,
            address=p.address,
            start_date=p.start_date,
            target_date=p.target_date,
            current_stage=p.current_stage,
            last_update_date=p.last_update_date,
            lockbox_code=p.lockbox_code,
            status=p.status.value,
            thumbnail_url=p.thumbnail_url,
        )

    def to_project(self) -> Project:
        return Project(
            id=self.id,
            name=self.name,
            address=self.address,
            start_date=self.start_date,
            target_date=self.target_date,
            current_stage=self.current_stage,
            last_update_date=self.last_update_date,
            lockbox_code=self.lockbox_code,
            status=ProjectStatus(self.status),
            thumbnail_url=self.thumbnail_url,
        )


class MediaUpdateDB(SQLModel, table=True):
    """A captured photo/video row."""

    __tablename__ = "media_updates"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(index=True)
    type: str
    stage: str
    notes: str = ""
    timestamp: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    uploaded_by: Optional[str] = None

    @classmethod
    def from_media(cls, m: MediaUpdate) -> "MediaUpdateDB":
        return cls(
            id=m.id,
            project_id=m.project_id,
            type=m.type.value,
            stage=m.stage,
            notes=m.notes,
            timestamp=_to_db_time(m.timestamp),
            url=m.url,
            thumbnail_url=m.thumbnail_url,
            uploaded_by=m.uploaded_by,
        )

    def to_media(self) -> MediaUpdate:
        return MediaUpdate(
            id=self.id,
            project_id=self.project_id,
            type=MediaType(self.type),
            stage=self.stage,
            notes=self.notes,
            timestamp=_from_db_time(self.timestamp),
            url=self.url,
            thumbnail_url=self.thumbnail_url,
            uploaded_by=self.uploaded_by,
        )


class ComplianceStatusDB(SQLModel, table=True):
    """
    Compliance row keyed by project id (one per project).

    Unparseable ``last_notification_date`` values are stored as NULL,
    which :pyfunc:`fliptrack.compliance.evaluate` reads as "now".
    """

    __tablename__ = "compliance_statuses"

    project_id: int = Field(primary_key=True)
    is_compliant: bool = True
    days_since_update: int = 0
    requires_update: bool = False
    last_notification_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    @classmethod
    def from_status(cls, s: ComplianceStatus) -> "ComplianceStatusDB":
        return cls(
            project_id=s.project_id,
            is_compliant=s.is_compliant,
            days_since_update=s.days_since_update,
            requires_update=s.requires_update,
            last_notification_date=_to_db_time(parse_timestamp(s.last_notification_date)),
        )

    def to_status(self) -> ComplianceStatus:
        return ComplianceStatus(
            project_id=self.project_id,
            is_compliant=self.is_compliant,
            days_since_update=self.days_since_update,
            requires_update=self.requires_update,
            last_notification_date=_from_db_time(self.last_notification_date),
        )


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create all FlipTrack tables (safe if they already exist)."""
    SQLModel.metadata.create_all(bind or engine)

# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Quick bootstrap helper.

    Examples
    --------
    $ python -m fliptrack.db --create        # first‑time table creation
    """
    import argparse

    parser = argparse.ArgumentParser(prog="python -m fliptrack.db", description="FlipTrack DB utilities")
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    if args.create:
        create_all()
        print(f"✅ {DB_URL} schema initialised")
