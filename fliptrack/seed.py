"""
fliptrack.seed
==============

Sample flips used to populate a fresh database (and the CLI demo) with
meaningful data: projects spread over every stage, some recently
documented and some overdue for an update.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, NamedTuple, Optional

from .models import MediaType, MediaUpdate, ProjectStatus
from .tracker import FlipTracker

logger = logging.getLogger(__name__)


class SampleProject(NamedTuple):
    name: str
    address: str
    started_days_ago: int
    duration_days: int
    stage: str
    days_since_update: int
    lockbox_code: Optional[str] = None
    status: ProjectStatus = ProjectStatus.IN_PROGRESS
    photos: int = 0
    videos: int = 0


SAMPLE_PROJECTS: List[SampleProject] = [
    SampleProject("Oak Street Flip", "1423 Oak St, Springfield, IL", 5, 90,
                  "Planning", 1, "4782", photos=1),
    SampleProject("Maple Avenue Bungalow", "88 Maple Ave, Springfield, IL", 21, 75,
                  "Demo", 3, "1190", photos=4, videos=1),
    SampleProject("Riverside Duplex", "310 Riverside Dr, Peoria, IL", 48, 120,
                  "Rough-In", 10, "5521", photos=6, videos=2),
    SampleProject("Cedar Court Ranch", "7 Cedar Ct, Decatur, IL", 70, 100,
                  "Finishes", 7, photos=9, videos=1),
    SampleProject("Elm Row Townhouse", "52 Elm Row, Champaign, IL", 130, 110,
                  "Complete", 15, status=ProjectStatus.SOLD, photos=12, videos=3),
]


def seed_sample_projects(tracker: FlipTracker, samples: List[SampleProject] = SAMPLE_PROJECTS) -> int:
    """Create every sample project with media and a back‑dated compliance record."""
    now = tracker.clock()
    today = now.date()
    for sample in samples:
        start = today - timedelta(days=sample.started_days_ago)
        project = tracker.create_project(
            sample.name,
            sample.address,
            start_date=start,
            target_date=start + timedelta(days=sample.duration_days),
            lockbox_code=sample.lockbox_code,
        )
        tracker.projects.update(project.id, current_stage=sample.stage, status=sample.status)

        last_update = now - timedelta(days=sample.days_since_update)
        for i in range(sample.photos + sample.videos):
            kind = MediaType.PHOTO if i < sample.photos else MediaType.VIDEO
            tracker.media.create(_sample_media(project.id, kind, sample.stage, last_update, i))
        tracker.compliance.upsert(project.id, last_notification_date=last_update)
        logger.info(f"Added: {sample.name} ({sample.stage})")

    tracker.check_compliance()
    return len(samples)


def _sample_media(project_id: int, kind: MediaType, stage: str, when: datetime, i: int) -> MediaUpdate:
    return MediaUpdate(
        project_id=project_id,
        type=kind,
        stage=stage,
        notes=f"{kind.value.title()} {i + 1}",
        timestamp=when - timedelta(hours=i),
    )
