"""
fliptrack.reports
=================

Project summary reports: a :class:`ProjectReport` snapshot built from
already‑loaded records, and a plain‑text rendering of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Sequence

from .dates import format_date, format_datetime
from .models import ComplianceStatus, MediaType, MediaUpdate, Project
from .settings import settings
from .stages import progress_percent, stage_info

RECENT_UPDATES = 3


@dataclass
class ProjectReport:
    project_id: int
    name: str
    address: str
    stage_key: str
    stage_label: str
    progress: int
    start_date: str
    target_date: str
    days_elapsed: int
    total_media: int
    photo_count: int
    video_count: int
    requires_update: bool
    days_since_update: int
    generated_at: datetime
    url: str
    recent: List[MediaUpdate] = field(default_factory=list)


def report_url(project_id: int, generated_at: datetime) -> str:
    base = str(settings.report_base_url).rstrip("/")
    return f"{base}/{project_id}-{int(generated_at.timestamp() * 1000)}.pdf"


def build_report(
    project: Project,
    media: Sequence[MediaUpdate],
    status: ComplianceStatus,
    now: datetime,
) -> ProjectReport:
    """
    Summarise *project* as of *now*.

    *media* is expected newest first, as the stores return it; the first
    :data:`RECENT_UPDATES` items are kept for the preview.
    """
    stage = stage_info(project.current_stage)
    return ProjectReport(
        project_id=project.id,
        name=project.name,
        address=project.address,
        stage_key=stage.key,
        stage_label=stage.label,
        progress=round(progress_percent(project.current_stage)),
        start_date=format_date(project.start_date),
        target_date=format_date(project.target_date),
        days_elapsed=project.days_elapsed(now.date()),
        total_media=len(media),
        photo_count=sum(1 for m in media if m.type is MediaType.PHOTO),
        video_count=sum(1 for m in media if m.type is MediaType.VIDEO),
        requires_update=status.requires_update,
        days_since_update=status.days_since_update,
        generated_at=now,
        url=report_url(project.id, now),
        recent=list(media[:RECENT_UPDATES]),
    )


def render_text(report: ProjectReport) -> str:
    """Plain‑text version of *report*, suitable for e‑mail or a terminal."""
    lines = [
        f"{report.name} - Project Report",
        f"Generated on {format_date(report.generated_at)}",
        "",
        f"Address:      {report.address}",
        f"Stage:        {report.stage_label} ({report.progress}% complete)",
        f"Started:      {report.start_date} ({report.days_elapsed} days ago)",
        f"Target:       {report.target_date}",
        f"Media:        {report.total_media} total, "
        f"{report.photo_count} photos, {report.video_count} videos",
    ]
    if report.requires_update:
        lines.append(f"Compliance:   NEEDS UPDATE ({report.days_since_update} days since last update)")
    else:
        lines.append("Compliance:   up to date")

    if report.recent:
        lines += ["", "Recent updates:"]
        for item in report.recent:
            note = f" - {item.notes}" if item.notes else ""
            lines.append(
                f"  [{item.type.value}] {stage_info(item.stage).label}, "
                f"{format_datetime(item.timestamp)}{note}"
            )
    return "\n".join(lines)
