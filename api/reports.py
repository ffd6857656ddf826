"""
api.reports
===========

Dashboard counters and per‑project summary reports.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from fliptrack.reports import ProjectReport, render_text
from fliptrack.tracker import FlipTracker
from api.deps import get_tracker

router = APIRouter(tags=["reports"])


def _report(tracker: FlipTracker, project_id: int) -> ProjectReport:
    try:
        return tracker.report(project_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Project not found")


# ---------- GET /stats ----------
@router.get("/stats")
def stats(tracker: FlipTracker = Depends(get_tracker)):
    return asdict(tracker.stats())


# ---------- GET /projects/{id}/report ----------
@router.get("/projects/{project_id}/report")
def project_report(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    report = _report(tracker, project_id)
    data = asdict(report)
    data["recent"] = [
        {"id": m.id, "type": m.type.value, "stage": m.stage, "notes": m.notes,
         "timestamp": m.timestamp.isoformat() if m.timestamp else None}
        for m in report.recent
    ]
    data["generated_at"] = report.generated_at.isoformat()
    return data


# ---------- GET /projects/{id}/report.txt ----------
@router.get("/projects/{project_id}/report.txt", response_class=PlainTextResponse)
def project_report_text(project_id: int, tracker: FlipTracker = Depends(get_tracker)):
    return render_text(_report(tracker, project_id))
