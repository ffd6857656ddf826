"""
fliptrack.viz
=============

Minimal plotting helpers used by the CLI and the report attachments.

Outputs are PNGs written to the *images/* folder (override with
``FLIPTRACK_IMG_DIR``; auto‑created on first save).  Filenames can be
overridden via keyword argument.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

import matplotlib

matplotlib.use("Agg")  # headless: charts are only ever written to disk

import matplotlib.pyplot as plt  # noqa: E402

from .models import ComplianceStatus, Project  # noqa: E402
from .settings import IMG_DIR  # noqa: E402
from .stages import PROJECT_STAGES, progress_percent, stage_info  # noqa: E402


def _save(out_path: str | os.PathLike) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=120, bbox_inches="tight")
    plt.close()
    return out_path


# ---------------------------------------------------------------------
# Plot 1 – horizontal progress bar per project
# ---------------------------------------------------------------------
def stage_progress_chart(
    projects: Iterable[Project],
    out_path: Optional[str | os.PathLike] = None,
) -> Path:
    """
    Draw one bar per project showing its stage progress (0–100 %).

    Parameters
    ----------
    projects : iterable of Project
    out_path : str or Path, default='images/stage_progress.png'

    Returns
    -------
    pathlib.Path
        Final image path for convenience.
    """
    projects = list(projects)
    names = [p.name for p in projects]
    values = [progress_percent(p.current_stage) for p in projects]

    plt.figure(figsize=(7, max(2, 0.5 * len(projects) + 1)))
    bars = plt.barh(names, values, color="#2b9348", edgecolor="#333")
    for rect, p in zip(bars, projects):
        plt.text(rect.get_width() + 1,
                 rect.get_y() + rect.get_height() / 2,
                 stage_info(p.current_stage).label,
                 va="center", fontsize=8, color="#333")
    # one tick per stage boundary
    plt.xticks([i * 100 / len(PROJECT_STAGES) for i in range(len(PROJECT_STAGES) + 1)])
    plt.xlim(0, 115)
    plt.grid(axis="x", linestyle=":", alpha=0.3)
    plt.gca().invert_yaxis()
    plt.title("Stage Progress")
    plt.xlabel("% Complete")
    plt.tight_layout()

    return _save(out_path or IMG_DIR / "stage_progress.png")


# ---------------------------------------------------------------------
# Plot 2 – compliant vs. needs‑update counts
# ---------------------------------------------------------------------
def compliance_summary(
    statuses: Iterable[ComplianceStatus],
    out_path: Optional[str | os.PathLike] = None,
) -> Path:
    """Bar chart of how many projects are compliant vs. need an update."""
    statuses = list(statuses)
    flagged = sum(1 for s in statuses if s.requires_update)
    xs = ["Compliant", "Needs Update"]
    ys = [len(statuses) - flagged, flagged]

    plt.figure()
    bars = plt.bar(xs, ys, color=["#2b9348", "#d62828"], edgecolor="#333")
    for rect, cnt in zip(bars, ys):
        plt.text(rect.get_x() + rect.get_width() / 2,
                 cnt + 0.05,
                 str(cnt),
                 ha="center", va="bottom",
                 fontsize=8, color="#333")
    plt.grid(axis="y", linestyle=":", alpha=0.3)
    plt.title("Update Compliance")
    plt.ylabel("Project Count")
    plt.tight_layout()

    return _save(out_path or IMG_DIR / "compliance_summary.png")
