"""
fliptrack.cli
=============

Command‑line entry point (installed as ``fliptrack``).

Examples
--------
$ fliptrack init-db              # create tables
$ fliptrack seed                 # load the sample flips
$ fliptrack check                # compliance sweep, lists overdue projects
$ fliptrack stats
$ fliptrack report 3
$ fliptrack chart --out images/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .settings import IMG_DIR, LOG_FORMAT, LOG_LEVEL

logger = logging.getLogger(__name__)


def _tracker():
    from .db import SessionLocal, create_all
    from .stores_db import DBComplianceStore, DBMediaStore, DBProjectStore
    from .tracker import FlipTracker

    create_all()
    session = SessionLocal()
    return FlipTracker(DBProjectStore(session), DBComplianceStore(session), DBMediaStore(session))


def cmd_init_db(args) -> int:
    from .db import create_all

    create_all()
    print("✅ schema initialised")
    return 0


def cmd_seed(args) -> int:
    from .seed import seed_sample_projects

    count = seed_sample_projects(_tracker())
    print(f"Added {count} sample projects")
    return 0


def cmd_check(args) -> int:
    tracker = _tracker()
    statuses = tracker.check_compliance()
    overdue = [s for s in statuses if s.requires_update]
    for s in overdue:
        try:
            name = tracker.projects.get_by_id(s.project_id).name
        except KeyError:
            logger.warning(f"Compliance record for missing project {s.project_id}")
            name = f"project {s.project_id}"
        print(f"⚠  {name}: {s.days_since_update} days since last update")
    print(f"{len(overdue)} of {len(statuses)} projects need updates")
    return 1 if overdue and args.strict else 0


def cmd_stats(args) -> int:
    stats = _tracker().stats()
    print(f"Total projects:  {stats.total}")
    print(f"Active:          {stats.active}")
    print(f"Completed:       {stats.completed}")
    print(f"Need updates:    {stats.needs_update}")
    return 0


def cmd_report(args) -> int:
    from .reports import render_text

    try:
        report = _tracker().report(args.project_id)
    except KeyError:
        print(f"⛔  project {args.project_id} not found", file=sys.stderr)
        return 2
    print(render_text(report))
    return 0


def cmd_chart(args) -> int:
    from .viz import compliance_summary, stage_progress_chart

    tracker = _tracker()
    out_dir = Path(args.out)
    print(f"stage progress saved to {stage_progress_chart(tracker.projects.get_all(), out_dir / 'stage_progress.png')}")
    print(f"compliance summary saved to {compliance_summary(tracker.check_compliance(), out_dir / 'compliance_summary.png')}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fliptrack", description="FlipTrack Pro utilities")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create database tables").set_defaults(func=cmd_init_db)
    sub.add_parser("seed", help="load sample projects").set_defaults(func=cmd_seed)

    check = sub.add_parser("check", help="re-evaluate update compliance")
    check.add_argument("--strict", action="store_true", help="exit 1 if any project needs an update")
    check.set_defaults(func=cmd_check)

    sub.add_parser("stats", help="dashboard counters").set_defaults(func=cmd_stats)

    report = sub.add_parser("report", help="print a project report")
    report.add_argument("project_id", type=int)
    report.set_defaults(func=cmd_report)

    chart = sub.add_parser("chart", help="write progress / compliance PNGs")
    chart.add_argument("--out", default=str(IMG_DIR), help="output directory")
    chart.set_defaults(func=cmd_chart)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level="DEBUG" if args.verbose else LOG_LEVEL, format=LOG_FORMAT)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
