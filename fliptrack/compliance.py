"""
fliptrack.compliance
====================

Update‑compliance rule for a :class:`fliptrack.models.ComplianceStatus`.

A project is *compliant* while fewer than :data:`STALENESS_THRESHOLD_DAYS`
calendar days have passed since its last documented update.  Each record
cycles between two states::

    Compliant  --(days_since_update >= 7, seen by evaluate)-->  NeedsUpdate
    NeedsUpdate --(mark_updated)-->                              Compliant

Every helper is pure: the caller supplies ``now`` and gets a fresh record
back, the input is never mutated and nothing here raises.  Reading and
writing records is the job of :pymod:`fliptrack.stores`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List

from .dates import days_between, parse_timestamp
from .models import ComplianceStatus

logger = logging.getLogger(__name__)

STALENESS_THRESHOLD_DAYS = 7


def _flagged(project_id: int, days: int, last: datetime) -> ComplianceStatus:
    compliant = days < STALENESS_THRESHOLD_DAYS
    return ComplianceStatus(
        project_id=project_id,
        is_compliant=compliant,
        days_since_update=days,
        requires_update=not compliant,
        last_notification_date=last,
    )


def default_status(project_id: int, now: datetime) -> ComplianceStatus:
    """Zero state for a project that has no record yet."""
    return _flagged(project_id, 0, now)


def evaluate(status: ComplianceStatus, now: datetime) -> ComplianceStatus:
    """
    Recompute the flags of *status* as of *now*.

    ``days_since_update`` is a calendar‑day difference, floored at zero.
    A missing or unparseable ``last_notification_date`` counts as *now*.

    Examples
    --------
    >>> from datetime import timedelta
    >>> now = datetime(2024, 3, 10, 9, 0)
    >>> s = ComplianceStatus(1, last_notification_date=now - timedelta(days=10))
    >>> evaluate(s, now).requires_update
    True
    """
    last = parse_timestamp(status.last_notification_date)
    if last is None:
        logger.debug(
            f"Project {status.project_id}: unusable last update "
            f"{status.last_notification_date!r}, treating as now"
        )
        return _flagged(status.project_id, 0, now)

    days = max(days_between(last, now), 0)
    result = _flagged(status.project_id, days, last)
    # keep whatever representation the store handed us
    return replace(result, last_notification_date=status.last_notification_date)


def mark_updated(status: ComplianceStatus, now: datetime) -> ComplianceStatus:
    """Reset *status* to compliant, stamped with *now*."""
    return default_status(status.project_id, now)


def evaluate_all(statuses: Iterable[ComplianceStatus], now: datetime) -> List[ComplianceStatus]:
    """Batch sweep: :pyfunc:`evaluate` every record, preserving order."""
    results = [evaluate(s, now) for s in statuses]
    flagged = sum(1 for s in results if s.requires_update)
    logger.info(f"Compliance sweep: {len(results)} records, {flagged} need updates")
    return results


def needs_update(status: ComplianceStatus) -> bool:
    return status.requires_update
