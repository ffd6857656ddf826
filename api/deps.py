"""
api.deps
========

FastAPI dependency providers.

`get_tracker` yields a **FlipTracker** backed by the persistent SQLite
store, on a fresh session per request (sessions are not shared across
the threadpool).  Tests swap it out through
``app.dependency_overrides[get_tracker]``.
"""

from functools import lru_cache
from typing import Iterator

from fliptrack.db import SessionLocal, create_all
from fliptrack.stores_db import DBComplianceStore, DBMediaStore, DBProjectStore
from fliptrack.tracker import FlipTracker


@lru_cache
def init_schema() -> bool:
    """Create the tables once per process."""
    create_all()
    return True


def get_tracker() -> Iterator[FlipTracker]:
    init_schema()
    with SessionLocal() as session:
        yield FlipTracker(
            DBProjectStore(session),
            DBComplianceStore(session),
            DBMediaStore(session),
        )
