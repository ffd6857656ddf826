"""
Pytest configuration: make sure `import fliptrack` works regardless of
where pytest is invoked, and provide shared fixtures.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fliptrack.tracker import FlipTracker  # noqa: E402

# Fixed "current time" shared by every test that needs a clock
NOW = datetime(2024, 3, 15, 14, 30, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock the tests can move forward."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker(clock):
    return FlipTracker.in_memory(clock=clock)


@pytest.fixture
def db_session():
    """Session on a throw‑away in‑memory SQLite database."""
    from fliptrack.db import SessionLocal, create_all, make_engine

    engine = make_engine("sqlite://")
    create_all(engine)
    session = SessionLocal(engine)
    yield session
    session.close()
    engine.dispose()
