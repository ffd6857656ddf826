#!/usr/bin/env python
"""
Seed database with sample projects for testing.

This script creates sample flips in the database to populate
the dashboard with meaningful data.
"""

import logging

from fliptrack.db import SessionLocal, create_all
from fliptrack.seed import SAMPLE_PROJECTS, seed_sample_projects
from fliptrack.settings import LOG_FORMAT, LOG_LEVEL
from fliptrack.stores_db import DBComplianceStore, DBMediaStore, DBProjectStore
from fliptrack.tracker import FlipTracker


def seed_database():
    """Add sample projects to the database."""
    session = SessionLocal()
    tracker = FlipTracker(DBProjectStore(session), DBComplianceStore(session), DBMediaStore(session))
    count = seed_sample_projects(tracker)
    print(f"\nAdded {count} projects to the database!")


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    # Initialize DB if needed
    print("Ensuring database tables exist...")
    create_all()

    print(f"Seeding database with {len(SAMPLE_PROJECTS)} sample projects...")
    seed_database()

    print("\nDone! You can now run the API server with:")
    print("uvicorn api.main:app --reload")
