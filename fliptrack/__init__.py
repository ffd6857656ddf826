"""
FlipTrack
=========

Project tracking for fix & flip renovations: stage progress, photo/video
documentation and update compliance.

Import structure
----------------
`import fliptrack` is intentionally cheap: nothing is imported eagerly.
Persistence (*sqlmodel*) lives in :pymod:`fliptrack.db` and plotting
(*matplotlib*) in :pymod:`fliptrack.viz`; both load only when accessed.

Sub‑modules
~~~~~~~~~~~
- :pymod:`fliptrack.models`      – ``Project``, ``MediaUpdate``, ``ComplianceStatus`` dataclasses
- :pymod:`fliptrack.stages`      – fixed stage table, progress / adjacency helpers
- :pymod:`fliptrack.compliance`  – staleness rule (`evaluate`, `mark_updated`, …)
- :pymod:`fliptrack.lifecycle`   – stage‑change guard (`set_stage`, `advance_stage`)
- :pymod:`fliptrack.stores`      – in‑memory record stores
- :pymod:`fliptrack.stores_db`   – SQLite‑backed stores
- :pymod:`fliptrack.tracker`     – ``FlipTracker`` application service
- :pymod:`fliptrack.reports`     – project summary reports
- :pymod:`fliptrack.viz`         – plotting helpers

Quick start
-----------
>>> from fliptrack.tracker import FlipTracker
>>> t = FlipTracker.in_memory()
>>> p = t.create_project("Oak St", "12 Oak St")
>>> t.advance_stage(p.id).current_stage
'Demo'
"""

__all__ = [
    "models",
    "stages",
    "compliance",
    "lifecycle",
    "stores",
    "stores_db",
    "tracker",
    "reports",
    "viz",
]

__version__ = "0.1.0"
