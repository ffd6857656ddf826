import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fliptrack import __version__
from fliptrack.settings import API_DEBUG, LOG_FORMAT, LOG_LEVEL, settings
from fliptrack.stages import PROJECT_STAGES, progress_percent

logging.basicConfig(level="DEBUG" if API_DEBUG else LOG_LEVEL, format=LOG_FORMAT)

app = FastAPI(
    title="FlipTrack Pro API",
    version=__version__,
    description="HTTP layer over the FlipTracker: projects, media capture, update compliance and reports.",
)

# --- CORS ----------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

# --- Include Routers ----------------------------------------------------------
from .projects import router as projects_router  # noqa: E402
from .compliance import router as compliance_router  # noqa: E402
from .media import router as media_router  # noqa: E402
from .reports import router as reports_router  # noqa: E402

app.include_router(projects_router)
app.include_router(compliance_router)
app.include_router(media_router)
app.include_router(reports_router)


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "FlipTrack API is alive"}


# ---------- GET /stages ----------
@app.get("/stages")
def list_stages():
    """The fixed renovation sequence, in order, with its progress value."""
    return [
        {
            "key": stage.key,
            "label": stage.label,
            "icon": stage.icon,
            "order": i,
            "progress": progress_percent(stage.key),
        }
        for i, stage in enumerate(PROJECT_STAGES)
    ]
