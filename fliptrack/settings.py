"""
fliptrack.settings
==================

Configuration settings for the FlipTrack application.

This module provides centralized configuration options that can be used across
the FlipTrack application. It includes default values that can be overridden
via environment variables.  The compliance staleness threshold is deliberately
absent: it lives as a constant in :pymod:`fliptrack.compliance`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("FLIPTRACK_DB_FILE", str(BASE_DIR / "fliptrack.db"))
DB_URL = os.environ.get("FLIPTRACK_DB_URL", f"sqlite:///{DB_FILE}")
DB_ECHO = os.environ.get("FLIPTRACK_DB_ECHO", "False").lower() == "true"

# API settings
# ---------------------------------------------------------------------------
API_HOST = os.environ.get("FLIPTRACK_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("FLIPTRACK_API_PORT", "8000"))
API_DEBUG = os.environ.get("FLIPTRACK_API_DEBUG", "False").lower() == "true"

# Output / logging
# ---------------------------------------------------------------------------
IMG_DIR = Path(os.environ.get("FLIPTRACK_IMG_DIR", "images"))
LOG_LEVEL = os.environ.get("FLIPTRACK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Pydantic settings model for values the API and reports hand to clients
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FLIPTRACK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    report_base_url: HttpUrl = Field(
        default="https://fliptrack.com/reports",
        description="Base URL under which generated reports are published",
    )
    media_placeholder_url: str = Field(
        "/api/placeholder/800/600", description="URL given to media saved without one"
    )
    thumbnail_placeholder_url: str = Field(
        "/api/placeholder/200/150", description="Thumbnail URL given to media saved without one"
    )
    project_placeholder_url: str = Field(
        "/api/placeholder/400/300", description="Thumbnail URL for new projects"
    )
    default_uploader: str = Field("Field Manager", description="uploaded_by for anonymous captures")
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:5173",    # Vite dev server default port
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Origins allowed to call the API from a browser",
    )


# Initialize settings
settings = Settings()
