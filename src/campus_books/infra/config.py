"""Application settings read from the environment."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEVELOPMENT_SESSION_SECRET = "campus-books-development-secret"
UPLOADS_URL_PREFIX = "uploads"


def session_secret() -> str:
    secret = os.getenv("SESSION_SECRET")

    if not secret:
        logger.warning("SESSION_SECRET is not set, using the development secret")
        return DEVELOPMENT_SESSION_SECRET

    return secret


def session_https_only() -> bool:
    return os.getenv("SESSION_HTTPS_ONLY", "false").strip().lower() in ("1", "true", "yes")


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", UPLOADS_URL_PREFIX))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper()


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
