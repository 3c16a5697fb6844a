"""Centralized service configuration.

Loads environment variables (via .env when present) at import time and
exposes module-level values for routes and clients. Values that tests or
callers may need to vary per call are read through small getter functions
instead (see ``services/openai_client.py``).
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# ── Database ────────────────────────────────────────────────────────────
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./mvp_validator.db")

# ── Identity delegation (external users-service) ────────────────────────
USERS_SERVICE_API_URL: str = os.getenv("USERS_SERVICE_API_URL", "").rstrip("/")
USERS_SERVICE_API_KEY: str = os.getenv("USERS_SERVICE_API_KEY", "")
SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "mvp_session_token")
SESSION_COOKIE_MAX_AGE: int = 60 * 24 * 60 * 60  # 60 days

# ── GitHub ──────────────────────────────────────────────────────────────
GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

# ── HTTP surface ────────────────────────────────────────────────────────
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


def is_debug() -> bool:
    return os.getenv("DEBUG", "false").lower() == "true"


def is_identity_service_configured() -> bool:
    return bool(USERS_SERVICE_API_URL and USERS_SERVICE_API_KEY)


def log_config_status() -> None:
    """Print which collaborators are configured, for startup visibility."""
    from .services.github_oauth_config import GITHUB_OAUTH_ENABLED

    print(f"   Database:      {DATABASE_URL.split('://', 1)[0]}")
    print(f"   OpenAI Key:    {'Configured' if os.getenv('OPENAI_API_KEY') else 'Not set (template copy only)'}")
    print(f"   Users service: {'Configured' if is_identity_service_configured() else 'Not set (all sessions rejected)'}")
    print(f"   GitHub OAuth:  {'Configured' if GITHUB_OAUTH_ENABLED else 'Not set'}")
    if not is_identity_service_configured():
        logger.warning("USERS_SERVICE_API_URL / USERS_SERVICE_API_KEY missing — authentication unavailable")
