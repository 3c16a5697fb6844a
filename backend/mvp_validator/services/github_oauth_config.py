"""Centralized GitHub OAuth configuration.

Loads and validates GitHub OAuth environment variables at import time.
Exposes GITHUB_OAUTH_ENABLED and config values for the GitHub routes.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urlencode

from dotenv import load_dotenv

from ..constants import GITHUB_OAUTH_SCOPE

load_dotenv()

logger = logging.getLogger(__name__)

GITHUB_CLIENT_ID: str = os.getenv("GITHUB_CLIENT_ID", "")
GITHUB_CLIENT_SECRET: str = os.getenv("GITHUB_CLIENT_SECRET", "")
# Optional; when empty the callback URL is derived from the incoming request.
GITHUB_REDIRECT_URI: str = os.getenv("GITHUB_REDIRECT_URI", "")

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"

# Client id and secret are both required for the code exchange
GITHUB_OAUTH_ENABLED: bool = bool(GITHUB_CLIENT_ID and GITHUB_CLIENT_SECRET)

if GITHUB_OAUTH_ENABLED:
    logger.info("[GITHUB] OAuth enabled: True")
else:
    logger.warning("[GITHUB] OAuth enabled: False (GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET missing)")


def build_authorize_url(*, redirect_uri: str, state: str) -> str:
    """GitHub authorize URL requesting repo + email scopes."""
    query = urlencode(
        {
            "client_id": GITHUB_CLIENT_ID,
            "redirect_uri": redirect_uri,
            "scope": GITHUB_OAUTH_SCOPE,
            "state": state,
        }
    )
    return f"{GITHUB_AUTHORIZE_URL}?{query}"
