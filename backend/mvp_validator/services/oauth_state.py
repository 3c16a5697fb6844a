"""Signed OAuth ``state`` tokens for the GitHub connect flow.

The state binds an authorize redirect to the user who started it, so a
callback can only connect GitHub to that same user.

Rules
-----
- NO hardcoded secrets in production — STATE_SECRET comes from the environment
- Tokens are short-lived (10 minutes) and purpose-tagged
"""

from __future__ import annotations

import os
import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

_STATE_SECRET = os.getenv("STATE_SECRET", "mvp-validator-dev-state-secret")
_STATE_ALGORITHM = "HS256"
_STATE_EXPIRE_MINUTES = 10
_STATE_PURPOSE = "github_connect"


def create_oauth_state(user_id: str) -> str:
    """Create a signed state token for *user_id*."""
    expire = datetime.utcnow() + timedelta(minutes=_STATE_EXPIRE_MINUTES)
    payload = {
        "sub": user_id,
        "purpose": _STATE_PURPOSE,
        "nonce": uuid4().hex,
        "exp": expire,
    }
    return jwt.encode(payload, _STATE_SECRET, algorithm=_STATE_ALGORITHM)


def decode_oauth_state(token: str) -> Optional[dict]:
    """Decode a state token. Returns payload or None."""
    try:
        payload = jwt.decode(token, _STATE_SECRET, algorithms=[_STATE_ALGORITHM])
    except JWTError:
        return None
    if payload.get("purpose") != _STATE_PURPOSE:
        return None
    return payload


def state_matches_user(token: Optional[str], user_id: str) -> bool:
    if not token:
        return False
    payload = decode_oauth_state(token)
    if payload is None:
        logger.warning("Rejected invalid or expired GitHub OAuth state")
        return False
    return payload.get("sub") == user_id
