"""FastAPI dependency for session-based route protection.

Sessions are issued and verified by the external users-service; this
dependency only extracts the token and asks the service who it belongs to.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..models.user import User
from .errors import PersistenceError
from .identity_client import IdentityServiceError, fetch_identity
from .user_service import get_or_create_user

_bearer_scheme = HTTPBearer(auto_error=False)


def extract_session_token(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Bearer header wins over the session cookie."""
    if creds is not None and creds.credentials:
        return creds.credentials
    return request.cookies.get(config.SESSION_COOKIE_NAME) or None


async def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller's session to a local User row.

    Raises 401 if the token is missing or rejected, 503 if the users-service
    cannot be reached.
    """
    token = extract_session_token(request, creds)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity = await fetch_identity(token)
    except IdentityServiceError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        )

    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return get_or_create_user(db, identity)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load user",
        )
