"""Local user rows and the per-user GitHub credential.

The GitHub link is only ever written through ``connect_github`` and
``disconnect_github`` so username and token are set and cleared together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.user import User
from ..schemas.auth_schema import Identity
from .errors import GitHubNotConnectedError, PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitHubCredential:
    """Explicit GitHub credential for one request, scoped to its caller."""

    user_id: str
    username: str
    access_token: str

    def __repr__(self) -> str:
        return f"GitHubCredential(user_id={self.user_id!r}, username={self.username!r})"


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise PersistenceError(f"Failed to {action}") from exc


def get_or_create_user(db: Session, identity: Identity) -> User:
    """Mirror the identity-service user locally, refreshing email/name."""
    user = db.get(User, identity.id)
    if user is None:
        user = User(id=identity.id, email=identity.email, name=identity.display_name)
        db.add(user)
        _commit(db, "create user")
        db.refresh(user)
        return user

    name = identity.display_name or user.name
    if user.email != identity.email or user.name != name:
        user.email = identity.email
        user.name = name
        _commit(db, "update user")
        db.refresh(user)
    return user


def credential_for(user: User) -> Optional[GitHubCredential]:
    """Return the caller's GitHub credential, or None when not connected."""
    if not user.github_connected:
        return None
    return GitHubCredential(
        user_id=user.id,
        username=user.github_username,
        access_token=user.github_access_token,
    )


def connect_github(db: Session, user: User, *, username: str, access_token: str) -> User:
    if not username or not access_token:
        raise ValueError("GitHub username and access token are both required")
    user.github_username = username
    user.github_access_token = access_token
    user.updated_at = datetime.utcnow()
    _commit(db, "connect GitHub account")
    db.refresh(user)
    return user


def disconnect_github(db: Session, user: User) -> User:
    """Clear the GitHub link. Idempotent."""
    user.github_username = None
    user.github_access_token = None
    user.updated_at = datetime.utcnow()
    _commit(db, "disconnect GitHub account")
    db.refresh(user)
    return user


def require_credential(user: User) -> GitHubCredential:
    credential = credential_for(user)
    if credential is None:
        raise GitHubNotConnectedError("GitHub account not connected")
    return credential
