"""GitHub account routes — connection status, OAuth connect, disconnect."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.github_schema import (
    GitHubAuthUrlResponse,
    GitHubConnectResponse,
    GitHubStatusResponse,
    MessageResponse,
)
from ..services.auth_dependency import get_current_user
from ..services.errors import PersistenceError
from ..services.github_client import GitHubAPIError, GitHubClient, exchange_oauth_code
from ..services.github_oauth_config import (
    GITHUB_OAUTH_ENABLED,
    GITHUB_REDIRECT_URI,
    build_authorize_url,
)
from ..services.oauth_state import create_oauth_state, state_matches_user
from ..services.user_service import connect_github, disconnect_github

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/github", tags=["GitHub"])


def _redirect_uri(request: Request) -> str:
    return GITHUB_REDIRECT_URI or str(request.url_for("github_callback"))


def _require_oauth_enabled() -> None:
    if not GITHUB_OAUTH_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitHub OAuth not configured",
        )


@router.get("/status", response_model=GitHubStatusResponse, summary="GitHub connection status")
def github_status(user: User = Depends(get_current_user)) -> GitHubStatusResponse:
    return GitHubStatusResponse(
        connected=user.github_connected,
        username=user.github_username if user.github_connected else None,
    )


@router.delete("/disconnect", response_model=MessageResponse, summary="Disconnect GitHub account")
def github_disconnect(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Forget the stored GitHub credential. Safe to call when not connected."""
    try:
        disconnect_github(db, user)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to disconnect GitHub account",
        )
    print(f"🔌 [GITHUB] Disconnected GitHub for user {user.id}")
    return MessageResponse(message="GitHub account disconnected")


@router.get("/auth", response_model=GitHubAuthUrlResponse, summary="GitHub OAuth authorize URL")
def github_auth(
    request: Request,
    user: User = Depends(get_current_user),
) -> GitHubAuthUrlResponse:
    """Return the GitHub consent URL, bound to the caller by a signed state."""
    _require_oauth_enabled()
    auth_url = build_authorize_url(
        redirect_uri=_redirect_uri(request),
        state=create_oauth_state(user.id),
    )
    return GitHubAuthUrlResponse(auth_url=auth_url)


@router.get(
    "/callback",
    name="github_callback",
    response_model=GitHubConnectResponse,
    summary="Handle GitHub OAuth callback",
)
async def github_callback(
    request: Request,
    code: str = Query(..., description="Authorization code from GitHub"),
    state: str = Query(..., description="Signed state issued by /github/auth"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> GitHubConnectResponse:
    """Exchange the code for a token, look up the GitHub login, store both."""
    _require_oauth_enabled()

    if not state_matches_user(state, user.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid OAuth state",
        )

    try:
        access_token = await exchange_oauth_code(code, redirect_uri=_redirect_uri(request))
        github_user = await GitHubClient(access_token).get_authenticated_user()
    except GitHubAPIError as exc:
        logger.warning("GitHub connect failed for user %s: %s", user.id, exc.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)

    try:
        connect_github(db, user, username=github_user.login, access_token=access_token)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store GitHub connection",
        )

    print(f"✅ [GITHUB] Connected @{github_user.login} for user {user.id}")
    return GitHubConnectResponse(
        username=github_user.login,
        message="GitHub account connected successfully",
    )
