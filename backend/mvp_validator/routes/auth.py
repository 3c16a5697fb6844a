"""Authentication routes — delegated Google login, session cookie, current user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .. import config
from ..models.user import User
from ..schemas.auth_schema import (
    CurrentUserResponse,
    RedirectUrlResponse,
    SessionExchangeRequest,
)
from ..services.auth_dependency import extract_session_token, get_current_user
from ..services.identity_client import (
    IdentityServiceError,
    delete_session,
    exchange_code_for_session_token,
    get_oauth_redirect_url,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

_bearer_scheme = HTTPBearer(auto_error=False)


def _set_session_cookie(response: JSONResponse, value: str, max_age: int) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="none",
        secure=True,
    )


@router.get(
    "/oauth/google/redirect_url",
    response_model=RedirectUrlResponse,
    summary="Google login URL from the users-service",
)
async def google_redirect_url() -> RedirectUrlResponse:
    try:
        redirect_url = await get_oauth_redirect_url("google")
    except IdentityServiceError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        )
    return RedirectUrlResponse(redirect_url=redirect_url)


@router.post("/sessions", summary="Exchange an OAuth code for a session cookie")
async def create_session(payload: SessionExchangeRequest) -> JSONResponse:
    """Trade the authorization code for a users-service session token and set it as a cookie."""
    try:
        session_token = await exchange_code_for_session_token(payload.code)
    except IdentityServiceError as exc:
        logger.warning("Session exchange failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Authentication failed",
        )

    response = JSONResponse({"success": True})
    _set_session_cookie(response, session_token, config.SESSION_COOKIE_MAX_AGE)
    print("✅ [Auth] Session established")
    return response


@router.get("/users/me", response_model=CurrentUserResponse, summary="Get current user")
def get_me(user: User = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        github_connected=user.github_connected,
        github_username=user.github_username,
    )


@router.get("/logout", summary="End the current session")
async def logout(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> JSONResponse:
    """Delete the users-service session (best-effort) and clear the cookie."""
    token = extract_session_token(request, creds)
    if token:
        try:
            await delete_session(token)
        except IdentityServiceError as exc:
            logger.warning("Error deleting session: %s", exc)

    response = JSONResponse({"success": True})
    _set_session_cookie(response, "", 0)
    return response
