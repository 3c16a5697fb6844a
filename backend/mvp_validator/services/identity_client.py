"""Users-service client — session exchange, verification and deletion.

Authentication is delegated: this service never issues or verifies sessions
itself. Reads configuration from environment variables:
  USERS_SERVICE_API_URL — base URL of the users-service
  USERS_SERVICE_API_KEY — app key sent as ``x-api-key`` on every call
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .. import config
from ..schemas.auth_schema import Identity
from .http_client import get_timeout
from .timing import async_timer

logger = logging.getLogger(__name__)


class IdentityServiceError(Exception):
    """Raised when the users-service is unreachable or misbehaves."""


def _headers(session_token: Optional[str] = None) -> dict[str, str]:
    headers = {"x-api-key": config.USERS_SERVICE_API_KEY, "Accept": "application/json"}
    if session_token:
        headers["Authorization"] = f"Bearer {session_token}"
    return headers


def _require_configured() -> None:
    if not config.is_identity_service_configured():
        raise IdentityServiceError("Users service is not configured")


async def _request(
    method: str,
    path: str,
    *,
    session_token: Optional[str] = None,
    json: Optional[dict[str, Any]] = None,
) -> httpx.Response:
    _require_configured()
    url = f"{config.USERS_SERVICE_API_URL}{path}"
    try:
        async with async_timer("identity", f"{method} {path}"):
            async with httpx.AsyncClient(timeout=get_timeout("identity")) as client:
                return await client.request(method, url, headers=_headers(session_token), json=json)
    except httpx.HTTPError as exc:
        logger.warning("Users service request failed: %s %s — %s", method, path, exc)
        raise IdentityServiceError(f"Users service request failed: {exc}") from exc


async def get_oauth_redirect_url(provider: str = "google") -> str:
    """Return the provider login URL the frontend should redirect to."""
    response = await _request("GET", f"/oauth/{provider}/redirect_url")
    if response.status_code != 200:
        raise IdentityServiceError(f"Redirect URL lookup failed (HTTP {response.status_code})")
    redirect_url = response.json().get("redirect_url")
    if not redirect_url:
        raise IdentityServiceError("Users service response missing redirect_url")
    return redirect_url


async def exchange_code_for_session_token(code: str) -> str:
    """Trade an OAuth authorization code for a session token."""
    response = await _request("POST", "/sessions", json={"code": code})
    if response.status_code not in (200, 201):
        raise IdentityServiceError(f"Code exchange failed (HTTP {response.status_code})")
    session_token = response.json().get("session_token")
    if not session_token:
        raise IdentityServiceError("Users service response missing session_token")
    return session_token


async def fetch_identity(session_token: str) -> Optional[Identity]:
    """Resolve a session token to a caller identity.

    Returns None when the users-service rejects the token. Raises
    IdentityServiceError when the service cannot answer.
    """
    response = await _request("GET", "/users/me", session_token=session_token)
    if response.status_code in (401, 403, 404):
        return None
    if response.status_code != 200:
        raise IdentityServiceError(f"Session check failed (HTTP {response.status_code})")
    try:
        return Identity.model_validate(response.json())
    except ValueError as exc:
        raise IdentityServiceError("Users service returned an unreadable identity") from exc


async def delete_session(session_token: str) -> None:
    """Invalidate a session at the users-service."""
    response = await _request("DELETE", "/sessions", session_token=session_token)
    if response.status_code not in (200, 204, 401, 404):
        raise IdentityServiceError(f"Session delete failed (HTTP {response.status_code})")
