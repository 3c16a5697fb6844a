"""GitHub REST client — user-token calls for repo provisioning and OAuth.

Every call is made with the caller's own OAuth token (never an app-wide
credential). Non-2xx responses raise ``GitHubAPIError`` carrying GitHub's own
``message`` so routes can surface it verbatim.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .. import config
from ..schemas.github_schema import GitHubRepository, GitHubUser
from .github_oauth_config import GITHUB_CLIENT_ID, GITHUB_CLIENT_SECRET, GITHUB_TOKEN_URL
from .http_client import get_timeout
from .timing import async_timer

logger = logging.getLogger(__name__)

GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"


class GitHubAPIError(Exception):
    """Raised when GitHub rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return fallback
    if not isinstance(data, dict):
        return fallback
    sub_errors = [e.get("message") for e in data.get("errors", []) if isinstance(e, dict) and e.get("message")]
    if sub_errors:
        logger.info("GitHub error details: %s", "; ".join(sub_errors))
    return data.get("message") or fallback


class GitHubClient:
    """Client for calls made on behalf of one connected GitHub user."""

    def __init__(
        self,
        access_token: str,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not access_token:
            raise ValueError("GitHub access token is required")
        self.base_url = (base_url or config.GITHUB_API_URL).rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": GITHUB_ACCEPT_HEADER,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        self._transport = transport

    async def _request(self, method: str, path: str, *, json: Optional[dict[str, Any]] = None) -> httpx.Response:
        try:
            async with async_timer("github", f"{method} {path}"):
                async with httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=get_timeout("github"),
                    transport=self._transport,
                ) as client:
                    return await client.request(method, path, headers=self.headers, json=json)
        except httpx.TimeoutException as exc:
            raise GitHubAPIError("GitHub request timed out") from exc
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"GitHub request failed: {exc}") from exc

    async def get_authenticated_user(self) -> GitHubUser:
        response = await self._request("GET", "/user")
        if response.status_code != 200:
            raise GitHubAPIError(
                _error_message(response, "Failed to fetch GitHub user"), response.status_code
            )
        return GitHubUser.model_validate(response.json())

    async def create_repository(
        self,
        *,
        name: str,
        description: str,
        private: bool = False,
    ) -> GitHubRepository:
        """Create a repository under the authenticated user (POST /user/repos)."""
        payload = {
            "name": name,
            "description": description,
            "private": private,
            "auto_init": True,
            "license_template": "mit",
        }
        response = await self._request("POST", "/user/repos", json=payload)
        if response.status_code != 201:
            raise GitHubAPIError(
                _error_message(response, "Failed to create repository"), response.status_code
            )
        repo = GitHubRepository.model_validate(response.json())
        logger.info("GitHub repository created: %s", repo.full_name)
        return repo

    async def get_file_sha(self, *, full_name: str, path: str) -> Optional[str]:
        """Blob sha of an existing file, or None when the path does not exist."""
        response = await self._request("GET", f"/repos/{full_name}/contents/{quote(path)}")
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise GitHubAPIError(
                _error_message(response, f"Failed to read {path}"), response.status_code
            )
        data = response.json()
        return data.get("sha") if isinstance(data, dict) else None

    async def put_file(
        self,
        *,
        full_name: str,
        path: str,
        content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> None:
        """Create or update a file through the contents API (content sent base64-encoded).

        Updating a file that already exists (e.g. the README that ``auto_init``
        seeds) requires its current blob ``sha``.
        """
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
        payload = {"message": message, "content": encoded}
        if sha:
            payload["sha"] = sha
        response = await self._request(
            "PUT",
            f"/repos/{full_name}/contents/{quote(path)}",
            json=payload,
        )
        if response.status_code not in (200, 201):
            raise GitHubAPIError(
                _error_message(response, f"Failed to create {path}"), response.status_code
            )

    async def delete_repository(self, full_name: str) -> None:
        response = await self._request("DELETE", f"/repos/{full_name}")
        if response.status_code != 204:
            raise GitHubAPIError(
                _error_message(response, "Failed to delete repository"), response.status_code
            )


async def exchange_oauth_code(
    code: str,
    *,
    redirect_uri: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Exchange a GitHub OAuth ``code`` for a user access token."""
    payload = {
        "client_id": GITHUB_CLIENT_ID,
        "client_secret": GITHUB_CLIENT_SECRET,
        "code": code,
    }
    if redirect_uri:
        payload["redirect_uri"] = redirect_uri

    try:
        async with async_timer("github", "oauth token exchange"):
            async with httpx.AsyncClient(timeout=get_timeout("github_oauth"), transport=transport) as client:
                response = await client.post(
                    GITHUB_TOKEN_URL,
                    headers={"Accept": "application/json"},
                    json=payload,
                )
    except httpx.HTTPError as exc:
        raise GitHubAPIError(f"GitHub token exchange failed: {exc}") from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise GitHubAPIError("GitHub token exchange returned invalid JSON", response.status_code) from exc

    if response.status_code != 200 or data.get("error") or not data.get("access_token"):
        logger.warning("GitHub token exchange rejected: %s", data.get("error", response.status_code))
        raise GitHubAPIError("Failed to get access token", response.status_code)
    return data["access_token"]
