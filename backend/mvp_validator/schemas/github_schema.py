"""GitHub request/response schemas.

`GitHubRepository` and `GitHubUser` document the subset of the GitHub REST
responses this service reads (https://docs.github.com/en/rest).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import REPO_DESCRIPTION_MAX_LENGTH, REPO_NAME_MAX_LENGTH


# ── GitHub API payloads ─────────────────────────────────────────────────

class GitHubRepository(BaseModel):
    """Repository returned by POST /user/repos."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Repository name")
    full_name: str = Field(..., description="owner/name")
    html_url: str = Field(..., description="Repository page URL")
    private: bool = Field(False, description="Visibility")


class GitHubUser(BaseModel):
    """Authenticated user returned by GET /user."""

    model_config = ConfigDict(extra="allow")

    login: str = Field(..., description="GitHub username")
    id: Optional[int] = None


# ── API requests / responses ────────────────────────────────────────────

class RepoCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=REPO_NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=REPO_DESCRIPTION_MAX_LENGTH)
    private: bool = False


class RepoProvisionResponse(BaseModel):
    repo_url: str
    repo_name: str
    outcome: Literal["succeeded", "degraded"]
    committed_files: List[str] = Field(default_factory=list)
    failed_files: List[str] = Field(default_factory=list)
    message: str


class GitHubStatusResponse(BaseModel):
    connected: bool
    username: Optional[str] = None


class GitHubAuthUrlResponse(BaseModel):
    auth_url: str


class GitHubConnectResponse(BaseModel):
    success: bool = True
    username: str
    message: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str
