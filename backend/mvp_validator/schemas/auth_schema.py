"""Session / identity schemas for the delegated users-service."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """Caller identity as reported by the users-service."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Stable user id issued by the users-service")
    email: Optional[str] = None
    google_user_data: Optional[Dict[str, Any]] = None

    @property
    def display_name(self) -> Optional[str]:
        if self.google_user_data:
            return self.google_user_data.get("name")
        return None


class SessionExchangeRequest(BaseModel):
    code: str = Field(..., min_length=1, description="OAuth authorization code")


class RedirectUrlResponse(BaseModel):
    redirect_url: str


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    github_connected: bool
    github_username: Optional[str] = None
