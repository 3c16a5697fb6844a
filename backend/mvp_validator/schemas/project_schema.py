"""Project intake and response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..constants import (
    IDEA_DESCRIPTION_MAX_LENGTH,
    IDEA_DESCRIPTION_MIN_LENGTH,
    PRICE_POINT_MAX,
    PRICE_POINT_MIN,
    TARGET_AUDIENCE_MAX_LENGTH,
    TARGET_AUDIENCE_MIN_LENGTH,
)
from .prototype_schema import PrototypeRecord

BusinessModel = Literal["saas", "service", "product", "course"]
ProjectStatusLabel = Literal[
    "draft",
    "prototype_generated",
    "landing_page_created",
    "campaign_launched",
    "completed",
]


class NewProjectInput(BaseModel):
    """Project intake. Accepts the frontend's camelCase keys or snake_case."""

    idea_description: str = Field(
        ...,
        alias="ideaDescription",
        min_length=IDEA_DESCRIPTION_MIN_LENGTH,
        max_length=IDEA_DESCRIPTION_MAX_LENGTH,
    )
    target_audience: str = Field(
        ...,
        alias="targetAudience",
        min_length=TARGET_AUDIENCE_MIN_LENGTH,
        max_length=TARGET_AUDIENCE_MAX_LENGTH,
    )
    price_point: float = Field(..., alias="pricePoint", ge=PRICE_POINT_MIN, le=PRICE_POINT_MAX)
    business_model: BusinessModel = Field(..., alias="businessModel")

    class Config:
        populate_by_name = True
        extra = "forbid"


class ProjectRecord(BaseModel):
    """Single project row — returned by all project endpoints."""

    id: int
    user_id: str
    idea_description: str
    target_audience: Optional[str] = None
    price_point: Optional[float] = None
    business_model: Optional[str] = None
    status: ProjectStatusLabel
    github_repo_url: Optional[str] = None
    github_repo_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LandingPageRecord(BaseModel):
    id: int
    project_id: int
    url: Optional[str] = None
    template_id: Optional[str] = None
    content_json: Optional[str] = None
    deployed_at: Optional[datetime] = None
    analytics_id: Optional[str] = None

    class Config:
        from_attributes = True


class CampaignRecord(BaseModel):
    id: int
    project_id: int
    platform: str
    budget: Optional[float] = None
    status: str
    google_ads_campaign_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    class Config:
        from_attributes = True


class AnalyticsRecord(BaseModel):
    id: int
    project_id: int
    page_views: int
    bounce_rate: float
    email_signups: int
    conversions: int
    cost_per_acquisition: float
    demand_score: float

    class Config:
        from_attributes = True


class ProjectDetailResponse(BaseModel):
    """A project with every stage row it owns (null until that stage exists)."""

    project: ProjectRecord
    prototype: Optional[PrototypeRecord] = None
    landing_page: Optional[LandingPageRecord] = None
    campaign: Optional[CampaignRecord] = None
    analytics: Optional[AnalyticsRecord] = None


class ProjectListResponse(BaseModel):
    projects: list[ProjectRecord] = Field(
        default_factory=list, description="Projects sorted by created_at DESC"
    )
