"""Pydantic schemas for prototype API responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class PrototypeRecord(BaseModel):
    """Single prototype record — features/value propositions decoded from JSON."""

    id: int = Field(..., description="Prototype ID")
    project_id: int = Field(..., description="Owning project ID")
    hero_copy: str = Field(..., description="Hero headline and subheading")
    features: List[str] = Field(default_factory=list)
    pricing_structure: str = Field(..., description="Pricing copy")
    value_propositions: List[str] = Field(default_factory=list)
    generation_source: Literal["ai", "template"] = Field(
        ..., description="Whether the copy came from the LLM or the fallback template"
    )
    fallback_reason: Optional[str] = Field(
        default=None, description="Why the template was used (null for AI copy)"
    )
    generated_at: datetime


class GeneratePrototypeResponse(PrototypeRecord):
    """Returned by POST /projects/{id}/generate-prototype."""

    project_status: str = Field(..., description="Project status after generation")
