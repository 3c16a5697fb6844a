"""Prototype content schema — strict output contract.

`MarketingContent` is what the LLM function call must produce (and what the
fallback templates produce). `GeneratedPrototype` wraps it with where the copy
came from, so a template substitution is never indistinguishable from AI copy.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ...constants import MAX_FEATURES, MAX_VALUE_PROPOSITIONS

GenerationSource = Literal["ai", "template"]
FallbackReason = Literal[
    "openai_not_configured",
    "openai_call_failed",
    "invalid_structured_output",
]


class MarketingContent(BaseModel):
    """Locked prototype copy schema — do NOT add or remove fields."""

    hero_copy: str = Field(..., min_length=1, description="Hero headline and subheading (2-3 sentences)")
    features: List[str] = Field(
        ..., min_length=1, max_length=MAX_FEATURES, description="4-6 key features or benefits"
    )
    pricing_copy: str = Field(..., description="Pricing description that emphasizes value")
    value_propositions: List[str] = Field(
        default_factory=list, max_length=MAX_VALUE_PROPOSITIONS, description="3-4 unique value propositions"
    )


class GeneratedPrototype(BaseModel):
    content: MarketingContent
    source: GenerationSource
    fallback_reason: Optional[FallbackReason] = None

    @property
    def used_fallback(self) -> bool:
        return self.source == "template"
