"""Fallback marketing copy — deterministic, no LLM, no randomness.

One template per business model. Used whenever the structured LLM call is
unavailable or returns something unusable.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .schema import MarketingContent

_DEFAULT_VALUE_PROPOSITIONS = ["Unique benefit 1", "Unique benefit 2", "Unique benefit 3"]


def format_price(value: Optional[float]) -> str:
    """Render a price the way it is shown on a landing page: 29, 29.5, 1999.99."""
    if value is None:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _saas(idea: str, price: Optional[float]) -> MarketingContent:
    return MarketingContent(
        hero_copy=f"Transform your workflow with our innovative SaaS solution. {idea}",
        features=["Cloud-based platform", "Real-time collaboration", "Advanced analytics", "API integration"],
        pricing_copy="Starting at $29/month",
        value_propositions=list(_DEFAULT_VALUE_PROPOSITIONS),
    )


def _service(idea: str, price: Optional[float]) -> MarketingContent:
    return MarketingContent(
        hero_copy=f"Professional services that deliver results. {idea}",
        features=["Expert consultation", "Custom solutions", "24/7 support", "Proven methodology"],
        pricing_copy="Starting at $99/hour",
        value_propositions=list(_DEFAULT_VALUE_PROPOSITIONS),
    )


def _product(idea: str, price: Optional[float]) -> MarketingContent:
    # A zero or missing price falls back to the catalogue default.
    return MarketingContent(
        hero_copy=f"Discover the product that changes everything. {idea}",
        features=["Premium quality", "Fast shipping", "Money-back guarantee", "Customer support"],
        pricing_copy=f"Starting at ${format_price(price or 49)}",
        value_propositions=list(_DEFAULT_VALUE_PROPOSITIONS),
    )


def _course(idea: str, price: Optional[float]) -> MarketingContent:
    return MarketingContent(
        hero_copy=f"Master new skills with our comprehensive course. {idea}",
        features=["Video lessons", "Practical exercises", "Community access", "Lifetime updates"],
        pricing_copy=f"One-time payment of ${format_price(price or 199)}",
        value_propositions=list(_DEFAULT_VALUE_PROPOSITIONS),
    )


def _generic(idea: str, price: Optional[float]) -> MarketingContent:
    return MarketingContent(
        hero_copy=f"Innovative solution for your needs. {idea}",
        features=["Feature 1", "Feature 2", "Feature 3", "Feature 4"],
        pricing_copy="Contact for pricing",
        value_propositions=list(_DEFAULT_VALUE_PROPOSITIONS),
    )


TEMPLATES: Dict[str, Callable[[str, Optional[float]], MarketingContent]] = {
    "saas": _saas,
    "service": _service,
    "product": _product,
    "course": _course,
}


def template_content(
    *,
    business_model: Optional[str],
    idea_description: str,
    price_point: Optional[float],
) -> MarketingContent:
    """Return the canned copy for *business_model* (generic copy if unknown)."""
    builder = TEMPLATES.get((business_model or "").lower(), _generic)
    return builder(idea_description, price_point)
