"""Prototype Generator — OpenAI function call with a deterministic fallback.

Uses the centralized OpenAI client (`call_openai_function`) to obtain hero
copy, features, pricing copy and value propositions for a project. When the
call cannot be made or its result is unusable, the business-model template
is substituted. The substitution never fails the request, but it is always
reported through ``GeneratedPrototype.source`` / ``fallback_reason``.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from ...constants import MAX_FEATURES, MAX_VALUE_PROPOSITIONS
from ...services.openai_client import call_openai_function, get_openai_key, validate_required_keys
from .prompts import (
    MARKETING_CONTENT_FUNCTION,
    REQUIRED_KEYS,
    build_system_prompt,
    build_user_prompt,
)
from .schema import FallbackReason, GeneratedPrototype, MarketingContent
from .templates import format_price, template_content

logger = logging.getLogger(__name__)


def _clean_list(value: Any, limit: int) -> List[str]:
    if not isinstance(value, list):
        return []
    items = [str(item).strip() for item in value if isinstance(item, str) and item.strip()]
    return items[:limit]


def parse_marketing_content(result: dict[str, Any]) -> Optional[MarketingContent]:
    """Map the function-call arguments onto MarketingContent, or None if unusable."""
    if not validate_required_keys(result, REQUIRED_KEYS, context="PROTOTYPE"):
        return None

    hero_copy = result.get("heroCopy")
    pricing_copy = result.get("pricingCopy")
    if not isinstance(hero_copy, str) or not isinstance(pricing_copy, str):
        return None

    try:
        return MarketingContent(
            hero_copy=hero_copy.strip(),
            features=_clean_list(result.get("features"), MAX_FEATURES),
            pricing_copy=pricing_copy.strip(),
            value_propositions=_clean_list(result.get("valuePropositions"), MAX_VALUE_PROPOSITIONS),
        )
    except ValidationError as exc:
        print(f"⚠️  [PROTOTYPE] Structured output rejected: {exc.error_count()} error(s)")
        return None


def _fallback(
    reason: FallbackReason,
    *,
    business_model: Optional[str],
    idea_description: str,
    price_point: Optional[float],
) -> GeneratedPrototype:
    logger.warning(
        "Prototype copy generated from template (business_model=%s, reason=%s)",
        business_model,
        reason,
    )
    return GeneratedPrototype(
        content=template_content(
            business_model=business_model,
            idea_description=idea_description,
            price_point=price_point,
        ),
        source="template",
        fallback_reason=reason,
    )


async def generate_prototype_content(
    *,
    idea_description: str,
    target_audience: Optional[str],
    price_point: Optional[float],
    business_model: Optional[str],
) -> GeneratedPrototype:
    """Generate marketing copy for a project.

    Never raises for upstream problems: a missing key, a failed call or a
    malformed tool call all resolve to template copy with a fallback reason.
    """
    print(f"🛠️ [PROTOTYPE] Generating copy — business_model={business_model}")
    fallback_kwargs = {
        "business_model": business_model,
        "idea_description": idea_description,
        "price_point": price_point,
    }

    try:
        get_openai_key()
    except EnvironmentError:
        return _fallback("openai_not_configured", **fallback_kwargs)

    messages = [
        {
            "role": "system",
            "content": build_system_prompt(
                business_model=business_model or "business",
                target_audience=target_audience or "customers",
                price_point=format_price(price_point),
            ),
        },
        {"role": "user", "content": build_user_prompt(idea_description=idea_description)},
    ]

    result = await call_openai_function(
        messages=messages,
        function_schema=MARKETING_CONTENT_FUNCTION,
    )
    if result is None:
        return _fallback("openai_call_failed", **fallback_kwargs)

    content = parse_marketing_content(result)
    if content is None:
        return _fallback("invalid_structured_output", **fallback_kwargs)

    print(f"✅ [PROTOTYPE] AI copy generated — features={len(content.features)}")
    return GeneratedPrototype(content=content, source="ai")
