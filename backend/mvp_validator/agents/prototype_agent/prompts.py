"""Prompt templates and function schema for prototype copy generation.

System + User prompt separation. The output contract is enforced by a forced
``generate_marketing_content`` tool call in the centralized openai_client.
"""

from __future__ import annotations

from typing import Any, Dict

from ...constants import MAX_FEATURES, MAX_VALUE_PROPOSITIONS

FUNCTION_NAME = "generate_marketing_content"

MARKETING_CONTENT_FUNCTION: Dict[str, Any] = {
    "name": FUNCTION_NAME,
    "description": "Generate comprehensive marketing content for a business idea",
    "parameters": {
        "type": "object",
        "properties": {
            "heroCopy": {
                "type": "string",
                "description": "Compelling hero headline and subheading (2-3 sentences)",
            },
            "features": {
                "type": "array",
                "items": {"type": "string"},
                "description": f"List of 4-{MAX_FEATURES} key features or benefits",
                "maxItems": MAX_FEATURES,
            },
            "pricingCopy": {
                "type": "string",
                "description": "Pricing description that emphasizes value",
            },
            "valuePropositions": {
                "type": "array",
                "items": {"type": "string"},
                "description": f"List of 3-{MAX_VALUE_PROPOSITIONS} unique value propositions",
                "maxItems": MAX_VALUE_PROPOSITIONS,
            },
        },
        "required": ["heroCopy", "features", "pricingCopy", "valuePropositions"],
        "additionalProperties": False,
    },
}

REQUIRED_KEYS = ["heroCopy", "features", "pricingCopy", "valuePropositions"]


def build_system_prompt(*, business_model: str, target_audience: str, price_point: str) -> str:
    """Fixed instruction template, parameterized by model, audience and price."""
    return (
        "You are an expert product marketing strategist. Generate compelling marketing "
        f"content for a {business_model} business targeting {target_audience} with a "
        f"price point of ${price_point}. Create professional, conversion-focused copy that "
        "highlights value propositions and addresses customer pain points."
    )


def build_user_prompt(*, idea_description: str) -> str:
    return f"Create marketing content for this business idea: {idea_description}"
