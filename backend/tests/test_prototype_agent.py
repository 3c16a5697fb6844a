"""Prototype agent — templates, structured-output parsing, OpenAI client (no API/DB)."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from mvp_validator.constants import BUSINESS_MODELS
from mvp_validator.agents.prototype_agent.generator import (
    generate_prototype_content,
    parse_marketing_content,
)
from mvp_validator.agents.prototype_agent.prompts import (
    FUNCTION_NAME,
    MARKETING_CONTENT_FUNCTION,
    build_system_prompt,
    build_user_prompt,
)
from mvp_validator.agents.prototype_agent.templates import TEMPLATES, format_price, template_content
from mvp_validator.services.openai_client import call_openai_function, sanitize_json

GENERATOR = "mvp_validator.agents.prototype_agent.generator"

PROJECT_KWARGS = {
    "idea_description": "A scheduling tool for freelance tutors",
    "target_audience": "Freelance music tutors",
    "price_point": 29.0,
    "business_model": "saas",
}


def _tool_arguments(**overrides):
    args = {
        "heroCopy": "Book lessons without the back-and-forth.",
        "features": ["Booking page", "Reminders", "Invoicing", "Calendar sync"],
        "pricingCopy": "$29/month",
        "valuePropositions": ["Save hours weekly", "Fewer no-shows", "Paid on time"],
    }
    args.update(overrides)
    return args


def _completion(arguments, name=FUNCTION_NAME):
    call = SimpleNamespace(function=SimpleNamespace(name=name, arguments=arguments))
    message = SimpleNamespace(tool_calls=[call])
    usage = SimpleNamespace(prompt_tokens=120, completion_tokens=80, total_tokens=200)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


# ===================================================================== #
#  Templates                                                              #
# ===================================================================== #

class TestTemplates:
    def test_saas_template(self):
        content = template_content(business_model="saas", idea_description="Tutor tool", price_point=29)
        assert content.hero_copy == "Transform your workflow with our innovative SaaS solution. Tutor tool"
        assert content.pricing_copy == "Starting at $29/month"
        assert len(content.features) == 4

    def test_product_uses_price_or_default(self):
        priced = template_content(business_model="product", idea_description="Mug", price_point=15.5)
        free = template_content(business_model="product", idea_description="Mug", price_point=0)
        assert priced.pricing_copy == "Starting at $15.5"
        assert free.pricing_copy == "Starting at $49"

    def test_course_uses_price_or_default(self):
        priced = template_content(business_model="course", idea_description="Guitar", price_point=79)
        missing = template_content(business_model="course", idea_description="Guitar", price_point=None)
        assert priced.pricing_copy == "One-time payment of $79"
        assert missing.pricing_copy == "One-time payment of $199"

    def test_unknown_model_gets_generic_copy(self):
        content = template_content(business_model="marketplace", idea_description="X", price_point=1)
        assert content.pricing_copy == "Contact for pricing"
        assert content.hero_copy.endswith("X")

    @pytest.mark.parametrize("model", ["saas", "service", "product", "course", None])
    def test_templates_satisfy_schema_limits(self, model):
        content = template_content(business_model=model, idea_description="Idea", price_point=10)
        assert content.hero_copy
        assert 1 <= len(content.features) <= 6
        assert len(content.value_propositions) <= 4

    def test_every_business_model_has_a_template(self):
        assert set(TEMPLATES) == set(BUSINESS_MODELS)

    def test_format_price(self):
        assert format_price(29) == "29"
        assert format_price(29.5) == "29.5"
        assert format_price(1999.99) == "1999.99"
        assert format_price(None) == "0"


# ===================================================================== #
#  Prompts                                                                #
# ===================================================================== #

class TestPrompts:
    def test_system_prompt_is_parameterized(self):
        prompt = build_system_prompt(business_model="saas", target_audience="Music tutors", price_point="29")
        assert "saas" in prompt
        assert "Music tutors" in prompt
        assert "$29" in prompt

    def test_user_prompt_contains_idea(self):
        assert "scheduling tool" in build_user_prompt(idea_description="A scheduling tool")

    def test_function_schema_matches_contract(self):
        assert MARKETING_CONTENT_FUNCTION["name"] == "generate_marketing_content"
        props = MARKETING_CONTENT_FUNCTION["parameters"]["properties"]
        assert set(props) == {"heroCopy", "features", "pricingCopy", "valuePropositions"}
        assert props["features"]["maxItems"] == 6
        assert props["valuePropositions"]["maxItems"] == 4


# ===================================================================== #
#  Structured-output parsing                                              #
# ===================================================================== #

class TestParseMarketingContent:
    def test_valid_arguments(self):
        content = parse_marketing_content(_tool_arguments())
        assert content is not None
        assert content.hero_copy == "Book lessons without the back-and-forth."
        assert content.features[0] == "Booking page"
        assert content.pricing_copy == "$29/month"

    def test_missing_key_rejected(self):
        args = _tool_arguments()
        del args["pricingCopy"]
        assert parse_marketing_content(args) is None

    def test_empty_hero_rejected(self):
        assert parse_marketing_content(_tool_arguments(heroCopy="   ")) is None

    def test_no_features_rejected(self):
        assert parse_marketing_content(_tool_arguments(features=[])) is None

    def test_non_string_items_dropped_and_lists_capped(self):
        args = _tool_arguments(
            features=["a", 3, "", "b", "c", "d", "e", "f", "g"],
            valuePropositions=["1", "2", "3", "4", "5"],
        )
        content = parse_marketing_content(args)
        assert content.features == ["a", "b", "c", "d", "e", "f"]
        assert content.value_propositions == ["1", "2", "3", "4"]


# ===================================================================== #
#  Generator: fallback reasons                                            #
# ===================================================================== #

class TestGenerator:
    def test_ai_content(self):
        with (
            patch(f"{GENERATOR}.get_openai_key", return_value="sk-test"),
            patch(f"{GENERATOR}.call_openai_function", new=AsyncMock(return_value=_tool_arguments())) as mock_call,
        ):
            result = asyncio.run(generate_prototype_content(**PROJECT_KWARGS))

        assert result.source == "ai"
        assert result.fallback_reason is None
        assert result.used_fallback is False
        messages = mock_call.call_args.kwargs["messages"]
        assert messages[0]["role"] == "system"
        assert "Freelance music tutors" in messages[0]["content"]
        assert "scheduling tool" in messages[1]["content"]

    def test_missing_key_uses_template(self):
        with (
            patch(f"{GENERATOR}.get_openai_key", side_effect=EnvironmentError("missing")),
            patch(f"{GENERATOR}.call_openai_function", new=AsyncMock()) as mock_call,
        ):
            result = asyncio.run(generate_prototype_content(**PROJECT_KWARGS))

        mock_call.assert_not_called()
        assert result.source == "template"
        assert result.fallback_reason == "openai_not_configured"
        assert result.content.pricing_copy == "Starting at $29/month"

    def test_failed_call_uses_template(self):
        with (
            patch(f"{GENERATOR}.get_openai_key", return_value="sk-test"),
            patch(f"{GENERATOR}.call_openai_function", new=AsyncMock(return_value=None)),
        ):
            result = asyncio.run(generate_prototype_content(**PROJECT_KWARGS))
        assert result.fallback_reason == "openai_call_failed"

    def test_invalid_output_uses_template(self):
        with (
            patch(f"{GENERATOR}.get_openai_key", return_value="sk-test"),
            patch(
                f"{GENERATOR}.call_openai_function",
                new=AsyncMock(return_value=_tool_arguments(features="not a list")),
            ),
        ):
            result = asyncio.run(generate_prototype_content(**PROJECT_KWARGS))
        assert result.source == "template"
        assert result.fallback_reason == "invalid_structured_output"


# ===================================================================== #
#  OpenAI client                                                          #
# ===================================================================== #

class TestOpenAIClient:
    def _mock_client(self, create):
        instance = MagicMock()
        instance.chat.completions.create = create
        return patch("mvp_validator.services.openai_client.AsyncOpenAI", return_value=instance)

    def test_forced_tool_call_and_no_retries(self):
        create = AsyncMock(return_value=_completion(json.dumps(_tool_arguments())))
        with self._mock_client(create) as mock_cls:
            result = asyncio.run(
                call_openai_function(
                    messages=[{"role": "user", "content": "hi"}],
                    function_schema=MARKETING_CONTENT_FUNCTION,
                    api_key="sk-test",
                    model="gpt-4o-mini",
                )
            )

        assert result == _tool_arguments()
        assert mock_cls.call_args.kwargs["max_retries"] == 0
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["tool_choice"] == {"type": "function", "function": {"name": FUNCTION_NAME}}
        assert kwargs["tools"][0]["function"]["strict"] is True

    def test_sdk_error_returns_none(self):
        from openai import APIConnectionError

        create = AsyncMock(side_effect=APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")))
        with self._mock_client(create):
            result = asyncio.run(
                call_openai_function(
                    messages=[],
                    function_schema=MARKETING_CONTENT_FUNCTION,
                    api_key="sk-test",
                    model="gpt-4o-mini",
                )
            )
        assert result is None

    def test_invalid_arguments_return_none(self):
        create = AsyncMock(return_value=_completion("this is not json"))
        with self._mock_client(create):
            result = asyncio.run(
                call_openai_function(
                    messages=[],
                    function_schema=MARKETING_CONTENT_FUNCTION,
                    api_key="sk-test",
                    model="gpt-4o-mini",
                )
            )
        assert result is None

    def test_other_tool_ignored(self):
        create = AsyncMock(return_value=_completion("{}", name="something_else"))
        with self._mock_client(create):
            result = asyncio.run(
                call_openai_function(
                    messages=[],
                    function_schema=MARKETING_CONTENT_FUNCTION,
                    api_key="sk-test",
                    model="gpt-4o-mini",
                )
            )
        assert result is None

    def test_sanitize_json_strips_fences_and_trailing_commas(self):
        raw = '```json\n{"a": [1, 2,], "b": 3,}\n```'
        assert json.loads(sanitize_json(raw)) == {"a": [1, 2], "b": 3}
