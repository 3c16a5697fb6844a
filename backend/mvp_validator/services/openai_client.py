"""Centralized OpenAI client — structured (function-call) completions.

All generation code MUST go through `call_openai_function()`.
This ensures:
  - Model, temperature and timeout are read from env.
  - Structured output is enforced with a forced tool call.
  - A single attempt per request: no retries, no backoff (the SDK's own
    retry loop is disabled with ``max_retries=0``).
  - Failures never raise to the caller; they return None and are logged.
"""

from __future__ import annotations

import json
import os
import re
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from .timing import async_timer

# ---------------------------------------------------------------------------
# Constants: all read from environment with safe defaults
# ---------------------------------------------------------------------------


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def get_openai_key() -> str:
    """Read OPENAI_API_KEY from the environment. Raises EnvironmentError if missing."""
    key = os.getenv("OPENAI_API_KEY", "").strip()
    if not key:
        print("⚠️  [OPENAI] API key missing (OPENAI_API_KEY)")
        raise EnvironmentError("OPENAI_API_KEY environment variable not set")
    return key


def get_openai_model() -> str:
    """Read OPENAI_MODEL from the environment (default: gpt-4o-mini)."""
    return os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()


def _get_temperature() -> float:
    return _env_float("OPENAI_TEMPERATURE", 0.7)


def _get_timeout() -> float:
    return _env_float("OPENAI_REQUEST_TIMEOUT", 40.0)


# ---------------------------------------------------------------------------
# JSON sanitizer: models occasionally wrap tool arguments in prose or fences
# ---------------------------------------------------------------------------
def sanitize_json(raw: str) -> str:
    """Extract a JSON object from raw LLM output.

    Handles:
      - Markdown fences (```json ... ```)
      - Leading/trailing whitespace and BOM
      - Prose before/after JSON
      - Trailing commas before } or ]

    Raises ValueError if no JSON object is found.
    """
    text = raw.strip().lstrip("﻿")

    if text.startswith("```"):
        parts = text.split("```")
        text = parts[1] if len(parts) >= 3 else text[3:]

    text = text.strip()
    if text.lower().startswith("json"):
        text = text[4:].strip()

    brace_idx = text.find("{")
    if brace_idx == -1:
        raise ValueError("LLM did not return a JSON object — no '{' found")
    text = text[brace_idx:]

    rbrace_idx = text.rfind("}")
    if rbrace_idx == -1:
        raise ValueError("LLM did not return a JSON object — no '}' found")
    text = text[: rbrace_idx + 1]

    return re.sub(r",\s*([}\]])", r"\1", text)


def validate_required_keys(
    parsed: dict,
    required_keys: list[str],
    context: str = "OpenAI",
) -> bool:
    """Check that all required keys exist in parsed dict.

    Logs missing keys and returns False if any are missing.
    """
    missing = [k for k in required_keys if k not in parsed]
    if missing:
        print(f"⚠️  [{context}] Missing required keys: {missing}")
        return False
    return True


def build_tool(function_schema: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a function schema ({name, description, parameters}) as a strict tool."""
    return {
        "type": "function",
        "function": {**function_schema, "strict": True},
    }


def extract_tool_arguments(completion: Any, function_name: str) -> Optional[Dict[str, Any]]:
    """Return the parsed arguments of the first matching tool call, or None."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None

    tool_calls = getattr(choices[0].message, "tool_calls", None) or []
    for call in tool_calls:
        function = getattr(call, "function", None)
        if function is None or function.name != function_name:
            continue
        parsed = json.loads(sanitize_json(function.arguments or ""))
        return parsed if isinstance(parsed, dict) else None
    return None


async def call_openai_function(
    *,
    messages: List[Dict[str, str]],
    function_schema: Dict[str, Any],
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Force a single function call and return its parsed arguments, or None.

    Parameters
    ----------
    messages : list[dict]
        The messages array (system + user).
    function_schema : dict
        ``{"name", "description", "parameters"}`` — the structured output contract.
    api_key : str, optional
        Override API key (default: from env).
    model : str, optional
        Override model name (default: from env).
    """
    if api_key is None:
        api_key = get_openai_key()
    if model is None:
        model = get_openai_model()

    function_name = function_schema["name"]
    client = AsyncOpenAI(api_key=api_key, timeout=_get_timeout(), max_retries=0)

    print(f"🧠 [OPENAI] Calling {model} — function={function_name}")
    try:
        async with async_timer("openai", function_name):
            completion = await client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=_get_temperature(),
                tools=[build_tool(function_schema)],
                tool_choice={"type": "function", "function": {"name": function_name}},
            )
    except OpenAIError as exc:
        print(f"❌ [OPENAI] Request failed: {exc}")
        return None

    usage = getattr(completion, "usage", None)
    if usage is not None:
        print(
            f"🧠 [OPENAI] Tokens used: prompt={usage.prompt_tokens}, "
            f"completion={usage.completion_tokens}, total={usage.total_tokens}"
        )

    try:
        arguments = extract_tool_arguments(completion, function_name)
    except (ValueError, json.JSONDecodeError) as exc:
        print(f"❌ [OPENAI] Tool arguments are not valid JSON: {exc}")
        return None

    if arguments is None:
        print(f"⚠️  [OPENAI] No '{function_name}' tool call in response")
        return None

    print("🧠 [OPENAI] Success")
    return arguments
