"""Centralized constants shared across routes, services and agents.

This module is the SINGLE SOURCE OF TRUTH for the project intake bounds,
business-model enum and the generated-content limits. Mirrored by the
frontend form validation.
"""

from __future__ import annotations

# ── Business models ─────────────────────────────────────────────────────
# LOCKED: each value has a matching fallback template in
# agents/prototype_agent/templates.py.

BUSINESS_MODELS: tuple[str, ...] = ("saas", "service", "product", "course")

# ── Project intake bounds ───────────────────────────────────────────────

IDEA_DESCRIPTION_MIN_LENGTH = 10
IDEA_DESCRIPTION_MAX_LENGTH = 500
TARGET_AUDIENCE_MIN_LENGTH = 5
TARGET_AUDIENCE_MAX_LENGTH = 200
PRICE_POINT_MIN = 0
PRICE_POINT_MAX = 10_000

# ── Repository request bounds ───────────────────────────────────────────

REPO_NAME_MAX_LENGTH = 100
REPO_DESCRIPTION_MAX_LENGTH = 500

# ── Generated marketing content limits ──────────────────────────────────

MAX_FEATURES = 6
MAX_VALUE_PROPOSITIONS = 4

# ── GitHub OAuth ────────────────────────────────────────────────────────

GITHUB_OAUTH_SCOPE = "repo,user:email"
