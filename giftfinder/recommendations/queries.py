from __future__ import annotations

import logging

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .keywords import (
    AGE_KEYWORDS,
    BUDGET_KEYWORDS,
    PERSONALITY_HINTS,
    RELATIONSHIP_KEYWORDS,
    keywords_for,
)
from .models import RecipientProfile, normalize_interests

logger = logging.getLogger(__name__)


def _base_keywords(profile: RecipientProfile) -> list[str]:
    """Age-group, relationship and budget keywords, in that order."""
    return [
        *keywords_for(AGE_KEYWORDS, profile.age_group),
        *keywords_for(RELATIONSHIP_KEYWORDS, profile.relationship),
        *keywords_for(BUDGET_KEYWORDS, profile.budget),
    ]


def _join(tokens: list[str]) -> str:
    return " ".join(t for t in tokens if t)


def build_queries(
    profile: RecipientProfile,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[str]:
    """
    Build catalog search queries for a recipient profile.

    With no interests a single query is built from the profile keywords.
    Otherwise each of the first interests is combined with the leading
    profile keywords and personality hints. The result is deduplicated,
    keeps first-seen order and holds at most ``config.max_queries`` entries.
    """
    interests = normalize_interests(profile.interests, config.max_interests)
    base = _base_keywords(profile)
    hints = list(keywords_for(PERSONALITY_HINTS, profile.personality))

    if not interests:
        queries = [_join((base + hints)[: config.fallback_query_tokens])]
    else:
        queries = [
            _join(
                [interest]
                + base[: config.query_base_tokens]
                + hints[: config.query_hint_tokens]
            )
            for interest in interests[: config.query_interests]
        ]

    unique = list(dict.fromkeys(queries))[: config.max_queries]
    logger.debug("Built %d search queries: %s", len(unique), unique)
    return unique
