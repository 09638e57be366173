"""
Keyword tables used to build catalog search queries.

Every table is an explicit enum-to-keywords mapping. Lookups go through
``keywords_for`` so a missing or unmapped value yields no keywords instead of
an error.
"""
from __future__ import annotations

from enum import Enum
from typing import Mapping

from .models import AgeGroup, Budget, Personality, Relationship

AGE_KEYWORDS: dict[AgeGroup, tuple[str, ...]] = {
    AgeGroup.kid: ("children", "kids", "storybook", "picture book"),
    AgeGroup.teen: ("young adult", "teen", "coming of age"),
    AgeGroup.adult: ("bestseller", "popular", "award winning"),
    AgeGroup.senior: ("biography", "history", "memoir"),
}

RELATIONSHIP_KEYWORDS: dict[Relationship, tuple[str, ...]] = {
    Relationship.partner: ("romance", "love", "relationships"),
    Relationship.mom: ("family", "cooking", "inspiration"),
    Relationship.dad: ("history", "sports", "leadership"),
    Relationship.friend: ("humor", "travel", "hobbies"),
    Relationship.coworker: ("productivity", "business", "self improvement"),
    Relationship.child: ("children", "adventure", "fantasy"),
}

BUDGET_KEYWORDS: dict[Budget, tuple[str, ...]] = {
    Budget.under25: ("short reads", "paperback"),
    Budget.from25to50: ("gift edition", "illustrated"),
    Budget.over50: ("collector", "hardcover", "boxed set"),
}

PERSONALITY_HINTS: dict[Personality, tuple[str, ...]] = {
    Personality.practical: ("how to", "guide"),
    Personality.sentimental: ("memoir", "letters", "family"),
    Personality.trendy: ("popular", "new", "bestseller"),
    Personality.funny: ("humor", "comedy"),
}

# Subject phrases that earn the age-group bonus when ranking.
AGE_SUBJECT_MARKERS: dict[AgeGroup, tuple[str, ...]] = {
    AgeGroup.kid: ("children",),
    AgeGroup.teen: ("young adult", "teen"),
}


def keywords_for(table: Mapping[Enum, tuple[str, ...]], value: Enum | None) -> tuple[str, ...]:
    """Return the keywords for ``value``, or an empty tuple when unmapped."""
    if value is None:
        return ()
    return table.get(value, ())
