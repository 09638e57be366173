from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

OPEN_LIBRARY_COVER_URL = "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg"
OPEN_LIBRARY_BASE_URL = "https://openlibrary.org"


@dataclass(frozen=True)
class ScoringWeights:
    """Points awarded by each relevance rule."""

    title_match: int = 4
    subject_match: int = 2
    age_group_match: int = 3
    has_cover: int = 2
    has_author: int = 1


def _usable_cover_template(template: str) -> bool:
    if "{cover_id}" not in template:
        return False
    try:
        template.format(cover_id=0)
    except (AttributeError, IndexError, KeyError, ValueError):
        return False
    return True


@dataclass(frozen=True)
class RecommendationConfig:
    max_interests: int = 6
    max_queries: int = 3
    query_interests: int = 3
    query_base_tokens: int = 3
    query_hint_tokens: int = 2
    fallback_query_tokens: int = 6
    max_results: int = 10
    max_subjects: int = 6
    unknown_author: str = "Unknown author"
    cover_url_template: str = os.getenv(
        "GIFTFINDER_COVER_URL_TEMPLATE", OPEN_LIBRARY_COVER_URL
    )
    catalog_base_url: str = os.getenv(
        "GIFTFINDER_CATALOG_BASE_URL", OPEN_LIBRARY_BASE_URL
    )
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    def __post_init__(self) -> None:
        # Templates may only use the {cover_id} placeholder
        if not _usable_cover_template(self.cover_url_template):
            logger.warning(
                "Ignoring cover URL template %r, using %s",
                self.cover_url_template,
                OPEN_LIBRARY_COVER_URL,
            )
            object.__setattr__(self, "cover_url_template", OPEN_LIBRARY_COVER_URL)

    def cover_url(self, cover_id: int | None) -> str | None:
        if not cover_id:
            return None
        return self.cover_url_template.format(cover_id=cover_id)

    def catalog_url(self, key: str | None) -> str | None:
        # Catalog keys already start with "/", e.g. "/works/OL1W"
        if not key:
            return None
        return f"{self.catalog_base_url}{key}"


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
