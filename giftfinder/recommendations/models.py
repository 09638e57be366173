from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

_LABELS = {
    "under25": "Under $25",
    "25to50": "$25–$50",
    "over50": "$50+",
}


class _Choice(str, Enum):
    @property
    def label(self) -> str:
        return _LABELS.get(self.value, self.value.title())


class AgeGroup(_Choice):
    kid = "kid"
    teen = "teen"
    adult = "adult"
    senior = "senior"


class Relationship(_Choice):
    partner = "partner"
    mom = "mom"
    dad = "dad"
    friend = "friend"
    coworker = "coworker"
    child = "child"


class Budget(_Choice):
    under25 = "under25"
    from25to50 = "25to50"
    over50 = "over50"


class Personality(_Choice):
    practical = "practical"
    sentimental = "sentimental"
    trendy = "trendy"
    funny = "funny"


def normalize_interests(raw: str | None, limit: int = 6) -> list[str]:
    """Split comma-separated interests, trim them and drop empties."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()][:limit]


def _coerce_choice(choice_cls: type[_Choice], value: Any, default: _Choice) -> _Choice:
    """Map ``value`` onto ``choice_cls``, falling back to ``default`` when unknown."""
    if isinstance(value, choice_cls):
        return value
    if isinstance(value, str):
        try:
            return choice_cls(value.strip().lower())
        except ValueError:
            pass
    logger.debug(
        "Unknown %s %r, falling back to %s", choice_cls.__name__, value, default.value
    )
    return default


class RecipientProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age_group: AgeGroup = Field(default=AgeGroup.adult, alias="ageGroup")
    relationship: Relationship = Relationship.friend
    budget: Budget = Budget.under25
    personality: Personality = Personality.practical
    interests: str = Field(default="", description="Comma-separated interests")
    notes: str = Field(default="", description="Free text, not used for scoring")

    @field_validator("age_group", mode="before")
    @classmethod
    def coerce_age_group(cls, value: Any) -> AgeGroup:
        return _coerce_choice(AgeGroup, value, AgeGroup.adult)

    @field_validator("relationship", mode="before")
    @classmethod
    def coerce_relationship(cls, value: Any) -> Relationship:
        return _coerce_choice(Relationship, value, Relationship.friend)

    @field_validator("budget", mode="before")
    @classmethod
    def coerce_budget(cls, value: Any) -> Budget:
        return _coerce_choice(Budget, value, Budget.under25)

    @field_validator("personality", mode="before")
    @classmethod
    def coerce_personality(cls, value: Any) -> Personality:
        return _coerce_choice(Personality, value, Personality.practical)

    @field_validator("interests", mode="before")
    @classmethod
    def coerce_interests(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value if item is not None)
        return str(value)

    @field_validator("notes", mode="before")
    @classmethod
    def coerce_notes(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def interest_tokens(self) -> list[str]:
        """Lowercased interests used for relevance matching (not capped)."""
        return [t.strip().lower() for t in self.interests.split(",") if t.strip()]


class CandidateRecord(BaseModel):
    """A parsed catalog document. Malformed fields degrade to ``None``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str | None = None
    title: str | None = None
    author_names: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("authorNames", "author_name", "author_names"),
    )
    first_publish_year: int | None = Field(
        default=None,
        validation_alias=AliasChoices("firstPublishYear", "first_publish_year"),
    )
    subjects: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("subjects", "subject"),
    )
    cover_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("coverId", "cover_i", "cover_id"),
    )

    @field_validator("key", "title", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("author_names", "subjects", mode="before")
    @classmethod
    def coerce_text_list(cls, value: Any) -> list[str] | None:
        if not isinstance(value, (list, tuple)):
            return None
        return [item for item in value if isinstance(item, str)]

    @field_validator("first_publish_year", "cover_id", mode="before")
    @classmethod
    def coerce_nonzero_int(cls, value: Any) -> int | None:
        # bool is an int subclass; zero means "not set" in catalog payloads
        if isinstance(value, bool) or not isinstance(value, int) or value == 0:
            return None
        return value


class RankedGift(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str | None = None
    title: str
    author: str
    year: int | None = None
    subjects: list[str] = Field(default_factory=list)
    cover_url: str | None = Field(default=None, alias="coverUrl")
    catalog_url: str | None = Field(default=None, alias="catalogUrl")


class QueryResponse(BaseModel):
    ok: bool = True
    queries: list[str]


class RankRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: RecipientProfile = Field(default_factory=RecipientProfile)
    candidates: list[Any] = Field(default_factory=list)
    candidate_sets: list[list[Any] | None] = Field(
        default_factory=list,
        alias="candidateSets",
        description="One candidate list per search query, merged before ranking",
    )

    @field_validator("profile", mode="before")
    @classmethod
    def coerce_profile(cls, value: Any) -> Any:
        return RecipientProfile() if value is None else value

    @field_validator("candidates", "candidate_sets", mode="before")
    @classmethod
    def coerce_missing_list(cls, value: Any) -> Any:
        return [] if value is None else value


class RankResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    recommendations: list[RankedGift]
    total_candidates: int = Field(alias="totalCandidates")
