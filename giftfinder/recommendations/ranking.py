from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig, ScoringWeights
from .keywords import AGE_SUBJECT_MARKERS, keywords_for
from .models import CandidateRecord, RankedGift, RecipientProfile

logger = logging.getLogger(__name__)


def _as_record(item: Any) -> CandidateRecord | None:
    """Coerce a raw catalog document into a record, or ``None`` if unusable."""
    if isinstance(item, CandidateRecord):
        return item
    if not isinstance(item, Mapping):
        return None
    try:
        return CandidateRecord.model_validate(dict(item))
    except ValidationError:
        logger.warning("Skipping malformed candidate %r", item, exc_info=True)
        return None


def merge_candidates(candidate_sets: Iterable[Iterable[Any]]) -> list[CandidateRecord]:
    """
    Concatenate per-query candidate sets, dropping repeated catalog keys.

    Later duplicates of a key are removed; records without a key are kept.
    """
    merged: list[CandidateRecord] = []
    seen: set[str] = set()
    for candidates in candidate_sets:
        for item in candidates or ():
            record = _as_record(item)
            if record is None:
                continue
            if record.key:
                if record.key in seen:
                    continue
                seen.add(record.key)
            merged.append(record)
    return merged


def score_candidate(
    candidate: CandidateRecord,
    profile: RecipientProfile,
    weights: ScoringWeights | None = None,
) -> int:
    """Compute the integer relevance score of one candidate for a profile."""
    w = weights or ScoringWeights()
    score = 0
    title = (candidate.title or "").lower()
    subjects = " ".join(candidate.subjects or []).lower()

    for token in profile.interest_tokens:
        if token in title:
            score += w.title_match
        if token in subjects:
            score += w.subject_match

    markers = keywords_for(AGE_SUBJECT_MARKERS, profile.age_group)
    if any(marker in subjects for marker in markers):
        score += w.age_group_match

    if candidate.cover_id:
        score += w.has_cover
    if candidate.author_names:
        score += w.has_author

    return score


def _to_gift(candidate: CandidateRecord, config: RecommendationConfig) -> RankedGift:
    authors = candidate.author_names or []
    return RankedGift(
        key=candidate.key,
        title=candidate.title,
        author=authors[0] if authors and authors[0] else config.unknown_author,
        year=candidate.first_publish_year,
        subjects=(candidate.subjects or [])[: config.max_subjects],
        cover_url=config.cover_url(candidate.cover_id),
        catalog_url=config.catalog_url(candidate.key),
    )


def rank(
    candidates: Sequence[Any] | None,
    profile: RecipientProfile,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[RankedGift]:
    """
    Score, sort and shape catalog candidates for a recipient profile.

    Candidates without a title are dropped. The rest are ordered by
    descending score, ties keeping input order, and at most
    ``config.max_results`` gifts are returned. Scores are not exposed.
    """
    records = [_as_record(item) for item in candidates or ()]
    titled = [r for r in records if r is not None and r.title]
    dropped = len(records) - len(titled)
    if dropped:
        logger.debug("Dropped %d candidates without a usable title", dropped)

    scored = [(score_candidate(r, profile, config.weights), r) for r in titled]
    # sorted() is stable, so equal scores keep input order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)

    gifts = [_to_gift(r, config) for _, r in scored[: config.max_results]]
    logger.debug("Ranked %d of %d candidates", len(gifts), len(records))
    return gifts
