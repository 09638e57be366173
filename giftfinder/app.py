from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .recommendations.models import (
    AgeGroup,
    Budget,
    Personality,
    QueryResponse,
    RankRequest,
    RankResponse,
    RecipientProfile,
    Relationship,
)
from .recommendations.queries import build_queries
from .recommendations.ranking import merge_candidates, rank

logger = logging.getLogger(__name__)

app = FastAPI(title="Gift Recommendation API", version="1.0.0")


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: invalid request body", request.method, request.url.path)
    return JSONResponse(
        status_code=422,
        content={
            "ok": False,
            "error": "Invalid request body",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    defaults = RecipientProfile()

    def _options(choices) -> list[dict[str, str]]:
        return [{"value": c.value, "label": c.label} for c in choices]

    return {
        "age_groups": _options(AgeGroup),
        "relationships": _options(Relationship),
        "budgets": _options(Budget),
        "personalities": _options(Personality),
        "defaults": defaults.model_dump(by_alias=True, mode="json"),
    }


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/queries", response_model=QueryResponse)
def queries(body: RecipientProfile) -> QueryResponse:
    return QueryResponse(queries=build_queries(body))


@app.post("/rank", response_model=RankResponse)
def rank_candidates(body: RankRequest) -> RankResponse:
    merged = merge_candidates([*body.candidate_sets, body.candidates])
    gifts = rank(merged, body.profile)
    logger.info(
        "Ranked %d gifts from %d candidates for %s/%s",
        len(gifts),
        len(merged),
        body.profile.age_group.value,
        body.profile.relationship.value,
    )
    return RankResponse(recommendations=gifts, total_candidates=len(merged))
