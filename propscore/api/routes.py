"""
propscore API router
"""

from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from propscore.schemas.candidate import PropertyCandidate
from propscore.schemas.preferences import (
    PresetOverride,
    ScoringPreferences,
    UserContext,
)
from propscore.schemas.results import (
    AggregationRequest,
    AggregationResponse,
    PropertyScore,
)
from propscore.domain.presets import (
    SCORING_PRESETS,
    apply_named_preset,
    default_preferences,
)
from propscore.pipeline import AggregationOrchestrator, MatchScoringPipeline

router = APIRouter()


async def get_orchestrator() -> AsyncIterator[AggregationOrchestrator]:
    """One orchestrator (and HTTP client) per request"""
    async with AggregationOrchestrator() as orchestrator:
        yield orchestrator


def get_matching_pipeline() -> MatchScoringPipeline:
    return MatchScoringPipeline()


class ScoreRequest(BaseModel):
    """Match score request for one property"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "property": {
                    "id": "prop_123",
                    "price": 450000,
                    "beds": 3,
                    "baths": 2,
                    "sqft": 2000,
                    "year_built": 2012,
                    "has_garage": True,
                    "flood_zone": "X",
                },
                "userContext": {"budget_max": 500000, "min_beds": 3, "min_baths": 2},
            }
        },
    )

    candidate: PropertyCandidate = Field(alias="property")
    preferences: Optional[ScoringPreferences] = None
    user_context: Optional[UserContext] = Field(default=None, alias="userContext")


class BatchScoreRequest(BaseModel):
    """Match score request for several properties (ranked)"""
    model_config = ConfigDict(populate_by_name=True)

    candidates: list[PropertyCandidate] = Field(alias="properties")
    preferences: Optional[ScoringPreferences] = None
    user_context: Optional[UserContext] = Field(default=None, alias="userContext")


class ScoreResponse(BaseModel):
    success: bool = True
    score: PropertyScore


class BatchScoreResponse(BaseModel):
    success: bool = True
    scores: list[PropertyScore]
    count: int


# ==================== Property intelligence ====================

@router.post("/property-intelligence", response_model=AggregationResponse)
async def property_intelligence(
    request: AggregationRequest,
    orchestrator: AggregationOrchestrator = Depends(get_orchestrator),
) -> AggregationResponse:
    """
    Property intelligence

    Queries every requested data category concurrently and returns the
    data obtained, the per-category errors and the composite score.
    """
    return await orchestrator.aggregate(request)


@router.get("/property-intelligence", response_model=AggregationResponse)
async def property_intelligence_query(
    lat: float,
    lng: float,
    toggles: str = Query(default="flood", description="Comma separated categories"),
    fips: Optional[str] = Query(default=None, description="County FIPS code"),
    radius: Optional[int] = Query(default=None, description="Search radius (meters)"),
    address: Optional[str] = None,
    orchestrator: AggregationOrchestrator = Depends(get_orchestrator),
) -> AggregationResponse:
    """Query-string variant of the POST endpoint"""
    request = AggregationRequest(
        lat=lat,
        lng=lng,
        address=address,
        toggles=[t for t in toggles.split(",") if t.strip()],
        fips_code=fips,
        radius=radius,
    )
    return await orchestrator.aggregate(request)


# ==================== Match scoring ====================

@router.post("/scoring/calculate", response_model=ScoreResponse)
async def calculate_score(
    request: ScoreRequest,
    pipeline: MatchScoringPipeline = Depends(get_matching_pipeline),
) -> ScoreResponse:
    """Match score of one property against the given (or default) preferences"""
    score = pipeline.score(
        request.candidate,
        preferences=request.preferences,
        context=request.user_context,
    )
    return ScoreResponse(score=score)


@router.put("/scoring/calculate", response_model=BatchScoreResponse)
async def calculate_scores(
    request: BatchScoreRequest,
    pipeline: MatchScoringPipeline = Depends(get_matching_pipeline),
) -> BatchScoreResponse:
    """Match scores of several properties, ranked best first"""
    scores = pipeline.score_batch(
        request.candidates,
        preferences=request.preferences,
        context=request.user_context,
    )
    return BatchScoreResponse(scores=scores, count=len(scores))


@router.get("/scoring/preferences/default", response_model=ScoringPreferences)
async def get_default_preferences(user_id: str = "anonymous") -> ScoringPreferences:
    """Default factor set"""
    return default_preferences(user_id)


@router.get("/scoring/presets")
async def get_presets() -> dict[str, list[PresetOverride]]:
    """Available preset bundles"""
    return SCORING_PRESETS


@router.post("/scoring/presets/{name}", response_model=ScoringPreferences)
async def apply_preset_to_preferences(
    name: str, preferences: ScoringPreferences
) -> ScoringPreferences:
    """Applies a named preset to the given preferences"""
    return apply_named_preset(preferences, name)


# ==================== Schemas ====================

SCHEMAS: dict[str, type[BaseModel]] = {
    "aggregation-request": AggregationRequest,
    "aggregation-response": AggregationResponse,
    "score-request": ScoreRequest,
    "property": PropertyCandidate,
    "preferences": ScoringPreferences,
    "user-context": UserContext,
}


@router.get("/schema/{name}")
async def get_schema(name: str):
    """JSON schema of a request / response model"""
    model = SCHEMAS.get(name)
    if model is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown schema '{name}' (available: {', '.join(SCHEMAS)})",
        )
    return model.model_json_schema()
