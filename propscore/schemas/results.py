"""
Result schemas
Outputs of the match scorer, the risk engine and the aggregation orchestrator.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class FactorScore(BaseModel):
    """One factor's contribution to a match score"""
    factor_id: str
    factor_name: str = ""
    raw_value: Union[bool, float, str] = Field(
        description="Value the factor was scored from ('Unknown' if missing)"
    )
    normalized_score: float = Field(ge=0, le=10, description="0-10 score")
    weight: float = Field(ge=0)
    weighted_score: float = Field(description="normalized_score x weight")
    max_possible: float = Field(description="10 x weight")


class PropertyScore(BaseModel):
    """
    Match score output
    Per-factor breakdown and the 0-100 total for one candidate.
    """
    property_id: str
    user_id: str = ""
    total_score: int = Field(ge=0, le=100, description="Total (0-100)")
    factor_scores: list[FactorScore] = Field(default_factory=list)
    rank: Optional[int] = Field(default=None, description="Position after ranking")
    calculated_at: datetime


class ScoreFactor(BaseModel):
    """One applied adjustment of the composite score"""
    name: str = Field(examples=["Flood Risk"])
    impact: float = Field(description="Points added (negative = deduction)")
    reason: str


class CompositeScore(BaseModel):
    """
    Risk / livability score
    Explainable composite over whatever intelligence data was obtained.
    """
    score: int = Field(ge=0, le=100)
    grade: str = Field(examples=["B+"])
    summary: str
    factors: list[ScoreFactor] = Field(default_factory=list)


class AggregationResult(BaseModel):
    """
    Fan-out outcome
    Every requested category lands in exactly one of data / errors.
    """
    data: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def categories(self) -> set[str]:
        return set(self.data) | set(self.errors)


class AggregationRequest(BaseModel):
    """Property intelligence request"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "lat": 26.14,
                "lng": -81.79,
                "address": "1250 Gulf Shore Blvd N, Naples, FL",
                "toggles": ["flood", "weather"],
                "fipsCode": "12021",
            }
        },
    )

    lat: float
    lng: float
    address: Optional[str] = None
    toggles: list[str] = Field(default_factory=lambda: ["flood"])
    fips_code: Optional[str] = Field(default=None, alias="fipsCode")
    radius: Optional[int] = Field(default=None, description="Search radius (meters)")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AggregationResponse(BaseModel):
    """Property intelligence response"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)
    property_score: CompositeScore = Field(alias="propertyScore")
    errors: Optional[dict[str, str]] = None
    queried_at: datetime = Field(default_factory=_utcnow, alias="queriedAt")
