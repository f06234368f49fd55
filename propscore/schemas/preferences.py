"""
Scoring preference schema
Buyer-configurable factor weights and the context the match scorer evaluates against.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .candidate import PropertyCandidate


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScoringCategory(str, Enum):
    """Factor grouping"""
    LOCATION = "location"
    PROPERTY = "property"
    FINANCIAL = "financial"
    LIFESTYLE = "lifestyle"
    SAFETY = "safety"
    SCHOOLS = "schools"
    ENVIRONMENT = "environment"
    AMENITIES = "amenities"


class FactorDataSource(str, Enum):
    """Where a factor's raw value comes from"""
    PROPERTY = "property"
    API = "api"
    CALCULATED = "calculated"


class PresetName(str, Enum):
    """Named preset bundles"""
    FAMILY = "family"
    INVESTOR = "investor"
    RETIREE = "retiree"
    FIRST_TIME = "first-time"
    LUXURY = "luxury"
    CUSTOM = "custom"


class ScoringFactor(BaseModel):
    """
    One scorable attribute with its weight.

    Identity is the id; the scorer only looks at enabled factors
    with a positive weight.
    """
    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)

    id: str = Field(examples=["price_vs_budget"])
    name: str = Field(examples=["Price vs Budget"])
    category: ScoringCategory = ScoringCategory.PROPERTY
    description: str = ""
    weight: float = Field(
        default=5,
        ge=0,
        allow_inf_nan=False,
        description="Relative importance (non-negative, finite)"
    )
    enabled: bool = True
    data_source: FactorDataSource = Field(
        default=FactorDataSource.PROPERTY,
        alias="dataSource",
    )


class PresetOverride(BaseModel):
    """Partial factor update carried by a preset"""
    id: str
    weight: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    enabled: Optional[bool] = None


class ScoringPreferences(BaseModel):
    """
    A user's weight vector

    Owned by the caller; the engine treats it as immutable input per call.
    """
    model_config = ConfigDict(use_enum_values=True)

    id: str = "default"
    user_id: str = "anonymous"
    factors: list[ScoringFactor] = Field(default_factory=list)
    preset: PresetName = PresetName.CUSTOM
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def active_factors(self) -> list[ScoringFactor]:
        """Factors that take part in scoring (enabled, weight > 0)"""
        return [f for f in self.factors if f.enabled and f.weight > 0]


class UserContext(BaseModel):
    """
    Buyer context for the match scorer

    Budget and minimum requirements the candidate is compared against.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "budget_max": 500000,
                "budget_min": 350000,
                "commute_time_to_work": 25,
                "min_beds": 3,
                "min_baths": 2,
                "min_sqft": 1800,
            }
        }
    )

    # === Budget ===
    budget_max: Optional[float] = Field(
        default=None,
        description="Maximum budget (USD)",
        examples=[500000]
    )
    budget_min: Optional[float] = Field(default=None, description="Minimum budget (USD)")

    # === Commute ===
    work_address: Optional[str] = None
    commute_time_to_work: Optional[float] = Field(
        default=None,
        description="Pre-calculated commute (minutes)"
    )

    # === Minimum requirements ===
    min_beds: Optional[float] = None
    min_baths: Optional[float] = None
    min_sqft: Optional[float] = None

    # === Evaluation time ===
    as_of: Optional[datetime] = Field(
        default=None,
        description="Evaluation timestamp; fixes calculated_at and property age"
    )

    @classmethod
    def default_for(cls, candidate: PropertyCandidate) -> "UserContext":
        """Fallback context when the caller sends none: budget band around the list price"""
        price = candidate.price or 0
        return cls(
            budget_max=price * 1.2,
            budget_min=price * 0.8,
            min_beds=1,
            min_baths=1,
            min_sqft=500,
        )
