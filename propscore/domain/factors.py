"""
Factor tables
Declarative normalization rules for every match-score factor.

Each factor maps a raw candidate attribute to a 0-10 score through a
step table (breakpoint -> score) or a label table. A missing raw value
never fails the computation: the factor falls back to its neutral score.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

from propscore.schemas.candidate import PropertyCandidate
from propscore.schemas.preferences import (
    FactorDataSource,
    ScoringCategory,
    ScoringFactor,
    UserContext,
)

NEUTRAL_SCORE = 5.0
MIN_SCORE = 0.0
MAX_SCORE = 10.0
UNKNOWN = "Unknown"

RawValue = Union[bool, float, str]


def round_half_up(value: float) -> int:
    """Round .5 up (2.5 -> 3), unlike Python's banker's rounding"""
    return int(math.floor(value + 0.5))


def clamp(score: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    return max(low, min(high, score))


class StepMode(str, Enum):
    """How a value is compared against the breakpoints"""
    AT_MOST = "at_most"    # first bound with value <= bound (lower is better)
    AT_LEAST = "at_least"  # first bound with value >= bound (higher is better)


@dataclass(frozen=True)
class StepTable:
    """
    Breakpoint -> score table

    Steps are checked in order; the first matching bound wins,
    otherwise the table returns `otherwise`.
    """
    steps: tuple[tuple[float, float], ...]
    otherwise: float
    mode: StepMode = StepMode.AT_MOST

    def __call__(self, value: float) -> float:
        for bound, score in self.steps:
            if self.mode is StepMode.AT_MOST and value <= bound:
                return score
            if self.mode is StepMode.AT_LEAST and value >= bound:
                return score
        return self.otherwise


@dataclass(frozen=True)
class LabelTable:
    """Case-insensitive label -> score lookup"""
    scores: dict[str, float] = field(default_factory=dict)
    default: float = NEUTRAL_SCORE

    def __call__(self, label: str) -> float:
        return self.scores.get(str(label).strip().upper(), self.default)


# ==================== Tables ====================

PRICE_RATIO = StepTable(
    steps=((0.8, 10), (0.9, 9), (1.0, 8), (1.1, 5), (1.2, 3)),
    otherwise=1,
)
HOA_FEE = StepTable(
    steps=((0, 10), (100, 9), (250, 7), (500, 5), (750, 3)),
    otherwise=1,
)
COMMUTE_MINUTES = StepTable(
    steps=((15, 10), (30, 8), (45, 6), (60, 4)),
    otherwise=2,
)
SQFT = StepTable(
    steps=((2500, 10), (2000, 8), (1500, 6), (1000, 4)),
    otherwise=2,
    mode=StepMode.AT_LEAST,
)
# bedrooms / bathrooms relative to the stated minimum (value = actual - minimum)
BEDS_OVER_MIN = StepTable(
    steps=((1, 10), (0, 8), (-1, 4)),
    otherwise=1,
    mode=StepMode.AT_LEAST,
)
BATHS_OVER_MIN = StepTable(
    steps=((0.5, 10), (0, 8), (-0.5, 5)),
    otherwise=2,
    mode=StepMode.AT_LEAST,
)
LOT_SIZE_SQFT = StepTable(
    steps=((43560, 10), (21780, 8), (10890, 6), (5000, 4)),  # 1 acre, 1/2, 1/4
    otherwise=2,
    mode=StepMode.AT_LEAST,
)
PROPERTY_AGE = StepTable(
    steps=((5, 10), (15, 8), (30, 6), (50, 4)),
    otherwise=2,
)
AIR_QUALITY_INDEX = StepTable(
    steps=((25, 10), (50, 8), (100, 5)),
    otherwise=2,
)
INTERNET_MBPS = StepTable(
    steps=((1000, 10), (500, 9), (200, 7), (100, 5), (50, 3)),
    otherwise=1,
    mode=StepMode.AT_LEAST,
)
CAP_RATE_PERCENT = StepTable(
    steps=((10, 10), (8, 8), (6, 6), (4, 4)),
    otherwise=2,
    mode=StepMode.AT_LEAST,
)
APPRECIATION_PERCENT = StepTable(
    steps=((10, 10), (7, 8), (5, 6), (3, 4), (0, 2)),
    otherwise=0,
    mode=StepMode.AT_LEAST,
)
FLOOD_ZONE = LabelTable({
    "X": 10, "MINIMAL": 10,
    "B": 8, "C": 8, "LOW": 8,
    "X500": 5, "MODERATE": 5,
    "A": 2, "AE": 2, "AH": 2, "AO": 2, "AR": 2, "A99": 2, "HIGH": 2,
    "V": 1, "VE": 1, "COASTAL": 1,
})
FIRE_RISK = LabelTable({
    "MINIMAL": 10, "LOW": 10,
    "MODERATE": 6,
    "HIGH": 3,
    "EXTREME": 1,
})
NOISE_LEVEL = LabelTable({
    "QUIET": 10, "VERY QUIET": 10,
    "AVERAGE": 7, "NORMAL": 7,
    "BUSY": 4, "NOISY": 4,
    "VERY NOISY": 1, "LOUD": 1,
})


# ==================== Rules ====================

Extractor = Callable[[PropertyCandidate, UserContext], Optional[RawValue]]
Normalizer = Callable[[Any, PropertyCandidate, UserContext], float]


@dataclass(frozen=True)
class FactorRule:
    """
    Normalization policy of one factor

    extract pulls the raw value (None when unknown); normalize turns a
    known raw value into a score. Unknown values score `neutral`.
    """
    factor_id: str
    extract: Extractor
    normalize: Normalizer
    neutral: float = NEUTRAL_SCORE

    def evaluate(
        self, candidate: PropertyCandidate, context: UserContext
    ) -> tuple[RawValue, float]:
        raw = self.extract(candidate, context)
        if raw is None:
            return UNKNOWN, self.neutral
        return raw, clamp(self.normalize(raw, candidate, context))


def _attr(name: str) -> Extractor:
    return lambda candidate, context: getattr(candidate, name)


def _table(table: Callable[[Any], float]) -> Normalizer:
    return lambda value, candidate, context: table(value)


def _tenths(value: float, candidate: PropertyCandidate, context: UserContext) -> float:
    """0-100 index -> 0-10"""
    return round_half_up(value / 10)


def _price_vs_budget(candidate: PropertyCandidate, context: UserContext) -> Optional[float]:
    if candidate.price is None or not context.budget_max or context.budget_max <= 0:
        return None
    return candidate.price


def _score_price(price: float, candidate: PropertyCandidate, context: UserContext) -> float:
    return PRICE_RATIO(price / context.budget_max)


def _score_sqft(sqft: float, candidate: PropertyCandidate, context: UserContext) -> float:
    minimum = context.min_sqft
    if minimum and sqft >= minimum:
        # bonus-scaled above the stated minimum
        return min(MAX_SCORE, 7 + ((sqft - minimum) / minimum) * 3)
    return SQFT(sqft)


def _score_beds(beds: float, candidate: PropertyCandidate, context: UserContext) -> float:
    if context.min_beds:
        return BEDS_OVER_MIN(beds - context.min_beds)
    return min(MAX_SCORE, beds * 2)


def _score_baths(baths: float, candidate: PropertyCandidate, context: UserContext) -> float:
    if context.min_baths:
        return BATHS_OVER_MIN(baths - context.min_baths)
    return min(MAX_SCORE, baths * 3)


def _lot_size(candidate: PropertyCandidate, context: UserContext) -> Optional[float]:
    return candidate.lot_size or None


def _score_year_built(year: int, candidate: PropertyCandidate, context: UserContext) -> float:
    return PROPERTY_AGE(context.as_of.year - year)


def _has(name: str) -> Extractor:
    return lambda candidate, context: bool(getattr(candidate, name))


def _presence(value: bool, candidate: PropertyCandidate, context: UserContext) -> float:
    return MAX_SCORE if value else MIN_SCORE


def _rental(candidate: PropertyCandidate, context: UserContext) -> Optional[float]:
    if not candidate.rental_estimate or not candidate.price:
        return None
    return candidate.rental_estimate


def _score_cap_rate(rent: float, candidate: PropertyCandidate, context: UserContext) -> float:
    cap_rate = (rent * 12 / candidate.price) * 100
    return CAP_RATE_PERCENT(cap_rate)


def _passthrough(value: float, candidate: PropertyCandidate, context: UserContext) -> float:
    return value


FACTOR_RULES: dict[str, FactorRule] = {
    rule.factor_id: rule
    for rule in (
        # Financial
        FactorRule("price_vs_budget", _price_vs_budget, _score_price),
        FactorRule("hoa_fee", _attr("hoa_fee"), _table(HOA_FEE), neutral=10),  # none reported
        FactorRule("rental_estimate", _rental, _score_cap_rate),
        FactorRule("appreciation", _attr("appreciation_rate"), _table(APPRECIATION_PERCENT)),
        # Property
        FactorRule("sqft", _attr("sqft"), _score_sqft),
        FactorRule("bedrooms", _attr("beds"), _score_beds),
        FactorRule("bathrooms", _attr("baths"), _score_baths),
        FactorRule("lot_size", _lot_size, _table(LOT_SIZE_SQFT)),
        FactorRule("year_built", _attr("year_built"), _score_year_built),
        FactorRule("garage", _has("has_garage"), _presence, neutral=MIN_SCORE),
        FactorRule("pool", _has("has_pool"), _presence, neutral=MIN_SCORE),
        # Location
        FactorRule(
            "commute_time",
            lambda candidate, context: context.commute_time_to_work,
            _table(COMMUTE_MINUTES),
        ),
        FactorRule("walk_score", _attr("walk_score"), _tenths),
        FactorRule("transit_score", _attr("transit_score"), _tenths),
        FactorRule("bike_score", _attr("bike_score"), _tenths),
        # Safety
        FactorRule("crime_score", _attr("crime_score"), _tenths),
        FactorRule("flood_risk", _attr("flood_zone"), _table(FLOOD_ZONE)),
        FactorRule("fire_risk", _attr("fire_risk"), _table(FIRE_RISK)),
        # Schools
        FactorRule("school_rating", _attr("school_rating"), _passthrough),
        # Environment / lifestyle
        FactorRule("air_quality", _attr("air_quality"), _table(AIR_QUALITY_INDEX)),
        FactorRule("noise_level", _attr("noise_level"), _table(NOISE_LEVEL)),
        FactorRule("internet_speed", _attr("internet_speed"), _table(INTERNET_MBPS)),
    )
}


def rule_for(factor_id: str) -> FactorRule:
    """Rule of a factor; unknown ids always score neutral"""
    rule = FACTOR_RULES.get(factor_id)
    if rule is None:
        return FactorRule(factor_id, lambda candidate, context: None, _passthrough)
    return rule


# ==================== Default factor set ====================

def _factor(
    factor_id: str,
    name: str,
    category: ScoringCategory,
    description: str,
    weight: float,
    enabled: bool,
    data_source: FactorDataSource,
) -> ScoringFactor:
    return ScoringFactor(
        id=factor_id,
        name=name,
        category=category,
        description=description,
        weight=weight,
        enabled=enabled,
        data_source=data_source,
    )


_C = ScoringCategory
_S = FactorDataSource

DEFAULT_SCORING_FACTORS: list[ScoringFactor] = [
    # Location
    _factor("commute_time", "Commute Time", _C.LOCATION, "Time to work address", 5, True, _S.CALCULATED),
    _factor("walk_score", "Walk Score", _C.LOCATION, "Walkability rating", 5, True, _S.API),
    _factor("transit_score", "Transit Score", _C.LOCATION, "Public transit access", 3, True, _S.API),
    _factor("bike_score", "Bike Score", _C.LOCATION, "Bikeability rating", 3, False, _S.API),
    # Property
    _factor("price_vs_budget", "Price vs Budget", _C.FINANCIAL, "How price compares to your budget", 10, True, _S.CALCULATED),
    _factor("sqft", "Square Footage", _C.PROPERTY, "Total living space", 6, True, _S.PROPERTY),
    _factor("bedrooms", "Bedrooms", _C.PROPERTY, "Number of bedrooms", 8, True, _S.PROPERTY),
    _factor("bathrooms", "Bathrooms", _C.PROPERTY, "Number of bathrooms", 6, True, _S.PROPERTY),
    _factor("lot_size", "Lot Size", _C.PROPERTY, "Property land area", 4, False, _S.PROPERTY),
    _factor("year_built", "Year Built", _C.PROPERTY, "Age of property", 4, True, _S.PROPERTY),
    _factor("garage", "Garage", _C.PROPERTY, "Has garage", 5, True, _S.PROPERTY),
    # Amenities
    _factor("pool", "Pool", _C.AMENITIES, "Has swimming pool", 6, True, _S.PROPERTY),
    _factor("hoa_fee", "HOA Fee", _C.FINANCIAL, "Monthly HOA cost", 5, True, _S.PROPERTY),
    # Safety
    _factor("crime_score", "Crime Safety", _C.SAFETY, "Area crime statistics", 8, True, _S.API),
    _factor("flood_risk", "Flood Risk", _C.SAFETY, "FEMA flood zone risk", 7, True, _S.API),
    _factor("fire_risk", "Fire Risk", _C.SAFETY, "Wildfire risk level", 5, False, _S.API),
    # Schools
    _factor("school_rating", "School Rating", _C.SCHOOLS, "Nearby school quality", 8, True, _S.API),
    _factor("school_distance", "School Distance", _C.SCHOOLS, "Distance to schools", 4, False, _S.CALCULATED),
    # Environment
    _factor("air_quality", "Air Quality", _C.ENVIRONMENT, "EPA air quality index", 4, False, _S.API),
    _factor("noise_level", "Noise Level", _C.ENVIRONMENT, "Ambient noise estimate", 5, False, _S.API),
    _factor("internet_speed", "Internet Speed", _C.LIFESTYLE, "Available broadband speeds", 6, True, _S.API),
    # Investment
    _factor("rental_estimate", "Rental Potential", _C.FINANCIAL, "Estimated rental income", 3, False, _S.CALCULATED),
    _factor("appreciation", "Appreciation Trend", _C.FINANCIAL, "5-year price trend", 4, False, _S.API),
]
