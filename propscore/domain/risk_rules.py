"""
Risk / livability engine
Rule-based composite score over the intelligence data that was obtained.
"""

from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, ValidationError

from propscore.schemas.intelligence import (
    RECORD_TYPES,
    AmenitiesRecord,
    EnvironmentRecord,
    FloodRecord,
    SeismicRecord,
    WalkabilityRecord,
)
from propscore.schemas.results import AggregationResult, CompositeScore, ScoreFactor
from .factors import round_half_up

BASE_SCORE = 70

# inclusive lower bound -> grade, highest first
GRADE_LADDER: list[tuple[int, str]] = [
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (45, "D+"),
    (40, "D"),
]
FAILING_GRADE = "F"

AMENITY_CAP = 15.0


def grade_for(score: float) -> str:
    """Letter grade of a 0-100 score"""
    for bound, grade in GRADE_LADDER:
        if score >= bound:
            return grade
    return FAILING_GRADE


class RiskEngine:
    """
    Composite risk / livability scorer

    Starts at 70 and applies one additive adjustment per category that
    returned data. Categories without data are skipped entirely: no
    adjustment and no factor entry. Every applied adjustment is reported
    as a ScoreFactor so the final number can be explained.
    """

    def analyze(self, result: AggregationResult) -> CompositeScore:
        """
        Scores the aggregated intelligence data.

        Args:
            result: Aggregation outcome (only `data` is read)

        Returns:
            CompositeScore: 0-100 score, grade, summary and factors
        """
        factors: list[ScoreFactor] = []

        walkability = self._record(result, "walkability", WalkabilityRecord)
        if walkability:
            factors.extend(self._walkability_factors(walkability))

        flood = self._record(result, "flood", FloodRecord)
        if flood:
            factors.append(self._flood_factor(flood))

        environment = self._record(result, "environment", EnvironmentRecord)
        if environment and environment.aqi is not None:
            factors.append(self._air_quality_factor(environment.aqi))

        amenities = self._record(result, "amenities", AmenitiesRecord)
        if amenities:
            factors.append(self._amenities_factor(amenities))

        seismic = self._record(result, "earthquakes", SeismicRecord)
        if seismic and seismic.significant_events > 0:
            factors.append(self._seismic_factor(seismic.significant_events))

        raw = BASE_SCORE + sum(f.impact for f in factors)
        score = max(0, min(100, round_half_up(raw)))

        composite = CompositeScore(
            score=score,
            grade=grade_for(score),
            summary=self._generate_summary(factors),
            factors=factors,
        )

        logger.debug(f"Composite score: {score} ({composite.grade}), {len(factors)} factors")
        return composite

    def _record(
        self, result: AggregationResult, category: str, record_type: type[BaseModel]
    ) -> Optional[Any]:
        """Typed record of a category, or None when the category has no data"""
        value = result.data.get(category)
        if value is None:
            return None
        if isinstance(value, record_type):
            return value
        # plain dicts, e.g. a response read back from JSON
        try:
            return RECORD_TYPES[category].model_validate(value)
        except ValidationError as e:
            logger.warning(f"{category}: unreadable record treated as no data ({e.error_count()} errors)")
            return None

    # ==================== Adjustments ====================

    def _walkability_factors(self, record: WalkabilityRecord) -> list[ScoreFactor]:
        """Walk Score: -15..+15, Transit Score: -5..+5"""
        factors = []

        if record.walk_score is not None:
            impact = round_half_up(record.walk_score * 0.3) - 15
            label = f" ({record.walk_description})" if record.walk_description else ""
            factors.append(ScoreFactor(
                name="Walkability",
                impact=impact,
                reason=f"Walk Score {record.walk_score}{label}",
            ))

        if record.transit_score is not None:
            impact = round_half_up(record.transit_score * 0.1) - 5
            factors.append(ScoreFactor(
                name="Transit Access",
                impact=impact,
                reason=f"Transit Score {record.transit_score}",
            ))

        return factors

    def _flood_factor(self, record: FloodRecord) -> ScoreFactor:
        zone = record.flood_zone.strip().upper()

        if zone.startswith(("A", "V")):
            impact = -20
            reason = f"Zone {zone} - Special Flood Hazard Area (flood insurance required)"
        elif zone.startswith("B") or zone == "X500":
            impact = -5
            reason = f"Zone {zone} - Moderate flood risk (500-year floodplain)"
        elif zone in ("X", "C"):
            impact = 10
            reason = f"Zone {zone} - Minimal flood risk"
        else:
            impact = 0
            reason = f"Zone {zone or 'unknown'} - Flood risk undetermined"

        return ScoreFactor(name="Flood Risk", impact=impact, reason=reason)

    def _air_quality_factor(self, aqi: int) -> ScoreFactor:
        if aqi > 150:
            impact, reason = -15, f"Unhealthy air quality (AQI {aqi})"
        elif aqi > 100:
            impact, reason = -10, f"Unhealthy for sensitive groups (AQI {aqi})"
        elif aqi > 50:
            impact, reason = 0, f"Moderate air quality (AQI {aqi})"
        else:
            impact, reason = 5, f"Good air quality (AQI {aqi})"

        return ScoreFactor(name="Air Quality", impact=impact, reason=reason)

    def _amenities_factor(self, record: AmenitiesRecord) -> ScoreFactor:
        """Per amenity category: >10 -> +2, >5 -> +1.5, >0 -> +1; capped at +15"""
        points = 0.0
        for count in record.counts.values():
            if count > 10:
                points += 2
            elif count > 5:
                points += 1.5
            elif count > 0:
                points += 1
        impact = min(points, AMENITY_CAP)

        present = sum(1 for count in record.counts.values() if count > 0)
        return ScoreFactor(
            name="Nearby Amenities",
            impact=impact,
            reason=(
                f"{record.total} amenities in {present} categories "
                f"within {record.radius_m}m"
            ),
        )

    def _seismic_factor(self, significant: int) -> ScoreFactor:
        if significant > 5:
            impact = -10
        elif significant > 2:
            impact = -5
        else:
            impact = 0

        return ScoreFactor(
            name="Seismic Activity",
            impact=impact,
            reason=f"{significant} earthquake(s) of M{SeismicRecord.SIGNIFICANT_MAGNITUDE}+ recorded nearby",
        )

    def _generate_summary(self, factors: list[ScoreFactor]) -> str:
        """Strengths (positive impact) and concerns (negative impact)"""
        strengths = [f.name for f in factors if f.impact > 0]
        concerns = [f.name for f in factors if f.impact < 0]

        parts = []
        if strengths:
            parts.append(f"Strengths: {', '.join(strengths)}.")
        if concerns:
            parts.append(f"Concerns: {', '.join(concerns)}.")

        if not parts:
            return "No notable strengths or concerns identified from the available data."
        return " ".join(parts)
