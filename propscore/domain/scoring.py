"""
Match scoring engine
Scores a candidate property against a buyer's weighted preference vector.
"""

from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from propscore.errors import InvalidConfigurationError
from propscore.schemas.candidate import PropertyCandidate
from propscore.schemas.preferences import ScoringFactor, ScoringPreferences, UserContext
from propscore.schemas.results import FactorScore, PropertyScore
from .factors import MAX_SCORE, round_half_up, rule_for


class ScoringEngine:
    """
    Rule-based weighted match scorer

    Every enabled factor with a positive weight is normalized to 0-10
    through its factor rule, multiplied by its weight, and the sum is
    normalized to a 0-100 total:

        total = round(100 * sum(score * weight) / sum(10 * weight))

    Factors with missing raw data score their neutral default and still
    count in both sums. Weights are divided by the largest weight before
    summing, which leaves the ratio unchanged and keeps the sums finite.
    """

    def score(
        self,
        candidate: PropertyCandidate,
        preferences: ScoringPreferences,
        context: Optional[UserContext] = None,
    ) -> PropertyScore:
        """
        Computes the match score of one candidate.

        Args:
            candidate: Property being scored
            preferences: Weight vector (not modified)
            context: Budget / minimum requirements; evaluation time via as_of

        Identical inputs give an identical result only when context.as_of
        is set. Without it the current UTC time is used, so calculated_at
        differs between calls and the year_built age follows the clock.

        Returns:
            PropertyScore: Total with per-factor breakdown

        Raises:
            InvalidConfigurationError: No factor is enabled with weight > 0
        """
        factors = preferences.active_factors()
        if not factors:
            raise InvalidConfigurationError(
                "No enabled scoring factor with a positive weight"
            )

        context = context or UserContext()
        # pin the evaluation time so property age and calculated_at agree
        as_of = context.as_of or datetime.now(timezone.utc)
        context = context.model_copy(update={"as_of": as_of})

        factor_scores = [
            self._score_factor(factor, candidate, context) for factor in factors
        ]

        scale = max(fs.weight for fs in factor_scores)
        total_weighted = sum(fs.normalized_score * fs.weight / scale for fs in factor_scores)
        total_possible = sum(MAX_SCORE * fs.weight / scale for fs in factor_scores)
        total = round_half_up(total_weighted * 100 / total_possible)

        result = PropertyScore(
            property_id=candidate.id,
            user_id=preferences.user_id,
            total_score=max(0, min(100, total)),
            factor_scores=factor_scores,
            calculated_at=as_of,
        )

        logger.debug(f"Match score for {candidate.id}: {result.total_score}")
        return result

    def _score_factor(
        self,
        factor: ScoringFactor,
        candidate: PropertyCandidate,
        context: UserContext,
    ) -> FactorScore:
        """One factor: normalize, then weight"""
        raw_value, normalized = rule_for(factor.id).evaluate(candidate, context)

        return FactorScore(
            factor_id=factor.id,
            factor_name=factor.name,
            raw_value=raw_value,
            normalized_score=normalized,
            weight=factor.weight,
            weighted_score=normalized * factor.weight,
            max_possible=MAX_SCORE * factor.weight,
        )
