"""
propscore domain logic package
Pure rule engines: factor tables, match scoring, risk/livability rules,
ranking and presets. No I/O happens in this layer.
"""

from .factors import (
    NEUTRAL_SCORE,
    FACTOR_RULES,
    DEFAULT_SCORING_FACTORS,
    FactorRule,
    LabelTable,
    StepMode,
    StepTable,
    round_half_up,
)
from .scoring import ScoringEngine
from .risk_rules import RiskEngine, grade_for
from .ranking import rank_scores
from .presets import (
    SCORING_PRESETS,
    apply_preset,
    apply_named_preset,
    default_preferences,
)

__all__ = [
    "NEUTRAL_SCORE",
    "FACTOR_RULES",
    "DEFAULT_SCORING_FACTORS",
    "FactorRule",
    "LabelTable",
    "StepMode",
    "StepTable",
    "round_half_up",
    "ScoringEngine",
    "RiskEngine",
    "grade_for",
    "rank_scores",
    "SCORING_PRESETS",
    "apply_preset",
    "apply_named_preset",
    "default_preferences",
]
