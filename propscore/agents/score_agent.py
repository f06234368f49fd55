"""
Score Agent
Computes the match score of a candidate property.
"""

from typing import Optional

from .base import BaseAgent
from propscore.schemas.candidate import PropertyCandidate
from propscore.schemas.preferences import ScoringPreferences, UserContext
from propscore.schemas.results import PropertyScore
from propscore.domain.scoring import ScoringEngine


class ScoreInput:
    """Score Agent input"""
    def __init__(
        self,
        candidate: PropertyCandidate,
        preferences: ScoringPreferences,
        context: Optional[UserContext] = None,
    ):
        self.candidate = candidate
        self.preferences = preferences
        self.context = context


class ScoreAgent(BaseAgent[ScoreInput, PropertyScore]):
    """
    Match scoring agent

    Delegates to the rule-based ScoringEngine.
    """

    name = "ScoreAgent"

    def __init__(self):
        super().__init__()
        self.engine = ScoringEngine()

    def _process(self, input_data: ScoreInput) -> PropertyScore:
        """Run the scorer"""
        return self.engine.score(
            candidate=input_data.candidate,
            preferences=input_data.preferences,
            context=input_data.context,
        )
