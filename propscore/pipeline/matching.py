"""
Match scoring pipeline
Scores one or many candidates against a preference vector and ranks them.
"""

from typing import Optional

from loguru import logger

from propscore.schemas.candidate import PropertyCandidate
from propscore.schemas.preferences import ScoringPreferences, UserContext
from propscore.schemas.results import PropertyScore
from propscore.agents.score_agent import ScoreAgent, ScoreInput
from propscore.agents.rank_agent import RankAgent
from propscore.domain.presets import default_preferences


class MatchScoringPipeline:
    """
    Match scoring pipeline

    Score (per candidate) -> Rank

    Without preferences the default factor set is used; without a user
    context each candidate gets a budget band around its own price.
    """

    def __init__(self):
        self.score_agent = ScoreAgent()
        self.rank_agent = RankAgent()

        self.logger = logger.bind(component="MatchScoring")

    def score(
        self,
        candidate: PropertyCandidate,
        preferences: Optional[ScoringPreferences] = None,
        context: Optional[UserContext] = None,
    ) -> PropertyScore:
        preferences = preferences or default_preferences()
        context = context or UserContext.default_for(candidate)
        return self.score_agent.run(ScoreInput(candidate, preferences, context))

    def score_batch(
        self,
        candidates: list[PropertyCandidate],
        preferences: Optional[ScoringPreferences] = None,
        context: Optional[UserContext] = None,
    ) -> list[PropertyScore]:
        """
        Scores every candidate and ranks the results.

        Returns:
            list[PropertyScore]: Sorted by total score, rank 1..n
        """
        preferences = preferences or default_preferences()
        scores = [self.score(c, preferences, context) for c in candidates]
        ranked = self.rank_agent.run(scores)

        self.logger.info(f"Scored and ranked {len(ranked)} candidates")
        return ranked
