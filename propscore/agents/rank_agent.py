"""
Rank Agent
Orders scored candidates.
"""

from .base import BaseAgent
from propscore.schemas.results import PropertyScore
from propscore.domain.ranking import rank_scores


class RankAgent(BaseAgent[list[PropertyScore], list[PropertyScore]]):
    """Stable descending ranking by total score"""

    name = "RankAgent"

    def _process(self, scores: list[PropertyScore]) -> list[PropertyScore]:
        return rank_scores(scores)
