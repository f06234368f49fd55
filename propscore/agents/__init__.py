"""
propscore agent package
Each agent has a single responsibility and fixed input/output schemas.
"""

from .base import BaseAgent
from .score_agent import ScoreAgent, ScoreInput
from .risk_agent import RiskAgent
from .rank_agent import RankAgent

__all__ = [
    "BaseAgent",
    "ScoreAgent",
    "ScoreInput",
    "RiskAgent",
    "RankAgent",
]
