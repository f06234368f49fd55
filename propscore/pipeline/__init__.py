"""
propscore pipelines
"""

from .orchestrator import AggregationOrchestrator
from .matching import MatchScoringPipeline

__all__ = ["AggregationOrchestrator", "MatchScoringPipeline"]
