"""
Risk Agent
Computes the composite risk / livability score of aggregated data.
"""

from .base import BaseAgent
from propscore.schemas.results import AggregationResult, CompositeScore
from propscore.domain.risk_rules import RiskEngine


class RiskAgent(BaseAgent[AggregationResult, CompositeScore]):
    """
    Risk / livability agent

    Uses the rule-based RiskEngine; only categories with data are scored.
    """

    name = "RiskAgent"

    def __init__(self):
        super().__init__()
        self.engine = RiskEngine()

    def _process(self, result: AggregationResult) -> CompositeScore:
        """Run the composite scorer"""
        return self.engine.analyze(result)
