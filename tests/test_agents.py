"""
propscore tests - Agent wrapper
"""

import pytest
import sys
sys.path.insert(0, ".")

from datetime import datetime, timezone

from loguru import logger

from propscore.agents import RankAgent, RiskAgent, ScoreAgent, ScoreInput
from propscore.agents.base import BaseAgent
from propscore.errors import InternalError, InvalidConfigurationError, ValidationError
from propscore.schemas.candidate import PropertyCandidate
from propscore.schemas.preferences import ScoringFactor, ScoringPreferences, UserContext
from propscore.schemas.results import AggregationResult, PropertyScore

AS_OF = datetime(2025, 6, 1, tzinfo=timezone.utc)


class EchoAgent(BaseAgent[object, object]):
    name = "EchoAgent"

    def _process(self, input_data):
        return input_data.get("output")


class CrashingAgent(BaseAgent[object, object]):
    name = "CrashingAgent"

    def _process(self, input_data):
        raise KeyError("missing")


class TestBaseAgent:
    """Checks, error logging and timing"""

    def setup_method(self):
        self.messages = []
        self.sink_id = logger.add(
            lambda message: self.messages.append(message.record),
            level="DEBUG",
        )

    def teardown_method(self):
        logger.remove(self.sink_id)

    def test_missing_input(self):
        with pytest.raises(ValidationError):
            EchoAgent().run(None)

    def test_missing_output(self):
        with pytest.raises(InternalError):
            EchoAgent().run({"output": None})

    def test_success_logs_duration(self):
        assert EchoAgent().run({"output": 42}) == 42

        debug = [r for r in self.messages if r["level"].name == "DEBUG"]
        assert "EchoAgent done in" in debug[-1]["message"]
        assert debug[-1]["extra"]["agent"] == "EchoAgent"

    def test_domain_error_reraised_without_traceback(self):
        agent = ScoreAgent()
        preferences = ScoringPreferences(factors=[
            ScoringFactor(id="sqft", name="Square Footage", enabled=False),
        ])

        with pytest.raises(InvalidConfigurationError):
            agent.run(ScoreInput(PropertyCandidate(id="p"), preferences))

        errors = [r for r in self.messages if r["level"].name == "ERROR"]
        assert errors[-1]["message"].startswith("ScoreAgent failed:")
        assert errors[-1]["exception"] is None

    def test_unexpected_error_logged_with_traceback(self):
        with pytest.raises(KeyError):
            CrashingAgent().run({})

        errors = [r for r in self.messages if r["level"].name == "ERROR"]
        assert errors[-1]["message"] == "CrashingAgent crashed"
        assert errors[-1]["exception"] is not None


class TestAgents:
    """Engine delegation"""

    def test_score_agent(self):
        result = ScoreAgent().run(ScoreInput(
            PropertyCandidate(id="p", sqft=2000),
            ScoringPreferences(factors=[ScoringFactor(id="sqft", name="Square Footage")]),
            UserContext(as_of=AS_OF),
        ))

        assert result.total_score == 80

    def test_risk_agent(self):
        assert RiskAgent().run(AggregationResult()).score == 70

    def test_rank_agent(self):
        scores = [
            PropertyScore(property_id="a", total_score=10, calculated_at=AS_OF),
            PropertyScore(property_id="b", total_score=20, calculated_at=AS_OF),
        ]

        assert [s.property_id for s in RankAgent().run(scores)] == ["b", "a"]
