"""
Error taxonomy
Exceptions raised across the scoring and aggregation layers.
"""

from typing import Optional


class PropScoreError(Exception):
    """Base class for all propscore errors"""
    pass


class ValidationError(PropScoreError):
    """Malformed request (coordinates out of range, unknown toggle). Raised before any dispatch."""
    pass


class SourceUnavailableError(PropScoreError):
    """
    A single data source failed or timed out.

    The orchestrator isolates this into errors[category]; it never fails
    the overall request.
    """

    def __init__(self, message: str, category: Optional[str] = None):
        super().__init__(message)
        self.category = category


class InvalidConfigurationError(PropScoreError):
    """Scoring preferences leave no enabled factor with a positive weight"""
    pass


class InternalError(PropScoreError):
    """Score computation itself failed; no partial score is meaningful"""
    pass
