"""
propscore schema package
Input / output models shared by the engines, pipelines and the API.
"""

from .candidate import PropertyCandidate
from .preferences import (
    ScoringCategory,
    FactorDataSource,
    PresetName,
    ScoringFactor,
    PresetOverride,
    ScoringPreferences,
    UserContext,
)
from .intelligence import (
    FloodRecord,
    DisasterHistoryRecord,
    EnvironmentRecord,
    EarthquakeEvent,
    SeismicRecord,
    WeatherAlert,
    WeatherRecord,
    WalkabilityRecord,
    AmenitiesRecord,
    Place,
    PlacesRecord,
    DomainRecord,
    RECORD_TYPES,
)
from .results import (
    FactorScore,
    PropertyScore,
    ScoreFactor,
    CompositeScore,
    AggregationResult,
    AggregationRequest,
    AggregationResponse,
)

__all__ = [
    "PropertyCandidate",
    "ScoringCategory",
    "FactorDataSource",
    "PresetName",
    "ScoringFactor",
    "PresetOverride",
    "ScoringPreferences",
    "UserContext",
    "FloodRecord",
    "DisasterHistoryRecord",
    "EnvironmentRecord",
    "EarthquakeEvent",
    "SeismicRecord",
    "WeatherAlert",
    "WeatherRecord",
    "WalkabilityRecord",
    "AmenitiesRecord",
    "Place",
    "PlacesRecord",
    "DomainRecord",
    "RECORD_TYPES",
    "FactorScore",
    "PropertyScore",
    "ScoreFactor",
    "CompositeScore",
    "AggregationResult",
    "AggregationRequest",
    "AggregationResponse",
]
