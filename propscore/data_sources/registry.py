"""
Data source registry
Category identifiers and the default adapter for each.
"""

import httpx

from .base import DataSource
from .fema import DisasterSource, FloodSource
from .airnow import EnvironmentSource
from .usgs import EarthquakeSource
from .nws import WeatherSource
from .walkscore import WalkabilitySource
from .overpass import AmenitiesSource
from .google_places import PlacesSource

CATEGORIES: tuple[str, ...] = (
    "flood",
    "disasters",
    "environment",
    "earthquakes",
    "weather",
    "walkability",
    "amenities",
    "places",
)

# toggles that expand to several categories
GROUP_TOGGLES: dict[str, tuple[str, ...]] = {
    "all": CATEGORIES,
    "risk": ("flood", "disasters", "earthquakes"),
}


def build_sources(client: httpx.AsyncClient) -> dict[str, DataSource]:
    """Default adapter per category, sharing one HTTP client"""
    sources: list[DataSource] = [
        FloodSource(client),
        DisasterSource(client),
        EnvironmentSource(client),
        EarthquakeSource(client),
        WeatherSource(client),
        WalkabilitySource(client),
        AmenitiesSource(client),
        PlacesSource(client),
    ]
    return {source.category: source for source in sources}
