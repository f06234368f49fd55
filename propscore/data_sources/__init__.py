"""
Data source module
"""

from .base import DataSource, HttpDataSource, LocationQuery
from .fema import FloodSource, DisasterSource
from .airnow import EnvironmentSource
from .usgs import EarthquakeSource
from .nws import WeatherSource
from .walkscore import WalkabilitySource
from .overpass import AmenitiesSource
from .google_places import PlacesSource
from .registry import CATEGORIES, GROUP_TOGGLES, build_sources

__all__ = [
    "DataSource",
    "HttpDataSource",
    "LocationQuery",
    "FloodSource",
    "DisasterSource",
    "EnvironmentSource",
    "EarthquakeSource",
    "WeatherSource",
    "WalkabilitySource",
    "AmenitiesSource",
    "PlacesSource",
    "CATEGORIES",
    "GROUP_TOGGLES",
    "build_sources",
]
