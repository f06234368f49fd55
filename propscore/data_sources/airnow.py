"""
AirNow client
Current air quality observations near a point.
"""

from propscore.config import settings
from propscore.schemas.intelligence import EnvironmentRecord
from .base import HttpDataSource, LocationQuery

SEARCH_DISTANCE_MILES = 25


class EnvironmentSource(HttpDataSource):
    """
    AirNow current observation

    One observation is returned per pollutant; the worst (highest AQI)
    one is reported. No reporting station in range gives a record
    without an AQI.

    Environment variables:
    - AIRNOW_API_KEY: AirNow API key (free registration)
    """

    category = "environment"
    label = "AirNow"

    async def fetch(self, query: LocationQuery) -> EnvironmentRecord:
        api_key = self._require_key(settings.AIRNOW_API_KEY, "AIRNOW_API_KEY")

        params = {
            "format": "application/json",
            "latitude": f"{query.lat:.4f}",
            "longitude": f"{query.lng:.4f}",
            "distance": SEARCH_DISTANCE_MILES,
            "API_KEY": api_key,
        }
        observations = await self._get_json(settings.AIRNOW_URL, params=params)

        if not observations:
            self.logger.info("No reporting area within range")
            return EnvironmentRecord()

        worst = max(observations, key=lambda o: o.get("AQI") or -1)
        observed_at = f"{(worst.get('DateObserved') or '').strip()} {worst.get('HourObserved') or 0:02d}:00"

        return EnvironmentRecord(
            aqi=worst.get("AQI"),
            category=(worst.get("Category") or {}).get("Name"),
            pollutant=worst.get("ParameterName"),
            reporting_area=worst.get("ReportingArea"),
            observed_at=observed_at.strip(),
        )
