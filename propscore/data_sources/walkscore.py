"""
Walk Score client
Walk, transit and bike scores for a location.
"""

from propscore.config import settings
from propscore.schemas.intelligence import WalkabilityRecord
from .base import HttpDataSource, LocationQuery

# Walk Score API status codes other than 1 (success)
STATUS_MESSAGES = {
    2: "Score is being calculated, try again later",
    30: "Invalid latitude/longitude",
    31: "Walk Score API internal error",
    40: "IP address blocked",
    41: "Invalid API key",
    42: "API quota exceeded",
}


class WalkabilitySource(HttpDataSource):
    """
    Walk Score API

    Environment variables:
    - WALKSCORE_API_KEY: Walk Score API key
    """

    category = "walkability"
    label = "WalkScore"

    async def fetch(self, query: LocationQuery) -> WalkabilityRecord:
        api_key = self._require_key(settings.WALKSCORE_API_KEY, "WALKSCORE_API_KEY")

        params = {
            "format": "json",
            "lat": query.lat,
            "lon": query.lng,
            "transit": 1,
            "bike": 1,
            "wsapikey": api_key,
        }
        # the address improves accuracy
        if query.address:
            params["address"] = query.address

        data = await self._get_json(settings.WALKSCORE_URL, params=params)

        status = data.get("status")
        if status != 1:
            raise self._unavailable(
                STATUS_MESSAGES.get(status, f"Walk Score status {status}")
            )

        return WalkabilityRecord(
            walk_score=data.get("walkscore"),
            walk_description=data.get("description"),
            transit_score=(data.get("transit") or {}).get("score"),
            bike_score=(data.get("bike") or {}).get("score"),
        )
