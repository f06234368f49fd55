"""
Google Places client
Nearby points of interest.
"""

from propscore.config import settings
from propscore.schemas.intelligence import Place, PlacesRecord
from .base import HttpDataSource, LocationQuery


class PlacesSource(HttpDataSource):
    """
    Google Places nearby search

    Environment variables:
    - GOOGLE_PLACES_API_KEY: Google Maps Platform key with Places enabled
    """

    category = "places"
    label = "GooglePlaces"

    async def fetch(self, query: LocationQuery) -> PlacesRecord:
        api_key = self._require_key(settings.GOOGLE_PLACES_API_KEY, "GOOGLE_PLACES_API_KEY")

        params = {
            "location": f"{query.lat},{query.lng}",
            "radius": query.radius_m,
            "key": api_key,
        }
        data = await self._get_json(settings.GOOGLE_PLACES_URL, params=params)

        status = data.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            raise self._unavailable(data.get("error_message") or f"Places API status: {status}")

        places = [
            Place(
                place_id=p.get("place_id", ""),
                name=p.get("name", ""),
                types=p.get("types") or [],
                rating=p.get("rating"),
                vicinity=p.get("vicinity") or p.get("formatted_address"),
            )
            for p in data.get("results") or []
        ]

        return PlacesRecord(places=places, radius_m=query.radius_m)
