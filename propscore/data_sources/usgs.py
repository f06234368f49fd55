"""
USGS earthquake catalog client
Historical M2.5+ events around a point.
"""

from datetime import date, datetime, timezone
from typing import Optional

import httpx
from dateutil.relativedelta import relativedelta

from propscore.config import settings
from propscore.schemas.intelligence import EarthquakeEvent, SeismicRecord
from .base import HttpDataSource, LocationQuery

MIN_MAGNITUDE = 2.5
MAX_EVENTS = 1000


class EarthquakeSource(HttpDataSource):
    """USGS FDSN event query (GeoJSON)"""

    category = "earthquakes"
    label = "USGS"

    def __init__(
        self,
        client: httpx.AsyncClient,
        radius_km: Optional[int] = None,
        years: Optional[int] = None,
    ):
        super().__init__(client)
        self.radius_km = radius_km or settings.EARTHQUAKE_RADIUS_KM
        self.years = years or settings.EARTHQUAKE_HISTORY_YEARS

    async def fetch(self, query: LocationQuery) -> SeismicRecord:
        end = date.today()
        start = end - relativedelta(years=self.years)

        params = {
            "format": "geojson",
            "latitude": f"{query.lat:.4f}",
            "longitude": f"{query.lng:.4f}",
            "maxradiuskm": self.radius_km,
            "starttime": start.isoformat(),
            "endtime": end.isoformat(),
            "minmagnitude": MIN_MAGNITUDE,
            "orderby": "time",
            "limit": MAX_EVENTS,
        }
        data = await self._get_json(settings.USGS_URL, params=params, headers=settings.HTTP_HEADERS)

        events = []
        for feature in data.get("features") or []:
            props = feature.get("properties") or {}
            if props.get("mag") is None:
                continue
            coords = (feature.get("geometry") or {}).get("coordinates") or []
            events.append(EarthquakeEvent(
                id=feature.get("id", ""),
                magnitude=props["mag"],
                place=props.get("place"),
                time=self._parse_time(props.get("time")),
                depth_km=coords[2] if len(coords) > 2 else None,
            ))

        self.logger.debug(f"{len(events)} events within {self.radius_km}km")

        return SeismicRecord(
            events=events,
            search_radius_km=self.radius_km,
            search_years=self.years,
        )

    def _parse_time(self, millis: Optional[int]) -> Optional[datetime]:
        """Epoch milliseconds -> UTC datetime"""
        if millis is None:
            return None
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
