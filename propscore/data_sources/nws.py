"""
National Weather Service client
Forecast and active alerts for a point (US only, no API key).
"""

import asyncio
from typing import Optional

from propscore.config import settings
from propscore.errors import SourceUnavailableError
from propscore.schemas.intelligence import WeatherAlert, WeatherRecord
from .base import HttpDataSource, LocationQuery


class WeatherSource(HttpDataSource):
    """
    NWS points -> forecast, plus active alerts

    The points lookup is required; forecast and alerts are fetched
    together, best effort, and are left empty when their own request fails.
    """

    category = "weather"
    label = "NWS"

    async def fetch(self, query: LocationQuery) -> WeatherRecord:
        point = await self._get_json(
            f"{settings.NWS_URL}/points/{query.lat:.4f},{query.lng:.4f}",
            headers=settings.HTTP_HEADERS,
        )
        properties = point.get("properties") or {}
        location = (properties.get("relativeLocation") or {}).get("properties") or {}

        period, alerts = await asyncio.gather(
            self._first_period(properties.get("forecast")),
            self._active_alerts(query),
        )

        return WeatherRecord(
            forecast_office=properties.get("cwa"),
            city=location.get("city"),
            state=location.get("state"),
            temperature=period.get("temperature"),
            temperature_unit=period.get("temperatureUnit"),
            short_forecast=period.get("shortForecast"),
            alerts=alerts,
        )

    async def _first_period(self, forecast_url: Optional[str]) -> dict:
        if not forecast_url:
            return {}
        try:
            forecast = await self._get_json(forecast_url, headers=settings.HTTP_HEADERS)
        except SourceUnavailableError as e:
            self.logger.warning(f"Forecast unavailable: {e}")
            return {}

        periods = (forecast.get("properties") or {}).get("periods") or []
        return periods[0] if periods else {}

    async def _active_alerts(self, query: LocationQuery) -> list[WeatherAlert]:
        try:
            data = await self._get_json(
                f"{settings.NWS_URL}/alerts/active",
                params={"point": f"{query.lat},{query.lng}"},
                headers=settings.HTTP_HEADERS,
            )
        except SourceUnavailableError as e:
            self.logger.warning(f"Alerts unavailable: {e}")
            return []

        alerts = []
        for feature in data.get("features") or []:
            props = feature.get("properties") or {}
            alerts.append(WeatherAlert(
                id=feature.get("id", ""),
                event=props.get("event", "Unknown"),
                severity=props.get("severity") or "Unknown",
                headline=props.get("headline"),
                expires=props.get("expires"),
            ))
        return alerts
