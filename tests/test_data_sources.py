"""
propscore tests - Data source adapters (no network)
"""

import asyncio
import pytest
import sys
sys.path.insert(0, ".")

import httpx

from propscore.config import settings
from propscore.errors import SourceUnavailableError
from propscore.data_sources import (
    AmenitiesSource,
    DisasterSource,
    EarthquakeSource,
    EnvironmentSource,
    FloodSource,
    LocationQuery,
    PlacesSource,
    WalkabilitySource,
    WeatherSource,
    build_sources,
)
from propscore.data_sources.overpass import build_overpass_query, count_by_category
from propscore.data_sources.registry import CATEGORIES

QUERY = LocationQuery(lat=26.14, lng=-81.79, fips_code="12021", radius_m=1609)


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def respond(payload, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)
    return handler


class TestFloodSource:
    """FEMA NFHL"""

    @pytest.mark.asyncio
    async def test_high_risk_zone(self):
        payload = {"features": [{"attributes": {"FLD_ZONE": "AE", "ZONE_SUBTY": None, "SFHA_TF": "T"}}]}
        async with client_for(respond(payload)) as client:
            record = await FloodSource(client).fetch(QUERY)

        assert record.flood_zone == "AE"
        assert record.sfha is True
        assert record.risk_level == "high"

    @pytest.mark.asyncio
    async def test_unmapped_point_is_zone_x(self):
        async with client_for(respond({"features": []})) as client:
            record = await FloodSource(client).fetch(QUERY)

        assert record.flood_zone == "X"
        assert record.sfha is False

    @pytest.mark.asyncio
    async def test_http_error(self):
        async with client_for(respond({}, status_code=503)) as client:
            with pytest.raises(SourceUnavailableError, match="503"):
                await FloodSource(client).fetch(QUERY)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with client_for(handler) as client:
            with pytest.raises(SourceUnavailableError) as exc_info:
                await FloodSource(client).fetch(QUERY)

        assert exc_info.value.category == "flood"


class TestDisasterSource:
    """OpenFEMA"""

    @pytest.mark.asyncio
    async def test_requires_fips(self):
        async with client_for(respond({})) as client:
            with pytest.raises(SourceUnavailableError, match="FIPS"):
                await DisasterSource(client).fetch(LocationQuery(lat=26.14, lng=-81.79))

    @pytest.mark.asyncio
    async def test_declarations_grouped_by_disaster(self):
        seen = {}

        def handler(request):
            seen["filter"] = request.url.params["$filter"]
            return httpx.Response(200, json={"DisasterDeclarationsSummaries": [
                {"disasterNumber": 4673, "incidentType": "Hurricane", "state": "FL", "designatedArea": "Collier (County)"},
                {"disasterNumber": 4673, "incidentType": "Hurricane", "state": "FL", "designatedArea": "Collier (County)"},
                {"disasterNumber": 4337, "incidentType": "Hurricane", "state": "FL"},
                {"disasterNumber": 3560, "incidentType": "Fire", "state": "FL"},
            ]})

        async with client_for(handler) as client:
            record = await DisasterSource(client, years=25).fetch(QUERY)

        assert "fipsStateCode eq '12'" in seen["filter"]
        assert "fipsCountyCode eq '021'" in seen["filter"]
        assert record.total_disasters == 3
        assert record.disasters_by_type == {"Hurricane": 2, "Fire": 1}
        assert record.most_common_type == "Hurricane"
        assert record.average_per_year == 0.12
        assert record.county == "Collier (County)"


class TestEnvironmentSource:
    """AirNow"""

    @pytest.mark.asyncio
    async def test_requires_key(self, monkeypatch):
        monkeypatch.setattr(settings, "AIRNOW_API_KEY", "")

        async with client_for(respond([])) as client:
            with pytest.raises(SourceUnavailableError, match="AIRNOW_API_KEY"):
                await EnvironmentSource(client).fetch(QUERY)

    @pytest.mark.asyncio
    async def test_worst_pollutant_reported(self, monkeypatch):
        monkeypatch.setattr(settings, "AIRNOW_API_KEY", "test-key")
        payload = [
            {"AQI": 38, "ParameterName": "O3", "ReportingArea": "Naples", "Category": {"Name": "Good"},
             "DateObserved": "2025-06-01 ", "HourObserved": 9},
            {"AQI": 61, "ParameterName": "PM2.5", "ReportingArea": "Naples", "Category": {"Name": "Moderate"},
             "DateObserved": "2025-06-01 ", "HourObserved": 9},
        ]
        async with client_for(respond(payload)) as client:
            record = await EnvironmentSource(client).fetch(QUERY)

        assert record.aqi == 61
        assert record.pollutant == "PM2.5"
        assert record.category == "Moderate"
        assert record.observed_at == "2025-06-01 09:00"

    @pytest.mark.asyncio
    async def test_no_station_in_range(self, monkeypatch):
        monkeypatch.setattr(settings, "AIRNOW_API_KEY", "test-key")

        async with client_for(respond([])) as client:
            record = await EnvironmentSource(client).fetch(QUERY)

        assert record.aqi is None


class TestEarthquakeSource:
    """USGS"""

    @pytest.mark.asyncio
    async def test_events_parsed(self):
        payload = {"features": [
            {"id": "us1", "properties": {"mag": 4.6, "place": "10 km N of X", "time": 1700000000000},
             "geometry": {"coordinates": [-81.0, 26.0, 12.5]}},
            {"id": "us2", "properties": {"mag": 2.9, "place": None, "time": None},
             "geometry": {"coordinates": [-81.0, 26.0]}},
            {"id": "us3", "properties": {"mag": None}, "geometry": None},
        ]}
        async with client_for(respond(payload)) as client:
            record = await EarthquakeSource(client, radius_km=50, years=10).fetch(QUERY)

        assert [e.id for e in record.events] == ["us1", "us2"]
        assert record.events[0].depth_km == 12.5
        assert record.events[0].time.year == 2023
        assert record.significant_events == 1
        assert record.search_radius_km == 50


class TestWeatherSource:
    """NWS"""

    def handler(self, alerts_status: int = 200):
        def handle(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path.startswith("/points/"):
                return httpx.Response(200, json={"properties": {
                    "cwa": "MFL",
                    "forecast": "https://api.weather.gov/gridpoints/MFL/1,2/forecast",
                    "relativeLocation": {"properties": {"city": "Naples", "state": "FL"}},
                }})
            if path.endswith("/forecast"):
                return httpx.Response(200, json={"properties": {"periods": [
                    {"temperature": 88, "temperatureUnit": "F", "shortForecast": "Sunny"},
                ]}})
            if path == "/alerts/active":
                return httpx.Response(alerts_status, json={"features": [
                    {"id": "alert1", "properties": {"event": "Hurricane Warning", "severity": "Extreme"}},
                ]})
            return httpx.Response(404)
        return handle

    @pytest.mark.asyncio
    async def test_forecast_and_alerts(self):
        async with client_for(self.handler()) as client:
            record = await WeatherSource(client).fetch(QUERY)

        assert record.forecast_office == "MFL"
        assert record.city == "Naples"
        assert record.temperature == 88
        assert record.alerts[0].event == "Hurricane Warning"
        assert record.has_severe_alerts is True

    @pytest.mark.asyncio
    async def test_alerts_failure_still_returns_forecast(self):
        async with client_for(self.handler(alerts_status=500)) as client:
            record = await WeatherSource(client).fetch(QUERY)

        assert record.short_forecast == "Sunny"
        assert record.alerts == []

    @pytest.mark.asyncio
    async def test_forecast_and_alerts_requested_together(self):
        """The forecast response waits until the alerts request has arrived"""
        alerts_requested = asyncio.Event()
        points = self.handler()

        async def handle(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path == "/alerts/active":
                alerts_requested.set()
            elif path.endswith("/forecast"):
                await asyncio.wait_for(alerts_requested.wait(), timeout=1.0)
            return points(request)

        async with client_for(handle) as client:
            record = await WeatherSource(client).fetch(QUERY)

        assert record.temperature == 88
        assert len(record.alerts) == 1

    @pytest.mark.asyncio
    async def test_points_failure(self):
        async with client_for(respond({}, status_code=404)) as client:
            with pytest.raises(SourceUnavailableError):
                await WeatherSource(client).fetch(QUERY)


class TestWalkabilitySource:
    """Walk Score"""

    @pytest.mark.asyncio
    async def test_scores(self, monkeypatch):
        monkeypatch.setattr(settings, "WALKSCORE_API_KEY", "test-key")
        payload = {"status": 1, "walkscore": 72, "description": "Very Walkable",
                   "transit": {"score": 31}, "bike": {"score": 65}}

        async with client_for(respond(payload)) as client:
            record = await WalkabilitySource(client).fetch(QUERY)

        assert record.walk_score == 72
        assert record.transit_score == 31
        assert record.bike_score == 65

    @pytest.mark.asyncio
    async def test_api_status_error(self, monkeypatch):
        monkeypatch.setattr(settings, "WALKSCORE_API_KEY", "bad-key")

        async with client_for(respond({"status": 41})) as client:
            with pytest.raises(SourceUnavailableError, match="Invalid API key"):
                await WalkabilitySource(client).fetch(QUERY)


class TestAmenitiesSource:
    """Overpass"""

    def test_count_by_category(self):
        elements = [
            {"tags": {"amenity": "restaurant"}},
            {"tags": {"amenity": "fast_food"}},
            {"tags": {"shop": "supermarket"}},
            {"tags": {"leisure": "park"}},
            {"tags": {"amenity": "parking"}},
            {},
        ]

        counts = count_by_category(elements)

        assert counts["restaurants"] == 2
        assert counts["groceryStores"] == 1
        assert counts["parks"] == 1
        assert sum(counts.values()) == 4

    def test_query_uses_radius(self):
        assert "(around:800,26.14,-81.79)" in build_overpass_query(26.14, -81.79, 800)

    @pytest.mark.asyncio
    async def test_posts_query(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = request.content.decode()
            return httpx.Response(200, json={"elements": [{"tags": {"amenity": "cafe"}}]})

        async with client_for(handler) as client:
            record = await AmenitiesSource(client).fetch(QUERY)

        assert seen["method"] == "POST"
        assert seen["body"].startswith("data=")
        assert record.counts["cafes"] == 1
        assert record.radius_m == 1609


class TestPlacesSource:
    """Google Places"""

    @pytest.mark.asyncio
    async def test_places(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_PLACES_API_KEY", "test-key")
        payload = {"status": "OK", "results": [
            {"place_id": "abc", "name": "Cafe", "types": ["cafe"], "rating": 4.5, "vicinity": "Main St"},
        ]}

        async with client_for(respond(payload)) as client:
            record = await PlacesSource(client).fetch(QUERY)

        assert record.places[0].name == "Cafe"
        assert record.places[0].rating == 4.5

    @pytest.mark.asyncio
    async def test_denied(self, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_PLACES_API_KEY", "test-key")
        payload = {"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."}

        async with client_for(respond(payload)) as client:
            with pytest.raises(SourceUnavailableError, match="API key is invalid"):
                await PlacesSource(client).fetch(QUERY)


class TestRegistry:
    """Default sources"""

    @pytest.mark.asyncio
    async def test_one_source_per_category(self):
        async with httpx.AsyncClient() as client:
            sources = build_sources(client)

        assert tuple(sources) == CATEGORIES
        assert all(source.category == category for category, source in sources.items())
