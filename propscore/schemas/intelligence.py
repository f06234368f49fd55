"""
Property intelligence records
One record type per data category, produced by the data source adapters.
The orchestrator treats them as opaque; the risk engine reads a few fields.
"""

from datetime import datetime
from typing import ClassVar, Optional, Union
from pydantic import BaseModel, Field


class FloodRecord(BaseModel):
    """FEMA National Flood Hazard Layer lookup"""
    flood_zone: str = Field(description="FEMA zone code", examples=["AE", "X"])
    zone_subtype: Optional[str] = None
    sfha: bool = Field(
        default=False,
        description="Special Flood Hazard Area (insurance required)"
    )
    risk_level: str = Field(default="unknown", examples=["high", "moderate", "minimal"])
    description: str = ""
    source: str = "FEMA NFHL"


class DisasterHistoryRecord(BaseModel):
    """OpenFEMA county disaster declarations"""
    fips_code: str
    county: Optional[str] = None
    state: Optional[str] = None
    total_disasters: int = 0
    disasters_by_type: dict[str, int] = Field(default_factory=dict)
    most_common_type: Optional[str] = None
    average_per_year: float = 0.0
    years_analyzed: int = 0
    source: str = "OpenFEMA"


class EnvironmentRecord(BaseModel):
    """Current air quality observation"""
    aqi: Optional[int] = Field(default=None, description="Air quality index")
    category: Optional[str] = Field(default=None, examples=["Good", "Moderate"])
    pollutant: Optional[str] = Field(default=None, examples=["PM2.5", "O3"])
    reporting_area: Optional[str] = None
    observed_at: Optional[str] = None
    source: str = "AirNow"


class EarthquakeEvent(BaseModel):
    """A single USGS event"""
    id: str
    magnitude: float
    place: Optional[str] = None
    time: Optional[datetime] = None
    depth_km: Optional[float] = None


class SeismicRecord(BaseModel):
    """USGS earthquake history around a point"""
    events: list[EarthquakeEvent] = Field(default_factory=list)
    search_radius_km: int = 100
    search_years: int = 25
    source: str = "USGS"

    SIGNIFICANT_MAGNITUDE: ClassVar[float] = 4.0

    @property
    def significant_events(self) -> int:
        """Events at or above magnitude 4.0"""
        return sum(1 for e in self.events if e.magnitude >= self.SIGNIFICANT_MAGNITUDE)


class WeatherAlert(BaseModel):
    """Active NWS alert"""
    id: str
    event: str
    severity: str = "Unknown"
    headline: Optional[str] = None
    expires: Optional[str] = None


class WeatherRecord(BaseModel):
    """NWS forecast and active alerts"""
    forecast_office: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    temperature: Optional[float] = None
    temperature_unit: Optional[str] = None
    short_forecast: Optional[str] = None
    alerts: list[WeatherAlert] = Field(default_factory=list)
    source: str = "NWS"

    @property
    def has_severe_alerts(self) -> bool:
        return any(a.severity in ("Severe", "Extreme") for a in self.alerts)


class WalkabilityRecord(BaseModel):
    """Walk Score, Transit Score and Bike Score"""
    walk_score: Optional[int] = None
    walk_description: Optional[str] = None
    transit_score: Optional[int] = None
    bike_score: Optional[int] = None
    source: str = "Walk Score"


class AmenitiesRecord(BaseModel):
    """OpenStreetMap amenity counts by category within the search radius"""
    counts: dict[str, int] = Field(
        default_factory=dict,
        examples=[{"restaurants": 12, "groceryStores": 3, "parks": 0}]
    )
    radius_m: int = 1609
    source: str = "OpenStreetMap"

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class Place(BaseModel):
    """Google Places nearby result"""
    place_id: str
    name: str
    types: list[str] = Field(default_factory=list)
    rating: Optional[float] = None
    vicinity: Optional[str] = None


class PlacesRecord(BaseModel):
    """Nearby points of interest"""
    places: list[Place] = Field(default_factory=list)
    radius_m: int = 1609
    source: str = "Google Places"


DomainRecord = Union[
    FloodRecord,
    DisasterHistoryRecord,
    EnvironmentRecord,
    SeismicRecord,
    WeatherRecord,
    WalkabilityRecord,
    AmenitiesRecord,
    PlacesRecord,
]

# category identifier -> record type
RECORD_TYPES: dict[str, type[BaseModel]] = {
    "flood": FloodRecord,
    "disasters": DisasterHistoryRecord,
    "environment": EnvironmentRecord,
    "earthquakes": SeismicRecord,
    "weather": WeatherRecord,
    "walkability": WalkabilityRecord,
    "amenities": AmenitiesRecord,
    "places": PlacesRecord,
}
