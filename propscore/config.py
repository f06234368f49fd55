"""
propscore settings

All values can be overridden through environment variables or a .env file.
Usage:
    from propscore.config import settings
    timeout = settings.SOURCE_TIMEOUT_SECONDS
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore variables this app does not define
    )

    # === Environment ===
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # === Aggregation ===
    DEFAULT_RADIUS_METERS: int = 1609  # one mile
    SOURCE_TIMEOUT_SECONDS: float = 15.0
    HTTP_TIMEOUT: float = 20.0

    HTTP_HEADERS: dict = {
        "Accept": "application/json",
        "User-Agent": "propscore/0.1 (property-intelligence)",
    }

    # === FEMA (flood zones, disaster declarations) ===
    FEMA_NFHL_URL: str = (
        "https://hazards.fema.gov/gis/nfhl/rest/services/public/NFHL/MapServer/28/query"
    )
    OPENFEMA_URL: str = (
        "https://www.fema.gov/api/open/v2/DisasterDeclarationsSummaries"
    )
    DISASTER_HISTORY_YEARS: int = 25

    # === AirNow (air quality) ===
    AIRNOW_URL: str = "https://www.airnowapi.org/aq/observation/latLong/current/"
    AIRNOW_API_KEY: str = ""

    # === USGS (earthquakes) ===
    USGS_URL: str = "https://earthquake.usgs.gov/fdsnws/event/1/query"
    EARTHQUAKE_HISTORY_YEARS: int = 25
    EARTHQUAKE_RADIUS_KM: int = 100

    # === National Weather Service ===
    NWS_URL: str = "https://api.weather.gov"

    # === Walk Score ===
    WALKSCORE_URL: str = "https://api.walkscore.com/score"
    WALKSCORE_API_KEY: str = ""

    # === OpenStreetMap Overpass (amenities) ===
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"

    # === Google Places ===
    GOOGLE_PLACES_URL: str = (
        "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    )
    GOOGLE_PLACES_API_KEY: str = ""


# singleton instance
settings = Settings()
