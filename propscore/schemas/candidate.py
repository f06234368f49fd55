"""
Property candidate schema
Raw listing attributes plus externally enriched values consumed by the match scorer.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class PropertyCandidate(BaseModel):
    """
    Property candidate schema

    Input of the match scorer. Any attribute may be missing; the scorer
    substitutes a per-factor neutral value instead of failing.
    """
    model_config = ConfigDict(extra="ignore")

    # === Identity ===
    id: str = Field(
        description="Property identifier",
        examples=["prop_1042"]
    )
    address: Optional[str] = Field(
        default=None,
        description="Street address",
        examples=["1250 Gulf Shore Blvd N"]
    )
    city: Optional[str] = Field(default=None, examples=["Naples"])
    state: Optional[str] = Field(default=None, examples=["FL"])
    zip: Optional[str] = Field(default=None, examples=["34102"])
    latitude: Optional[float] = Field(default=None, description="Latitude")
    longitude: Optional[float] = Field(default=None, description="Longitude")

    # === Listing ===
    price: Optional[float] = Field(
        default=None,
        description="List price (USD)",
        examples=[450000]
    )
    property_type: Optional[str] = Field(
        default=None,
        examples=["Single Family"]
    )
    hoa_fee: Optional[float] = Field(
        default=None,
        description="Monthly HOA fee (USD)",
        examples=[250]
    )

    # === Structure ===
    beds: Optional[float] = Field(default=None, description="Bedrooms", examples=[3])
    baths: Optional[float] = Field(default=None, description="Bathrooms", examples=[2.5])
    sqft: Optional[float] = Field(
        default=None,
        description="Living area (sq ft)",
        examples=[2000]
    )
    lot_size: Optional[float] = Field(
        default=None,
        description="Lot size (sq ft)",
        examples=[10890]
    )
    year_built: Optional[int] = Field(default=None, examples=[2005])
    has_pool: Optional[bool] = Field(default=None, description="Swimming pool")
    has_garage: Optional[bool] = Field(default=None, description="Garage")

    # === Location / environment (API enriched) ===
    flood_zone: Optional[str] = Field(
        default=None,
        description="FEMA flood zone code or risk label",
        examples=["AE", "X", "MODERATE"]
    )
    fire_risk: Optional[str] = Field(
        default=None,
        description="Wildfire risk label",
        examples=["low"]
    )
    walk_score: Optional[float] = Field(default=None, description="Walk Score (0-100)")
    transit_score: Optional[float] = Field(default=None, description="Transit Score (0-100)")
    bike_score: Optional[float] = Field(default=None, description="Bike Score (0-100)")
    crime_score: Optional[float] = Field(
        default=None,
        description="Safety score (0-100, higher is safer)"
    )
    school_rating: Optional[float] = Field(
        default=None,
        description="Nearby school rating (0-10)"
    )
    air_quality: Optional[float] = Field(
        default=None,
        description="Air quality index (lower is better)"
    )
    noise_level: Optional[str] = Field(
        default=None,
        description="Ambient noise label",
        examples=["quiet", "busy"]
    )
    internet_speed: Optional[float] = Field(
        default=None,
        description="Best available broadband (Mbps)"
    )

    # === Investment ===
    rental_estimate: Optional[float] = Field(
        default=None,
        description="Estimated monthly rent (USD)"
    )
    appreciation_rate: Optional[float] = Field(
        default=None,
        description="5-year appreciation (%)"
    )
