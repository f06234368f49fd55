"""
FEMA clients
Flood zones from the National Flood Hazard Layer and county disaster
declarations from OpenFEMA. Neither requires an API key.
"""

from collections import Counter
from datetime import date
from typing import Optional

import httpx
from dateutil.relativedelta import relativedelta

from propscore.config import settings
from propscore.schemas.intelligence import DisasterHistoryRecord, FloodRecord
from .base import HttpDataSource, LocationQuery

# zone code -> (description, risk level)
FLOOD_ZONE_INFO = {
    "A": ("High-risk flood area (1% annual chance), no base flood elevation", "high"),
    "AE": ("High-risk flood area (1% annual chance) with base flood elevation", "high"),
    "AH": ("High-risk shallow flooding area (ponding)", "high"),
    "AO": ("High-risk shallow flooding area (sheet flow)", "high"),
    "AR": ("High-risk area protected by a levee under restoration", "high"),
    "A99": ("High-risk area protected by a levee under construction", "high"),
    "V": ("Coastal high-hazard area (wave action)", "very high"),
    "VE": ("Coastal high-hazard area with base flood elevation", "very high"),
    "B": ("Moderate flood hazard area (0.2% annual chance)", "moderate"),
    "X500": ("Moderate flood hazard area (0.2% annual chance)", "moderate"),
    "C": ("Minimal flood hazard area", "minimal"),
    "X": ("Minimal flood hazard area", "minimal"),
    "D": ("Undetermined flood hazard - possible but not analyzed", "low"),
}

HIGH_RISK_PREFIXES = ("A", "V")


class FloodSource(HttpDataSource):
    """
    FEMA NFHL flood zone lookup

    A point outside every mapped polygon is reported as zone X.
    """

    category = "flood"
    label = "FEMA-NFHL"

    async def fetch(self, query: LocationQuery) -> FloodRecord:
        params = {
            "geometry": f"{query.lng},{query.lat}",
            "geometryType": "esriGeometryPoint",
            "inSR": 4326,
            "spatialRel": "esriSpatialRelIntersects",
            "outFields": "FLD_ZONE,ZONE_SUBTY,SFHA_TF",
            "returnGeometry": "false",
            "f": "json",
        }
        data = await self._get_json(settings.FEMA_NFHL_URL, params=params)

        if "error" in data:
            raise self._unavailable(f"FEMA NFHL error: {data['error'].get('message', 'unknown')}")

        features = data.get("features") or []
        if not features:
            return FloodRecord(
                flood_zone="X",
                risk_level="minimal",
                description="Area not mapped or minimal flood hazard",
            )

        attributes = features[0].get("attributes", {})
        zone = (attributes.get("FLD_ZONE") or "X").strip().upper()
        description, risk = FLOOD_ZONE_INFO.get(zone, FLOOD_ZONE_INFO["X"])

        return FloodRecord(
            flood_zone=zone,
            zone_subtype=attributes.get("ZONE_SUBTY"),
            sfha=attributes.get("SFHA_TF") == "T" or zone.startswith(HIGH_RISK_PREFIXES),
            risk_level=risk,
            description=description,
        )


class DisasterSource(HttpDataSource):
    """
    OpenFEMA disaster declaration history of a county

    Needs the county FIPS code; declarations are de-duplicated by
    disaster number (one event can be declared for several programs).
    """

    category = "disasters"
    label = "OpenFEMA"

    def __init__(self, client: httpx.AsyncClient, years: Optional[int] = None):
        super().__init__(client)
        self.years = years or settings.DISASTER_HISTORY_YEARS

    async def fetch(self, query: LocationQuery) -> DisasterHistoryRecord:
        fips = (query.fips_code or "").strip()
        if len(fips) != 5 or not fips.isdigit():
            raise self._unavailable("A 5-digit county FIPS code is required for disaster history")

        state_code, county_code = fips[:2], fips[2:]
        since = date.today() - relativedelta(years=self.years)

        params = {
            "$filter": (
                f"fipsStateCode eq '{state_code}' and fipsCountyCode eq '{county_code}' "
                f"and declarationDate ge '{since.isoformat()}'"
            ),
            "$orderby": "declarationDate desc",
            "$top": 1000,
            "$select": "disasterNumber,incidentType,state,designatedArea,declarationDate",
        }
        data = await self._get_json(
            settings.OPENFEMA_URL, params=params, headers=settings.HTTP_HEADERS
        )
        declarations = data.get("DisasterDeclarationsSummaries") or []

        events = {}
        for d in declarations:
            events.setdefault(d.get("disasterNumber"), d)

        by_type = Counter(d.get("incidentType") or "Other" for d in events.values())
        first = declarations[0] if declarations else {}

        self.logger.debug(f"{fips}: {len(events)} disasters in {self.years} years")

        return DisasterHistoryRecord(
            fips_code=fips,
            county=first.get("designatedArea"),
            state=first.get("state"),
            total_disasters=len(events),
            disasters_by_type=dict(by_type),
            most_common_type=by_type.most_common(1)[0][0] if by_type else None,
            average_per_year=round(len(events) / self.years, 2),
            years_analyzed=self.years,
        )
