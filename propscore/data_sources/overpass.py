"""
OpenStreetMap Overpass client
Counts nearby amenities by category. No API key required.
"""

from propscore.config import settings
from propscore.schemas.intelligence import AmenitiesRecord
from .base import HttpDataSource, LocationQuery

# category -> OSM amenity / leisure / shop values
AMENITY_CATEGORIES: dict[str, tuple[str, ...]] = {
    "restaurants": ("restaurant", "fast_food"),
    "groceryStores": ("supermarket", "grocery", "convenience"),
    "cafes": ("cafe", "coffee"),
    "bars": ("bar", "pub", "nightclub"),
    "parks": ("park", "playground", "recreation_ground"),
    "schools": ("school", "kindergarten", "college", "university"),
    "hospitals": ("hospital", "clinic", "doctors"),
    "pharmacies": ("pharmacy",),
    "banks": ("bank", "atm"),
    "gasStations": ("fuel",),
    "gyms": ("gym", "fitness_centre", "sports_centre"),
    "transit": ("bus_station", "subway_entrance", "train_station"),
}

_CATEGORY_OF = {
    value: category
    for category, values in AMENITY_CATEGORIES.items()
    for value in values
}


def build_overpass_query(lat: float, lng: float, radius_m: int) -> str:
    """Overpass QL query for every amenity value of interest"""
    around = f"(around:{radius_m},{lat},{lng})"
    amenities = "|".join(sorted(_CATEGORY_OF))
    return (
        "[out:json][timeout:25];"
        "("
        f'node["amenity"~"^({amenities})$"]{around};'
        f'node["leisure"~"^(park|playground|sports_centre|fitness_centre)$"]{around};'
        f'node["shop"~"^(supermarket|grocery|convenience)$"]{around};'
        ");"
        "out tags;"
    )


def count_by_category(elements: list[dict]) -> dict[str, int]:
    """Element count per category (every category present, zero if none)"""
    counts = {category: 0 for category in AMENITY_CATEGORIES}
    for element in elements:
        tags = element.get("tags") or {}
        kind = tags.get("amenity") or tags.get("leisure") or tags.get("shop")
        category = _CATEGORY_OF.get(kind)
        if category:
            counts[category] += 1
    return counts


class AmenitiesSource(HttpDataSource):
    """Overpass API amenity counts within the query radius"""

    category = "amenities"
    label = "Overpass"

    async def fetch(self, query: LocationQuery) -> AmenitiesRecord:
        overpass_query = build_overpass_query(query.lat, query.lng, query.radius_m)
        data = await self._post_form(settings.OVERPASS_URL, {"data": overpass_query})

        counts = count_by_category(data.get("elements") or [])
        self.logger.debug(f"{sum(counts.values())} amenities within {query.radius_m}m")

        return AmenitiesRecord(counts=counts, radius_m=query.radius_m)
