import re
from typing import Dict, Optional

from adapters.offline.distance_tables import DistanceTables
from core.interfaces import GeocodingGateway
from models.trip import PostalAddress


def normalize_postal_code(code: str) -> str:
    return re.sub(r"\D", "", code or "")


class StaticGeocodingGateway(GeocodingGateway):
    """
    Offline gateway. Postal codes come from an in-memory mapping (empty by
    default, so every code is "not found"); distances come from DistanceTables.
    """

    def __init__(
        self,
        postal_codes: Optional[Dict[str, PostalAddress]] = None,
        tables: Optional[DistanceTables] = None,
    ):
        self.postal_codes = {
            normalize_postal_code(k): v for k, v in (postal_codes or {}).items()
        }
        self.tables = tables or DistanceTables()

    async def resolve_postal_code(self, code: str) -> Optional[PostalAddress]:
        return self.postal_codes.get(normalize_postal_code(code))

    async def lookup_city_pair_distance(
        self,
        origin_locality: str,
        origin_region: str,
        dest_locality: str,
        dest_region: str,
    ) -> Optional[float]:
        # hub pairs are unique by name, region is not needed to disambiguate
        return self.tables.city_pair(origin_locality, dest_locality)

    async def lookup_metro_area_distance(
        self, region: str, origin_locality: str, dest_locality: str
    ) -> Optional[float]:
        return self.tables.metro_area(region, origin_locality, dest_locality)
