# backend/tests/fakes.py
from typing import Dict, Optional, Set

from adapters.offline.static_gateway import StaticGeocodingGateway, normalize_postal_code
from core.exceptions import GeocodingError
from models.trip import PostalAddress


class FakeGateway(StaticGeocodingGateway):
    """Static tables plus canned postal codes; selected codes blow up."""

    def __init__(
        self,
        postal_codes: Optional[Dict[str, PostalAddress]] = None,
        failing_codes: Optional[Set[str]] = None,
        fail_tables: bool = False,
        **kwargs,
    ):
        super().__init__(postal_codes=postal_codes, **kwargs)
        self.failing_codes = {normalize_postal_code(c) for c in (failing_codes or set())}
        self.fail_tables = fail_tables
        self.postal_calls = 0

    async def resolve_postal_code(self, code: str) -> Optional[PostalAddress]:
        self.postal_calls += 1
        if normalize_postal_code(code) in self.failing_codes:
            raise GeocodingError(f"boom for {code}")
        return await super().resolve_postal_code(code)

    async def lookup_city_pair_distance(self, *args) -> Optional[float]:
        if self.fail_tables:
            raise GeocodingError("city table down")
        return await super().lookup_city_pair_distance(*args)

    async def lookup_metro_area_distance(self, *args) -> Optional[float]:
        if self.fail_tables:
            raise GeocodingError("metro table down")
        return await super().lookup_metro_area_distance(*args)
