from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from models.trip import PostalAddress


class GeocodingGateway(ABC):
    """All online/offline locality providers must implement this."""

    @abstractmethod
    async def resolve_postal_code(self, code: str) -> Optional[PostalAddress]: ...

    @abstractmethod
    async def lookup_city_pair_distance(
        self,
        origin_locality: str,
        origin_region: str,
        dest_locality: str,
        dest_region: str,
    ) -> Optional[float]: ...

    @abstractmethod
    async def lookup_metro_area_distance(
        self, region: str, origin_locality: str, dest_locality: str
    ) -> Optional[float]: ...
