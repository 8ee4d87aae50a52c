# services/distance_resolver.py
from __future__ import annotations
import logging
from typing import Awaitable, Callable, Dict, Optional

from core.interfaces import GeocodingGateway
from models.trip import PostalAddress, TransportMode, Trip, TripSegment

logger = logging.getLogger(__name__)

UNRESOLVED_KM = 0.0
SAME_CITY_KM = 10.0  # trip inside the destination city
SAME_REGION_KM = 80.0  # different city, same state, no metro-table entry
INTERNATIONAL_KM = 5000.0
INTER_REGION_KM = 800.0
INTRA_REGION_KM = 300.0
FALLBACK_KM = 500.0


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").strip().casefold() == (b or "").strip().casefold()


class DistanceResolver:
    """
    Turns one segment into kilometers. Rules are tried in order and the first
    that applies wins; the result is always a number, never an exception.
    """

    def __init__(self, gateway: GeocodingGateway, home_country: str = "Brasil"):
        self.gateway = gateway
        self.home_country = home_country
        self._strategies: Dict[
            TransportMode, Callable[[TripSegment, Trip], Awaitable[float]]
        ] = {
            TransportMode.CAR: self._by_postal_code,
            TransportMode.BUS: self._by_postal_code,
            TransportMode.MOTORCYCLE: self._by_postal_code,
            TransportMode.PLANE: self._by_locality,
            TransportMode.TRAIN: self._by_locality,
        }

    async def resolve(self, segment: TripSegment, trip: Trip) -> float:
        if segment.explicit_distance_km is not None and segment.explicit_distance_km > 0:
            return float(segment.explicit_distance_km)

        strategy = self._strategies.get(segment.mode) if segment.mode else None
        if strategy is None:
            return UNRESOLVED_KM
        return await strategy(segment, trip)

    # ---------- car / bus / motorcycle ----------
    async def _by_postal_code(self, segment: TripSegment, trip: Trip) -> float:
        if not segment.origin_postal_code:
            return UNRESOLVED_KM

        origin = await self._resolve_postal_code(segment.origin_postal_code)
        if origin is None:
            return UNRESOLVED_KM

        dest_locality = segment.destination_locality or trip.destination_locality
        dest_region = segment.destination_region or trip.destination_region

        # Cross-region road distances are left for the user to type in
        if not _same(origin.region, dest_region):
            return UNRESOLVED_KM

        if _same(origin.locality, dest_locality):
            return SAME_CITY_KM

        km = await self._lookup(
            self.gateway.lookup_metro_area_distance,
            origin.region,
            origin.locality,
            dest_locality,
        )
        if km is not None and km > 0:
            return km
        return SAME_REGION_KM

    async def _resolve_postal_code(self, code: str) -> Optional[PostalAddress]:
        try:
            return await self.gateway.resolve_postal_code(code)
        except Exception as e:
            logger.warning("Postal code lookup failed for %r: %s", code, e)
            return None

    # ---------- plane / train ----------
    async def _by_locality(self, segment: TripSegment, trip: Trip) -> float:
        if not segment.origin_locality or not segment.origin_region:
            return UNRESOLVED_KM

        dest_locality = segment.destination_locality or trip.destination_locality
        dest_region = segment.destination_region or trip.destination_region

        origin_country = segment.origin_country or self.home_country
        dest_country = trip.destination_country or self.home_country
        if not _same(origin_country, dest_country):
            return INTERNATIONAL_KM

        km = await self._lookup(
            self.gateway.lookup_city_pair_distance,
            segment.origin_locality,
            segment.origin_region,
            dest_locality,
            dest_region,
        )
        if km is not None and km > 0:
            return km

        return self._estimate(
            segment.origin_locality, segment.origin_region, dest_locality, dest_region
        )

    @staticmethod
    def _estimate(
        origin_locality: str,
        origin_region: str,
        dest_locality: Optional[str],
        dest_region: Optional[str],
    ) -> float:
        if not dest_locality or not dest_region:
            return FALLBACK_KM
        if not _same(origin_region, dest_region):
            return INTER_REGION_KM
        if not _same(origin_locality, dest_locality):
            return INTRA_REGION_KM
        return FALLBACK_KM

    async def _lookup(self, fn, *args) -> Optional[float]:
        # table misses and provider failures look the same to the cascade
        try:
            km = await fn(*args)
        except Exception as e:
            logger.warning("Distance table lookup %s%r failed: %s", fn.__name__, args, e)
            return None
        return float(km) if km is not None else None
