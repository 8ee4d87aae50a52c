# services/emissions/calculator.py
from __future__ import annotations
import asyncio
import logging
import math
from typing import List, Optional

from models.trip import SegmentResult, TransportMode, Trip, TripResult, TripSegment
from services.distance_resolver import DistanceResolver
from services.trip_validation import validate_trip

from .factors import EmissionFactorTable

logger = logging.getLogger(__name__)

KG_PER_TONNE = 1000.0
TREE_KG_PER_YEAR = 22.0  # CO2 one tree absorbs in a year
CAR_KG_PER_KM = 0.192  # average gasoline car


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


class EmissionCalculator:
    def __init__(
        self,
        resolver: DistanceResolver,
        factors: Optional[EmissionFactorTable] = None,
    ):
        self.resolver = resolver
        self.factors = factors or EmissionFactorTable.builtin()

    def compute_segment_emission(self, segment: TripSegment, distance_km: float) -> float:
        factor = self.factors.lookup(segment)
        if (
            segment.mode == TransportMode.CAR
            and segment.passenger_count
            and segment.passenger_count > 0
        ):
            # carpooling splits the car's footprint between occupants
            return factor * distance_km / segment.passenger_count
        return factor * distance_km

    async def _resolve_segment(self, segment: TripSegment, trip: Trip) -> float:
        try:
            return await self.resolver.resolve(segment, trip)
        except Exception as e:
            logger.warning("Distance resolution failed for %s segment: %s", segment.mode, e)
            return 0.0

    async def resolve_trip(self, trip: Trip) -> List[SegmentResult]:
        """Resolve all segments concurrently; results keep input order."""
        distances = await asyncio.gather(
            *(self._resolve_segment(s, trip) for s in trip.segments)
        )
        results: List[SegmentResult] = []
        for segment, km in zip(trip.segments, distances):
            if km <= 0 and segment.mode is not None:
                logger.info("No distance found for %s segment", segment.mode.value)
            results.append(
                SegmentResult(
                    segment=segment,
                    resolved_distance_km=km,
                    emission_kg=self.compute_segment_emission(segment, km),
                    distance_found=km > 0,
                )
            )
        return results

    def aggregate(self, trip: Trip, segment_results: List[SegmentResult]) -> TripResult:
        total_emission = sum(r.emission_kg for r in segment_results)
        total_distance = sum(r.resolved_distance_km for r in segment_results)

        if trip.round_trip:
            total_emission *= 2
            total_distance *= 2

        return TripResult(
            total_emission_kg=round_half_up(total_emission, 2),
            carbon_credits_tonnes=round_half_up(total_emission / KG_PER_TONNE, 3),
            tree_equivalent=math.ceil(total_emission / TREE_KG_PER_YEAR),
            car_km_equivalent=int(round_half_up(total_emission / CAR_KG_PER_KM)),
            total_distance_km=int(round_half_up(total_distance)),
            segments=[
                SegmentResult(
                    segment=r.segment,
                    resolved_distance_km=int(round_half_up(r.resolved_distance_km)),
                    emission_kg=round_half_up(r.emission_kg, 2),
                    distance_found=r.distance_found,
                )
                for r in segment_results
            ],
        )

    async def compute_trip(self, trip: Trip) -> TripResult:
        validate_trip(trip)
        return self.aggregate(trip, await self.resolve_trip(trip))
