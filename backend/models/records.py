from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel

from models.trip import Trip, TripResult


class EventConfig(BaseModel):
    """Where the event happens; trips default their destination to it."""

    locality: str
    region: str
    country: str = "Brasil"
    postal_code: Optional[str] = None
    name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class TripRecord(BaseModel):
    trip: Trip
    result: TripResult
    calculated_at: str


class TripTotals(BaseModel):
    total_emission_kg: float = 0.0
    total_carbon_credits_tonnes: float = 0.0
    total_tree_equivalent: int = 0
    trip_count: int = 0


class TripExport(BaseModel):
    trips: List[TripRecord]
    totals: TripTotals
    exported_at: str
