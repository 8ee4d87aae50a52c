from __future__ import annotations
import math
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransportMode(str, Enum):
    PLANE = "plane"
    CAR = "car"
    BUS = "bus"
    TRAIN = "train"
    METRO = "metro"
    MOTORCYCLE = "motorcycle"
    SHIP = "ship"


class FuelType(str, Enum):
    GASOLINE = "gasoline"
    ETHANOL = "ethanol"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"


class FlightClass(str, Enum):
    ECONOMY = "economy"
    BUSINESS = "business"
    FIRST = "first"


# Origin is given by postal code for these, by locality for RAIL_AIR_MODES
ROAD_MODES = frozenset({TransportMode.CAR, TransportMode.BUS, TransportMode.MOTORCYCLE})
RAIL_AIR_MODES = frozenset({TransportMode.PLANE, TransportMode.TRAIN})


class PostalAddress(BaseModel):
    locality: str
    region: str
    postal_code: Optional[str] = None


class Locality(BaseModel):
    name: str
    region: str
    code: Optional[str] = None


class TripSegment(BaseModel):
    mode: Optional[TransportMode] = None
    explicit_distance_km: Optional[float] = None

    # plane / train
    origin_locality: Optional[str] = None
    origin_region: Optional[str] = None
    origin_country: Optional[str] = None

    # car / bus / motorcycle
    origin_postal_code: Optional[str] = None

    destination_locality: Optional[str] = None
    destination_region: Optional[str] = None

    # Kept as free strings so unknown values degrade to the default factor
    fuel_type: Optional[str] = None
    flight_class: Optional[str] = None
    passenger_count: Optional[int] = 1

    @field_validator(
        "origin_locality",
        "origin_region",
        "origin_country",
        "origin_postal_code",
        "destination_locality",
        "destination_region",
        "fuel_type",
        "flight_class",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, v):
        # form layers send "" for untouched inputs
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("explicit_distance_km")
    @classmethod
    def _finite_distance(cls, v):
        if v is not None and not math.isfinite(v):
            raise ValueError("explicit_distance_km must be a finite number")
        return v


class Trip(BaseModel):
    destination_locality: str
    destination_region: str
    destination_country: Optional[str] = None
    round_trip: bool = False
    segments: List[TripSegment] = Field(default_factory=list)

    # Traveler/context fields; carried along, never read by the calculator
    traveler_name: Optional[str] = None
    traveler_email: Optional[str] = None
    traveler_document: Optional[str] = None
    traveler_phone: Optional[str] = None
    travel_date: Optional[str] = None
    return_date: Optional[str] = None
    notes: Optional[str] = None


class SegmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    segment: TripSegment
    # whole km once aggregated; raw resolver output before that
    resolved_distance_km: Union[int, float]
    emission_kg: float
    distance_found: bool = True


class TripResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_emission_kg: float
    carbon_credits_tonnes: float
    tree_equivalent: int
    car_km_equivalent: int
    total_distance_km: int
    segments: List[SegmentResult] = Field(default_factory=list)
