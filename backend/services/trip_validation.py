from core.exceptions import TripValidationError
from models.trip import RAIL_AIR_MODES, ROAD_MODES, Trip, TripSegment


def missing_origin(segment: TripSegment) -> bool:
    """True when the segment lacks the origin fields its mode resolves from."""
    if segment.explicit_distance_km is not None and segment.explicit_distance_km > 0:
        return False
    if segment.mode in ROAD_MODES:
        return not segment.origin_postal_code
    if segment.mode in RAIL_AIR_MODES:
        return not (segment.origin_locality and segment.origin_region)
    return False


def validate_trip(trip: Trip) -> None:
    moded = [s for s in trip.segments if s.mode is not None]
    if not moded:
        raise TripValidationError("Add at least one segment with a transport mode.")
    if all(missing_origin(s) for s in moded):
        raise TripValidationError(
            "No segment has an origin or a distance; "
            "give a postal code (car, bus, motorcycle), an origin city and state "
            "(plane, train) or the distance in km."
        )
