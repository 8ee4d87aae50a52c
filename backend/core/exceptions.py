from __future__ import annotations


class AppError(Exception):
    """Base app error."""


class GeocodingError(AppError):
    """Raised when a geocoding provider fails or answers garbage."""


class TripValidationError(AppError):
    """Raised when a trip has no usable segment to compute."""


class TripStoreError(AppError):
    """Raised when the trip/event store cannot be read or written."""
