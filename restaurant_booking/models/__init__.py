"""Data models for the restaurant booking tools."""

from restaurant_booking.models.recommendation import Recommendation
from restaurant_booking.models.reservation import (
    AvailabilityVerdict,
    ReservationOutcome,
    ReservationRequest,
    ReservationStatus,
)
from restaurant_booking.models.restaurant import (
    Location,
    OpeningHours,
    RestaurantRecord,
    SearchCriteria,
)

__all__ = [
    "AvailabilityVerdict",
    "Location",
    "OpeningHours",
    "Recommendation",
    "ReservationOutcome",
    "ReservationRequest",
    "ReservationStatus",
    "RestaurantRecord",
    "SearchCriteria",
]
