"""Data models for restaurant reservations."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReservationStatus(str, Enum):
    """State of a reservation attempt.

    ``requested -> validated -> availability_determined -> confirmed | declined``,
    with ``requested -> rejected`` when validation fails.
    """

    REQUESTED = "requested"
    VALIDATED = "validated"
    AVAILABILITY_DETERMINED = "availability_determined"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    REJECTED = "rejected"


class ReservationRequest(BaseModel):
    """User's reservation request details.

    Range and format checks are left to the booking engine so that bad input
    turns into a negative outcome rather than an exception.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    place_id: str = Field(..., description="Provider place ID")
    date_time: str = Field(..., description="Requested date and time, ISO 8601")
    party_size: int = Field(..., description="Number of people")
    contact_name: str | None = Field(None, description="Name for the reservation")
    contact_phone: str | None = Field(None, description="Contact phone number")
    special_requests: str | None = Field(None, description="Special requests or notes")


class AvailabilityVerdict(BaseModel):
    """Result of an availability check."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    available: bool = Field(..., description="Whether the slot is available")
    message: str = Field(..., description="Explanation of the verdict")
    suggested_slots: list[str] = Field(
        default_factory=list, description="Bookable slots, ISO 8601"
    )


class ReservationOutcome(BaseModel):
    """Result of a reservation attempt."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    success: bool = Field(..., description="Whether the reservation was made")
    message: str = Field(..., description="Status message or explanation")
    confirmation_code: str | None = Field(
        None, description="Confirmation code if successful"
    )
    status: ReservationStatus = Field(..., description="Final state of the attempt")
