"""Request bodies for the HTTP tool endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ToolArgs(BaseModel):
    """Base for tool arguments, accepted in camelCase or snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRestaurantsArgs(ToolArgs):
    """Arguments of the ``search_restaurants`` tool."""

    latitude: float | None = Field(None, description="Latitude of the search location")
    longitude: float | None = Field(
        None, description="Longitude of the search location"
    )
    place_name: str | None = Field(
        None,
        description='Place name to search near (e.g. "Tokyo"). Alternative to coordinates.',
    )
    cuisine_types: list[str] = Field(
        default_factory=list, description='Preferred cuisines (e.g. ["Italian"])'
    )
    keyword: str | None = Field(
        None, description='Specific food or dish (e.g. "hotpot", "ramen")'
    )
    mood: str = Field(
        ..., description='Desired mood (e.g. "romantic", "casual", "upscale")'
    )
    event: str = Field(
        ..., description='Occasion (e.g. "dating", "gathering", "business")'
    )
    radius: int | None = Field(None, description="Search radius in meters")
    price_level: int | None = Field(
        None, ge=1, le=4, description="Price level (1=inexpensive, 4=very expensive)"
    )
    locale: str | None = Field(None, description='Response locale (e.g. "en", "zh-TW")')


class PlaceLookupArgs(ToolArgs):
    """Arguments of the details and booking-instructions tools."""

    place_id: str = Field(..., description="Google Places place ID")
    locale: str | None = Field(None, description="Response locale")


class CheckAvailabilityArgs(ToolArgs):
    """Arguments of the ``check_availability`` tool."""

    place_id: str = Field(..., description="Google Places place ID")
    date_time: str = Field(
        ..., description='Reservation date and time, ISO 8601 (e.g. "2024-01-15T19:00:00")'
    )
    # Non-integers pass through so the booking engine can explain the rejection
    party_size: int | float = Field(..., description="Number of people (1-20)")


class MakeReservationArgs(CheckAvailabilityArgs):
    """Arguments of the ``make_reservation`` tool."""

    contact_name: str = Field(..., description="Name for the reservation")
    contact_phone: str = Field(..., description="Phone number for the reservation")
    special_requests: str | None = Field(None, description="Special requests or notes")
