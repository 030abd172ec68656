"""Tool handlers: glue between tool calls, the place catalog and the engines.

Every handler returns the text payload the calling agent sees. Business
outcomes come back as structured JSON; catalog failures are logged and turned
into an error sentence instead of propagating.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from restaurant_booking.config import Config, get_config
from restaurant_booking.errors import UpstreamError
from restaurant_booking.models import (
    Location,
    ReservationOutcome,
    ReservationRequest,
    ReservationStatus,
    SearchCriteria,
)
from restaurant_booking.services.booking_engine import BookingEngine
from restaurant_booking.services.places_catalog import PlaceCatalog
from restaurant_booking.services.recommendation_engine import RecommendationEngine

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Restaurant not found or unable to retrieve details."
NO_RESULTS_MESSAGE = (
    "No restaurants found matching your criteria. "
    "Try expanding your search radius or adjusting your preferences."
)


def _to_text(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


class ToolHandlers:
    """Implements the five restaurant tools on top of a place catalog.

    Attributes:
        catalog: Source of restaurant records
        recommendation_engine: Scores and ranks search results
        booking_engine: Decides availability and reservations
        config: Application configuration (search defaults)
    """

    def __init__(
        self,
        catalog: PlaceCatalog,
        recommendation_engine: RecommendationEngine | None = None,
        booking_engine: BookingEngine | None = None,
        config: Config | None = None,
    ) -> None:
        self.catalog = catalog
        self.recommendation_engine = recommendation_engine or RecommendationEngine()
        self.booking_engine = booking_engine or BookingEngine()
        self.config = config or get_config()

    async def search_restaurants(
        self,
        mood: str,
        event: str,
        latitude: float | None = None,
        longitude: float | None = None,
        place_name: str | None = None,
        cuisine_types: list[str] | None = None,
        keyword: str | None = None,
        radius: int | None = None,
        price_level: int | None = None,
        locale: str | None = None,
    ) -> str:
        """Search for restaurants and rank them for the given mood and event."""
        try:
            criteria = SearchCriteria(
                place_name=place_name or None,
                location=None
                if place_name
                else Location(
                    latitude=self.config.default_latitude if latitude is None else latitude,
                    longitude=self.config.default_longitude
                    if longitude is None
                    else longitude,
                ),
                cuisine_types=cuisine_types or [],
                keyword=keyword,
                mood=mood,
                event=event,
                radius=radius or self.config.default_search_radius,
                price_level=price_level,
                locale=locale or self.config.default_locale,
            )
        except ValidationError as e:
            logger.warning(f"Rejected search criteria: {e}")
            return f"Invalid search criteria: {e}"

        try:
            restaurants = await self.catalog.search(criteria)
        except UpstreamError as e:
            logger.exception("Error searching restaurants")
            return f"Error searching restaurants: {e}"

        if not restaurants:
            return NO_RESULTS_MESSAGE

        recommendations = self.recommendation_engine.rank(restaurants, criteria)
        return _to_text(
            {
                "searchCriteria": criteria.model_dump(
                    mode="json", by_alias=True, exclude_none=True
                ),
                "totalFound": len(restaurants),
                "recommendations": [
                    rec.model_dump(mode="json", by_alias=True) for rec in recommendations
                ],
            }
        )

    async def get_restaurant_details(self, place_id: str, locale: str | None = None) -> str:
        """Return the full restaurant record for ``place_id``."""
        try:
            restaurant = await self.catalog.get_details(
                place_id, locale or self.config.default_locale
            )
        except UpstreamError as e:
            logger.exception("Error getting restaurant details")
            return f"Error retrieving restaurant details: {e}"

        if restaurant is None:
            return NOT_FOUND_MESSAGE
        return _to_text(restaurant.model_dump(mode="json", by_alias=True))

    async def get_booking_instructions(
        self, place_id: str, locale: str | None = None
    ) -> str:
        """Return plain-text instructions for booking at ``place_id``."""
        try:
            restaurant = await self.catalog.get_details(
                place_id, locale or self.config.default_locale
            )
        except UpstreamError as e:
            logger.exception("Error getting booking instructions")
            return f"Error retrieving booking instructions: {e}"

        if restaurant is None:
            return NOT_FOUND_MESSAGE
        return self.booking_engine.booking_instructions(restaurant)

    async def check_availability(
        self, place_id: str, date_time: str, party_size: int
    ) -> str:
        """Check table availability for a date, time and party size."""
        try:
            restaurant = await self.catalog.get_details(
                place_id, self.config.default_locale
            )
        except UpstreamError as e:
            logger.exception("Error checking availability")
            return f"Error checking availability: {e}"

        if restaurant is None:
            return NOT_FOUND_MESSAGE

        verdict = self.booking_engine.check_availability(
            restaurant, date_time, party_size
        )
        return _to_text(
            {
                "restaurant": {"name": restaurant.name, "placeId": restaurant.place_id},
                "requestedDateTime": date_time,
                "partySize": party_size,
                "availability": verdict.model_dump(mode="json", by_alias=True),
            }
        )

    async def make_reservation(
        self,
        place_id: str,
        date_time: str,
        party_size: int,
        contact_name: str,
        contact_phone: str,
        special_requests: str | None = None,
    ) -> str:
        """Attempt to reserve a table."""
        try:
            restaurant = await self.catalog.get_details(
                place_id, self.config.default_locale
            )
        except UpstreamError as e:
            logger.exception("Error making reservation")
            return f"Error making reservation: {e}"

        if restaurant is None:
            return NOT_FOUND_MESSAGE

        try:
            request = ReservationRequest(
                place_id=place_id,
                date_time=date_time,
                party_size=party_size,
                contact_name=contact_name,
                contact_phone=contact_phone,
                special_requests=special_requests,
            )
        except ValidationError as e:
            logger.warning(f"Rejected reservation request: {e}")
            outcome = ReservationOutcome(
                success=False,
                message=f"Invalid reservation request: {e}",
                status=ReservationStatus.REJECTED,
            )
        else:
            outcome = self.booking_engine.make_reservation(restaurant, request)
        return _to_text(outcome.model_dump(mode="json", by_alias=True, exclude_none=True))


# Global handlers instance shared by the agent tools and the HTTP server
_tool_handlers: ToolHandlers | None = None


def get_tool_handlers() -> ToolHandlers:
    """Get or create the global tool handlers backed by Google Places."""
    global _tool_handlers
    if _tool_handlers is None:
        from restaurant_booking.services.places_catalog import GooglePlacesCatalog

        _tool_handlers = ToolHandlers(GooglePlacesCatalog())
    return _tool_handlers


def set_tool_handlers(handlers: ToolHandlers | None) -> None:
    """Replace the global tool handlers (None resets to the default)."""
    global _tool_handlers
    _tool_handlers = handlers
