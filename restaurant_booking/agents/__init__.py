"""Restaurant booking agent using OpenAI Agents SDK."""

from restaurant_booking.agents.booking_agent import BookingAgent
from restaurant_booking.agents.tools import (
    ALL_TOOLS,
    check_availability,
    get_booking_instructions,
    get_restaurant_details,
    make_reservation,
    search_restaurants,
)

__all__ = [
    "ALL_TOOLS",
    "BookingAgent",
    "check_availability",
    "get_booking_instructions",
    "get_restaurant_details",
    "make_reservation",
    "search_restaurants",
]
