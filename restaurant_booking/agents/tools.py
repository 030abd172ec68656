"""Function tools for the restaurant booking agent."""

import logging

from agents import function_tool

from restaurant_booking.services.tool_handlers import get_tool_handlers

logger = logging.getLogger(__name__)


@function_tool
async def search_restaurants(
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
    """Search for restaurants and rank them for a mood and an occasion.

    Args:
        mood: Desired mood or atmosphere (e.g. "romantic", "casual", "upscale", "fun", "quiet")
        event: Type of occasion (e.g. "dating", "gathering", "business", "casual", "celebration")
        latitude: Latitude of the search location (defaults to the configured origin)
        longitude: Longitude of the search location (defaults to the configured origin)
        place_name: Place name to search near (e.g. "Tokyo"), instead of coordinates
        cuisine_types: Preferred cuisines (e.g. ["Italian", "Japanese"])
        keyword: Specific food or dish (e.g. "hotpot", "sushi", "ramen")
        radius: Search radius in meters
        price_level: Price level preference, 1 (inexpensive) to 4 (very expensive)
        locale: Response locale (e.g. "en", "zh-TW", "ja")

    Returns:
        JSON with the search criteria and ranked recommendations
    """
    logger.info(f"Tool search_restaurants: mood={mood!r}, event={event!r}")
    return await get_tool_handlers().search_restaurants(
        mood=mood,
        event=event,
        latitude=latitude,
        longitude=longitude,
        place_name=place_name,
        cuisine_types=cuisine_types,
        keyword=keyword,
        radius=radius,
        price_level=price_level,
        locale=locale,
    )


@function_tool
async def get_restaurant_details(place_id: str, locale: str | None = None) -> str:
    """Get comprehensive details about a restaurant.

    Args:
        place_id: Google Places place ID of the restaurant
        locale: Response locale (e.g. "en", "zh-TW")

    Returns:
        JSON restaurant record, or a not-found message
    """
    logger.info(f"Tool get_restaurant_details: {place_id}")
    return await get_tool_handlers().get_restaurant_details(place_id, locale)


@function_tool
async def get_booking_instructions(place_id: str, locale: str | None = None) -> str:
    """Get instructions on how to make a reservation at a restaurant.

    Args:
        place_id: Google Places place ID of the restaurant
        locale: Response locale (e.g. "en", "zh-TW")

    Returns:
        Plain-text booking instructions, or a not-found message
    """
    logger.info(f"Tool get_booking_instructions: {place_id}")
    return await get_tool_handlers().get_booking_instructions(place_id, locale)


@function_tool
async def check_availability(place_id: str, date_time: str, party_size: int) -> str:
    """Check if a restaurant has a table for a date, time and party size.

    Args:
        place_id: Google Places place ID of the restaurant
        date_time: Desired date and time in ISO format (e.g. "2024-01-15T19:00:00")
        party_size: Number of people in the party (1-20)

    Returns:
        JSON with the availability verdict
    """
    logger.info(f"Tool check_availability: {place_id} {date_time} x{party_size}")
    return await get_tool_handlers().check_availability(place_id, date_time, party_size)


@function_tool
async def make_reservation(
    place_id: str,
    date_time: str,
    party_size: int,
    contact_name: str,
    contact_phone: str,
    special_requests: str | None = None,
) -> str:
    """Attempt to make a reservation at a restaurant.

    Args:
        place_id: Google Places place ID of the restaurant
        date_time: Desired date and time in ISO format (e.g. "2024-01-15T19:00:00")
        party_size: Number of people in the party (1-20)
        contact_name: Name for the reservation
        contact_phone: Phone number for the reservation
        special_requests: Any special requests or notes

    Returns:
        JSON reservation outcome with a confirmation code on success
    """
    logger.info(f"Tool make_reservation: {place_id} {date_time} x{party_size}")
    return await get_tool_handlers().make_reservation(
        place_id,
        date_time,
        party_size,
        contact_name,
        contact_phone,
        special_requests,
    )


ALL_TOOLS = [
    search_restaurants,
    get_restaurant_details,
    get_booking_instructions,
    check_availability,
    make_reservation,
]
