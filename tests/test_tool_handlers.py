"""Tests for the tool handlers."""

import json

import pytest
from conftest import FUTURE_SLOT, FakeCatalog, build_restaurant

from restaurant_booking.config import Config
from restaurant_booking.services.tool_handlers import (
    NO_RESULTS_MESSAGE,
    NOT_FOUND_MESSAGE,
    ToolHandlers,
    get_tool_handlers,
    set_tool_handlers,
)


@pytest.fixture
def config():
    """Configuration with known search defaults."""
    return Config(
        google_maps_api_key="test-key",
        openai_api_key="test-openai-key",
        default_latitude=24.15,
        default_longitude=120.67,
        default_search_radius=2500,
        default_locale="en",
    )


@pytest.fixture
def handlers(fake_catalog, config):
    """Tool handlers over the single-restaurant catalog."""
    return ToolHandlers(fake_catalog, config=config)


class TestSearchRestaurants:
    """Tests for the search_restaurants tool."""

    async def test_returns_ranked_json(self, config):
        """Test the JSON shape of a successful search."""
        catalog = FakeCatalog(
            [
                build_restaurant(place_id="a", name="Alpha", rating=3.0),
                build_restaurant(place_id="b", name="Bravo", rating=4.9,
                                 user_ratings_total=900),
            ]
        )
        handlers = ToolHandlers(catalog, config=config)

        text = await handlers.search_restaurants(
            mood="casual", event="gathering", latitude=25.0, longitude=121.5
        )
        data = json.loads(text)

        assert data["totalFound"] == 2
        assert data["searchCriteria"]["location"] == {"latitude": 25.0, "longitude": 121.5}
        assert "placeName" not in data["searchCriteria"]
        recs = data["recommendations"]
        assert [r["restaurant"]["placeId"] for r in recs] == ["b", "a"]
        for rec in recs:
            assert rec["score"] == round(rec["score"], 1)
            assert set(rec) == {
                "restaurant", "score", "reasoning", "suitabilityForEvent", "moodMatch"
            }

    async def test_place_name_wins_over_coordinates(self, handlers, fake_catalog):
        """Test that a place name replaces the coordinates."""
        await handlers.search_restaurants(
            mood="casual", event="gathering", latitude=25.0, longitude=121.5,
            place_name="Taipei 101",
        )

        [criteria] = fake_catalog.searches
        assert criteria.place_name == "Taipei 101"
        assert criteria.location is None

    async def test_defaults_from_config(self, handlers, fake_catalog):
        """Test that location, radius and locale fall back to configuration."""
        await handlers.search_restaurants(mood="casual", event="gathering")

        [criteria] = fake_catalog.searches
        assert criteria.location.latitude == 24.15
        assert criteria.location.longitude == 120.67
        assert criteria.radius == 2500
        assert criteria.locale == "en"

    async def test_no_results(self, config):
        """Test the message for an empty search."""
        handlers = ToolHandlers(FakeCatalog(), config=config)

        text = await handlers.search_restaurants(mood="casual", event="gathering")

        assert text == NO_RESULTS_MESSAGE

    async def test_upstream_error(self, failing_catalog, config):
        """Test that catalog failures become an error sentence."""
        handlers = ToolHandlers(failing_catalog, config=config)

        text = await handlers.search_restaurants(mood="casual", event="gathering")

        assert text.startswith("Error searching restaurants:")
        assert "500" in text

    async def test_invalid_criteria(self, handlers, fake_catalog):
        """Test that invalid criteria never reach the catalog."""
        text = await handlers.search_restaurants(
            mood="casual", event="gathering", price_level=7
        )

        assert text.startswith("Invalid search criteria:")
        assert fake_catalog.searches == []


class TestRestaurantLookups:
    """Tests for the details and instructions tools."""

    async def test_details(self, handlers, fake_catalog):
        """Test that details return the full record."""
        text = await handlers.get_restaurant_details("place-1", locale="fr")
        data = json.loads(text)

        assert data["placeId"] == "place-1"
        assert data["name"] == "Test Bistro"
        assert data["reservable"] is True
        assert fake_catalog.lookups == [("place-1", "fr")]

    async def test_details_not_found(self, handlers):
        assert await handlers.get_restaurant_details("missing") == NOT_FOUND_MESSAGE

    async def test_details_upstream_error(self, failing_catalog, config):
        handlers = ToolHandlers(failing_catalog, config=config)

        text = await handlers.get_restaurant_details("place-1")

        assert text.startswith("Error retrieving restaurant details:")

    async def test_booking_instructions(self, handlers):
        """Test that instructions are plain text about the restaurant."""
        text = await handlers.get_booking_instructions("place-1")

        assert "Test Bistro" in text
        assert "accepts reservations" in text
        assert "+1 555-0100" in text

    async def test_booking_instructions_not_found(self, handlers):
        assert await handlers.get_booking_instructions("missing") == NOT_FOUND_MESSAGE


class TestCheckAvailability:
    """Tests for the check_availability tool."""

    async def test_json_shape(self, handlers):
        """Test the availability payload."""
        text = await handlers.check_availability("place-1", FUTURE_SLOT, 4)
        data = json.loads(text)

        assert data["restaurant"] == {"name": "Test Bistro", "placeId": "place-1"}
        assert data["requestedDateTime"] == FUTURE_SLOT
        assert data["partySize"] == 4
        assert set(data["availability"]) == {"available", "message", "suggestedSlots"}

    async def test_past_date(self, handlers):
        """Test that a past date comes back as a negative verdict."""
        text = await handlers.check_availability("place-1", "2001-01-01T19:00:00", 2)

        availability = json.loads(text)["availability"]
        assert availability["available"] is False
        assert "past dates" in availability["message"]

    async def test_not_found(self, handlers):
        text = await handlers.check_availability("missing", FUTURE_SLOT, 2)

        assert text == NOT_FOUND_MESSAGE

    async def test_upstream_error(self, failing_catalog, config):
        handlers = ToolHandlers(failing_catalog, config=config)

        text = await handlers.check_availability("place-1", FUTURE_SLOT, 2)

        assert text.startswith("Error checking availability:")


class TestMakeReservation:
    """Tests for the make_reservation tool."""

    async def test_missing_contact_name(self, handlers):
        """Test that an empty contact name is rejected."""
        text = await handlers.make_reservation(
            "place-1", FUTURE_SLOT, 2, contact_name="", contact_phone="+1 555 0100"
        )
        data = json.loads(text)

        assert data["success"] is False
        assert "Contact name" in data["message"]
        assert data["status"] == "rejected"
        assert "confirmationCode" not in data

    async def test_outcome_shape(self, handlers):
        """Test that the payload carries the outcome fields."""
        text = await handlers.make_reservation(
            "place-1", FUTURE_SLOT, 2, contact_name="Ada", contact_phone="+1 555 0100"
        )
        data = json.loads(text)

        assert data["status"] in ("confirmed", "declined")
        if data["success"]:
            assert data["confirmationCode"].startswith("RES-")
        else:
            assert "confirmationCode" not in data

    async def test_malformed_party_size(self, handlers):
        """Test that a non-numeric party size is rejected, not raised."""
        text = await handlers.make_reservation(
            "place-1", FUTURE_SLOT, "many", contact_name="Ada", contact_phone="555"
        )
        data = json.loads(text)

        assert data["success"] is False
        assert data["status"] == "rejected"

    async def test_not_found(self, handlers):
        text = await handlers.make_reservation(
            "missing", FUTURE_SLOT, 2, contact_name="Ada", contact_phone="555"
        )

        assert text == NOT_FOUND_MESSAGE

    async def test_upstream_error(self, failing_catalog, config):
        handlers = ToolHandlers(failing_catalog, config=config)

        text = await handlers.make_reservation(
            "place-1", FUTURE_SLOT, 2, contact_name="Ada", contact_phone="555"
        )

        assert text.startswith("Error making reservation:")


class TestGlobalHandlers:
    """Tests for the shared handlers instance."""

    def test_set_and_get(self, handlers):
        """Test that installed handlers are returned until reset."""
        set_tool_handlers(handlers)
        try:
            assert get_tool_handlers() is handlers
        finally:
            set_tool_handlers(None)
