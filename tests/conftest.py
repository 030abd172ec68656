"""Shared fixtures for the restaurant booking tests."""

from datetime import datetime

import pytest

from restaurant_booking.errors import UpstreamError
from restaurant_booking.models import RestaurantRecord, SearchCriteria

# Fixed clock for booking tests; requested slots are after it
NOW = datetime(2030, 1, 1, 12, 0)
FUTURE_SLOT = "2030-01-08T19:00:00"


def build_restaurant(**overrides) -> RestaurantRecord:
    """Create a restaurant record with sensible defaults."""
    fields = {
        "place_id": "place-1",
        "name": "Test Bistro",
        "address": "1 Test Street",
        "rating": 4.0,
        "user_ratings_total": 100,
        "price_level": 2,
        "phone_number": "+1 555-0100",
    }
    fields.update(overrides)
    return RestaurantRecord(**fields)


class FakeCatalog:
    """In-memory place catalog."""

    def __init__(
        self,
        restaurants: list[RestaurantRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.restaurants = restaurants or []
        self.error = error
        self.searches: list[SearchCriteria] = []
        self.lookups: list[tuple[str, str]] = []

    async def search(self, criteria: SearchCriteria) -> list[RestaurantRecord]:
        self.searches.append(criteria)
        if self.error:
            raise self.error
        return list(self.restaurants)

    async def get_details(self, place_id: str, locale: str) -> RestaurantRecord | None:
        self.lookups.append((place_id, locale))
        if self.error:
            raise self.error
        return next((r for r in self.restaurants if r.place_id == place_id), None)


@pytest.fixture
def make_restaurant():
    """Factory for restaurant records."""
    return build_restaurant


@pytest.fixture
def fake_catalog():
    """Catalog holding a single reservable restaurant."""
    return FakeCatalog([build_restaurant(reservable=True)])


@pytest.fixture
def failing_catalog():
    """Catalog whose every call fails upstream."""
    return FakeCatalog(error=UpstreamError("Places API error 500: boom", status_code=500))
