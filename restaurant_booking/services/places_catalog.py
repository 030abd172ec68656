"""Restaurant catalog backed by the Google Places API (New)."""

import logging
import math
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from restaurant_booking.config import get_config
from restaurant_booking.errors import UpstreamError
from restaurant_booking.models import (
    Location,
    OpeningHours,
    RestaurantRecord,
    SearchCriteria,
)

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6371000.0
MAX_API_RADIUS = 50000.0

PRICE_LEVELS = {
    "PRICE_LEVEL_INEXPENSIVE": 1,
    "PRICE_LEVEL_MODERATE": 2,
    "PRICE_LEVEL_EXPENSIVE": 3,
    "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}

SERVICE_FLAGS = {
    "reservable": "reservable",
    "curbsidePickup": "curbside_pickup",
    "delivery": "delivery",
    "dineIn": "dine_in",
    "takeout": "takeout",
    "servesBreakfast": "serves_breakfast",
    "servesLunch": "serves_lunch",
    "servesDinner": "serves_dinner",
    "servesBrunch": "serves_brunch",
    "servesBeer": "serves_beer",
    "servesWine": "serves_wine",
    "servesVegetarianFood": "serves_vegetarian_food",
}

PLACE_FIELDS = [
    "id",
    "displayName",
    "formattedAddress",
    "location",
    "rating",
    "userRatingCount",
    "priceLevel",
    "types",
    "regularOpeningHours",
    "currentOpeningHours",
    "nationalPhoneNumber",
    "internationalPhoneNumber",
    "websiteUri",
    "googleMapsUri",
    *SERVICE_FLAGS,
]


class PlaceCatalog(Protocol):
    """Source of normalized restaurant records."""

    async def search(self, criteria: SearchCriteria) -> list[RestaurantRecord]:
        """Find restaurants matching ``criteria``."""
        ...

    async def get_details(
        self, place_id: str, locale: str
    ) -> RestaurantRecord | None:
        """Fetch one restaurant, or None when the place does not exist."""
        ...


def distance_meters(origin: Location, target: Location) -> float:
    """Great-circle distance between two points (haversine formula)."""
    dlat = math.radians(target.latitude - origin.latitude)
    dlon = math.radians(target.longitude - origin.longitude)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(target.latitude))
        * math.sin(dlon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))


def parse_place(
    place: dict[str, Any], origin: Location | None = None
) -> RestaurantRecord:
    """Convert a Places API place resource into a RestaurantRecord.

    Args:
        place: Place resource as returned by the API
        origin: Search origin used to compute ``distance``

    Returns:
        Normalized restaurant record
    """
    location = None
    if place.get("location"):
        location = Location(
            latitude=place["location"]["latitude"],
            longitude=place["location"]["longitude"],
        )

    opening_hours = None
    regular = place.get("regularOpeningHours") or {}
    current = place.get("currentOpeningHours") or {}
    if regular or current:
        opening_hours = OpeningHours(
            open_now=current.get("openNow", regular.get("openNow")),
            weekday_text=regular.get("weekdayDescriptions", []),
        )

    cuisine_types = [
        t.removesuffix("_restaurant").replace("_", " ").title()
        for t in place.get("types", [])
        if t.endswith("_restaurant") and t != "restaurant"
    ]

    distance = None
    if origin is not None and location is not None:
        distance = round(distance_meters(origin, location), 1)

    flags = {
        field: place[api_name]
        for api_name, field in SERVICE_FLAGS.items()
        if api_name in place
    }

    return RestaurantRecord(
        place_id=place["id"],
        name=(place.get("displayName") or {}).get("text", ""),
        address=place.get("formattedAddress"),
        location=location,
        rating=place.get("rating"),
        user_ratings_total=place.get("userRatingCount", 0),
        price_level=PRICE_LEVELS.get(place.get("priceLevel", "")),
        cuisine_types=cuisine_types,
        opening_hours=opening_hours,
        phone_number=place.get("internationalPhoneNumber")
        or place.get("nationalPhoneNumber"),
        website=place.get("websiteUri"),
        google_maps_url=place.get("googleMapsUri"),
        distance=distance,
        **flags,
    )


class GooglePlacesCatalog:
    """Place catalog using the Google Places API (New) over HTTP.

    Attributes:
        api_key: Google Maps API key
        max_results: Maximum number of places requested per search
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        max_results: int | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            api_key: Google Maps API key (defaults to config)
            client: HTTP client to use (defaults to one built from config)
            max_results: Places per search (defaults to config)
        """
        config = get_config()
        self.api_key = api_key or config.google_maps_api_key
        self.max_results = max_results or config.places_max_results
        self._client = client or httpx.AsyncClient(
            base_url=config.places_api_base_url,
            timeout=config.places_request_timeout,
        )

        if not self.api_key:
            logger.warning("Google Places catalog created without an API key")

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def search(self, criteria: SearchCriteria) -> list[RestaurantRecord]:
        """Search for restaurants around the criteria's location.

        Records farther than ``criteria.radius`` from the origin are dropped.

        Raises:
            UpstreamError: If the Places API fails
        """
        origin = criteria.location
        if origin is None:
            origin = await self._geocode(criteria.place_name, criteria.locale)
            if origin is None:
                logger.info(f"No location found for place name {criteria.place_name!r}")
                return []

        circle = {
            "center": {"latitude": origin.latitude, "longitude": origin.longitude},
            "radius": min(float(criteria.radius), MAX_API_RADIUS),
        }
        text_query = " ".join(
            part for part in [criteria.keyword, *criteria.cuisine_types] if part
        )

        if text_query:
            logger.info(f"Text search for {text_query!r} within {criteria.radius} m")
            data = await self._post(
                "/places:searchText",
                {
                    "textQuery": f"{text_query} restaurant",
                    "includedType": "restaurant",
                    "languageCode": criteria.locale,
                    "pageSize": self.max_results,
                    "locationBias": {"circle": circle},
                },
            )
        else:
            logger.info(f"Nearby search within {criteria.radius} m")
            data = await self._post(
                "/places:searchNearby",
                {
                    "includedTypes": ["restaurant"],
                    "languageCode": criteria.locale,
                    "maxResultCount": self.max_results,
                    "locationRestriction": {"circle": circle},
                },
            )

        records = [parse_place(place, origin) for place in data.get("places", [])]
        in_range = [
            r for r in records if r.distance is None or r.distance <= criteria.radius
        ]
        logger.info(
            f"Found {len(in_range)} restaurants ({len(records) - len(in_range)} out of range)"
        )
        return in_range

    async def get_details(
        self, place_id: str, locale: str
    ) -> RestaurantRecord | None:
        """Fetch a restaurant by place ID.

        Returns:
            The restaurant, or None if the place ID is unknown or malformed

        Raises:
            UpstreamError: If the Places API fails for any other reason
        """
        logger.info(f"Fetching details for place {place_id}")
        try:
            place = await self._request(
                "GET",
                f"/places/{quote(place_id, safe='')}",
                field_mask=",".join(PLACE_FIELDS),
                params={"languageCode": locale},
            )
        except UpstreamError as e:
            if e.status_code in (400, 404):
                logger.info(f"Place {place_id} not found ({e})")
                return None
            raise
        return parse_place(place)

    async def _geocode(self, place_name: str, locale: str) -> Location | None:
        data = await self._request(
            "POST",
            "/places:searchText",
            field_mask="places.location",
            json={"textQuery": place_name, "languageCode": locale, "pageSize": 1},
        )
        places = data.get("places", [])
        if not places or "location" not in places[0]:
            return None
        loc = places[0]["location"]
        return Location(latitude=loc["latitude"], longitude=loc["longitude"])

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        field_mask = ",".join(f"places.{field}" for field in PLACE_FIELDS)
        return await self._request("POST", path, field_mask=field_mask, json=body)

    async def _request(
        self, method: str, path: str, *, field_mask: str, **kwargs: Any
    ) -> dict[str, Any]:
        if not self.api_key:
            raise UpstreamError("GOOGLE_MAPS_API_KEY is not configured")

        headers = {"X-Goog-Api-Key": self.api_key, "X-Goog-FieldMask": field_mask}
        try:
            response = await self._client.request(
                method, path, headers=headers, **kwargs
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Places API request failed: {e}") from e

        if response.is_error:
            try:
                detail = response.json().get("error", {}).get("message", response.text)
            except ValueError:
                detail = response.text
            raise UpstreamError(
                f"Places API error {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        return response.json()
