"""Restaurant and search data models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Location(BaseModel):
    """Geographic coordinates."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")


class OpeningHours(BaseModel):
    """Opening hours as reported by the mapping provider."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    open_now: bool | None = Field(None, description="Whether the place is open now")
    weekday_text: list[str] = Field(
        default_factory=list, description="Human-readable hours, one line per day"
    )


class RestaurantRecord(BaseModel):
    """Normalized restaurant data returned by the place catalog.

    Service flags are tri-state: ``True``/``False`` when the provider knows,
    ``None`` when it does not.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    place_id: str = Field(..., min_length=1, description="Provider place ID")
    name: str = Field(..., description="Restaurant name")
    address: str | None = Field(None, description="Formatted address")
    location: Location | None = Field(None, description="Restaurant coordinates")
    rating: float | None = Field(None, ge=0, le=5, description="Average rating")
    user_ratings_total: int = Field(default=0, ge=0, description="Number of ratings")
    price_level: int | None = Field(None, ge=1, le=4, description="Price level 1-4")
    cuisine_types: list[str] = Field(default_factory=list, description="Cuisines")

    reservable: bool | None = None
    curbside_pickup: bool | None = None
    delivery: bool | None = None
    dine_in: bool | None = None
    takeout: bool | None = None
    serves_breakfast: bool | None = None
    serves_lunch: bool | None = None
    serves_dinner: bool | None = None
    serves_brunch: bool | None = None
    serves_beer: bool | None = None
    serves_wine: bool | None = None
    serves_vegetarian_food: bool | None = None

    opening_hours: OpeningHours | None = Field(None, description="Opening hours")
    phone_number: str | None = Field(None, description="Phone number")
    website: str | None = Field(None, description="Website URL")
    google_maps_url: str | None = Field(None, description="Google Maps URL")
    distance: float | None = Field(
        None, ge=0, description="Distance from the search origin in meters"
    )


class SearchCriteria(BaseModel):
    """Restaurant search parameters.

    Exactly one location-selection mode is allowed: ``location`` or
    ``place_name``.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    location: Location | None = Field(None, description="Search origin")
    place_name: str | None = Field(None, description="Place name to search near")
    cuisine_types: list[str] = Field(default_factory=list, description="Cuisines")
    keyword: str | None = Field(None, description="Dish or food keyword")
    mood: str = Field(..., description="Desired mood or atmosphere")
    event: str = Field(..., description="Type of event or occasion")
    radius: int = Field(default=3000, gt=0, description="Search radius in meters")
    price_level: int | None = Field(None, ge=1, le=4, description="Target price level")
    locale: str = Field(default="en", description="Response locale")

    @model_validator(mode="after")
    def _check_location_mode(self) -> "SearchCriteria":
        has_place_name = bool(self.place_name and self.place_name.strip())
        if has_place_name == (self.location is not None):
            raise ValueError("Provide exactly one of location or placeName")
        return self
