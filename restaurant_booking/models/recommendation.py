"""Recommendation data model."""

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from restaurant_booking.models.restaurant import RestaurantRecord


class Recommendation(BaseModel):
    """A scored restaurant with the factors that drove its score.

    Scores are kept at full precision for ranking and rounded to one decimal
    only when serialized.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    restaurant: RestaurantRecord = Field(..., description="Scored restaurant")
    score: float = Field(..., ge=0, le=10, description="Composite score")
    reasoning: list[str] = Field(
        default_factory=list, description="Contributing factors, in scoring order"
    )
    suitability_for_event: float = Field(..., ge=0, le=10, description="Event fit")
    mood_match: float = Field(..., ge=0, le=10, description="Mood fit")

    @field_serializer("score", "suitability_for_event", "mood_match")
    def _round_for_display(self, value: float) -> float:
        return round(value, 1)
