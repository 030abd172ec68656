"""Restaurant scoring and ranking."""

import logging
import math
from dataclasses import dataclass

from restaurant_booking.models import Recommendation, RestaurantRecord, SearchCriteria
from restaurant_booking.services.lexicon import (
    EVENT_LEXICON,
    MOOD_LEXICON,
    AttributePredicate,
    implied_attributes,
)

logger = logging.getLogger(__name__)

QUALITY_WEIGHT = 0.30
PRICE_WEIGHT = 0.15
MOOD_WEIGHT = 0.175
EVENT_WEIGHT = 0.175
PROXIMITY_WEIGHT = 0.20

NEUTRAL_QUALITY = 5.0
NEUTRAL_PRICE = 7.0
NEUTRAL_LEXICON = 5.0
NEUTRAL_PROXIMITY = 10.0

MAX_CONFIDENCE_BONUS = 1.0
# Ratings from ~1000 reviews earn the full bonus
CONFIDENCE_LOG_SCALE = 3.0
FULL_PROXIMITY_FRACTION = 0.2
EXPLANATION_THRESHOLD = 1.0


def _clamp(value: float) -> float:
    return max(0.0, min(10.0, value))


@dataclass(frozen=True)
class SubScore:
    """One scoring axis and its explanation."""

    value: float
    neutral: float
    explanation: str

    @property
    def is_notable(self) -> bool:
        return abs(self.value - self.neutral) > EXPLANATION_THRESHOLD


class RecommendationEngine:
    """Scores restaurants against search criteria and ranks them.

    The engine is stateless: ``rank`` is a pure function of its arguments, so
    one instance can be shared across concurrent requests.
    """

    def rank(
        self, restaurants: list[RestaurantRecord], criteria: SearchCriteria
    ) -> list[Recommendation]:
        """Score every restaurant and return them best first.

        Args:
            restaurants: Candidate restaurants, possibly empty
            criteria: Search criteria the restaurants were fetched for

        Returns:
            One recommendation per restaurant, sorted by descending score with
            ties broken by rating, review count and name
        """
        recommendations = [self.score(r, criteria) for r in restaurants]
        recommendations.sort(key=self._sort_key)
        logger.debug(
            f"Ranked {len(recommendations)} restaurants "
            f"(mood={criteria.mood!r}, event={criteria.event!r})"
        )
        return recommendations

    def score(
        self, restaurant: RestaurantRecord, criteria: SearchCriteria
    ) -> Recommendation:
        """Score a single restaurant.

        Args:
            restaurant: Restaurant to score
            criteria: Search criteria to score against

        Returns:
            Recommendation with composite score and reasoning
        """
        quality = self._quality(restaurant)
        price = self._price_fit(restaurant, criteria)
        mood = self._lexicon_fit(restaurant, criteria.mood, MOOD_LEXICON, "mood")
        event = self._lexicon_fit(restaurant, criteria.event, EVENT_LEXICON, "event")
        proximity = self._proximity(restaurant, criteria)

        composite = _clamp(
            QUALITY_WEIGHT * quality.value
            + PRICE_WEIGHT * price.value
            + MOOD_WEIGHT * mood.value
            + EVENT_WEIGHT * event.value
            + PROXIMITY_WEIGHT * proximity.value
        )

        reasoning = [
            sub.explanation
            for sub in (quality, price, mood, event, proximity)
            if sub.is_notable
        ]

        return Recommendation(
            restaurant=restaurant,
            score=composite,
            reasoning=reasoning,
            suitability_for_event=event.value,
            mood_match=mood.value,
        )

    @staticmethod
    def _sort_key(rec: Recommendation) -> tuple:
        rating = rec.restaurant.rating
        return (
            -rec.score,
            rating is None,
            -(rating or 0.0),
            -rec.restaurant.user_ratings_total,
            rec.restaurant.name,
        )

    @staticmethod
    def _quality(restaurant: RestaurantRecord) -> SubScore:
        if restaurant.rating is None:
            return SubScore(NEUTRAL_QUALITY, NEUTRAL_QUALITY, "No rating available")

        reviews = restaurant.user_ratings_total
        bonus = min(
            MAX_CONFIDENCE_BONUS, math.log10(1 + reviews) / CONFIDENCE_LOG_SCALE
        )
        value = _clamp(restaurant.rating * 2 + bonus)

        if value >= NEUTRAL_QUALITY:
            explanation = (
                f"Highly rated: {restaurant.rating:.1f}/5 from {reviews} reviews"
            )
        else:
            explanation = (
                f"Low rating: {restaurant.rating:.1f}/5 from {reviews} reviews"
            )
        return SubScore(value, NEUTRAL_QUALITY, explanation)

    @staticmethod
    def _price_fit(restaurant: RestaurantRecord, criteria: SearchCriteria) -> SubScore:
        if restaurant.price_level is None or criteria.price_level is None:
            return SubScore(NEUTRAL_PRICE, NEUTRAL_PRICE, "No price preference applied")

        gap = abs(restaurant.price_level - criteria.price_level)
        value = _clamp(10.0 - 2.5 * gap)
        if gap == 0:
            explanation = f"Matches your price preference (level {criteria.price_level})"
        else:
            explanation = (
                f"Price level {restaurant.price_level} differs from your "
                f"preferred level {criteria.price_level}"
            )
        return SubScore(value, NEUTRAL_PRICE, explanation)

    @staticmethod
    def _lexicon_fit(
        restaurant: RestaurantRecord,
        text: str,
        lexicon: dict[str, tuple[AttributePredicate, ...]],
        axis: str,
    ) -> SubScore:
        tokens, predicates = implied_attributes(text, lexicon)
        if not predicates:
            return SubScore(
                NEUTRAL_LEXICON, NEUTRAL_LEXICON, f"Unrecognized {axis} {text!r}"
            )

        met = [p.label for p in predicates if p.matches(restaurant)]
        missing = [p.label for p in predicates if not p.matches(restaurant)]
        value = _clamp(10.0 * len(met) / len(predicates))
        subject = " ".join(tokens)

        if value >= NEUTRAL_LEXICON:
            explanation = f"Good fit for a {subject} {axis}: {', '.join(met)}"
        else:
            explanation = f"Weak fit for a {subject} {axis}, lacks {', '.join(missing)}"
        return SubScore(value, NEUTRAL_LEXICON, explanation)

    @staticmethod
    def _proximity(restaurant: RestaurantRecord, criteria: SearchCriteria) -> SubScore:
        distance = restaurant.distance
        radius = float(criteria.radius)

        if distance is None or distance <= FULL_PROXIMITY_FRACTION * radius:
            return SubScore(NEUTRAL_PROXIMITY, NEUTRAL_PROXIMITY, "Close by")

        full_range = radius * (1 - FULL_PROXIMITY_FRACTION)
        value = _clamp(10.0 * (radius - distance) / full_range)
        if distance > radius:
            explanation = f"Outside the search radius ({distance:.0f} m away)"
        else:
            explanation = f"Farther away ({distance:.0f} m of {radius:.0f} m radius)"
        return SubScore(value, NEUTRAL_PROXIMITY, explanation)
