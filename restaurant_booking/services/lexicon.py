"""Mood and event lexicons used for explainable restaurant scoring.

Each lexicon maps a lowercase token to the restaurant attributes it implies.
Attributes are tagged predicates over a :class:`RestaurantRecord`, so matching
is one generic loop no matter how many tokens the lexicons hold.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from restaurant_booking.models import RestaurantRecord


@dataclass(frozen=True)
class AttributePredicate:
    """A named test of one restaurant attribute.

    Attributes:
        tag: Stable identifier, used to de-duplicate predicates across tokens
        label: Human-readable description used in explanations
        test: Returns True when the restaurant satisfies the attribute
    """

    tag: str
    label: str
    test: Callable[[RestaurantRecord], bool]

    def matches(self, restaurant: RestaurantRecord) -> bool:
        return self.test(restaurant)


def _flag(field: str, label: str) -> AttributePredicate:
    # Unknown (None) flags never satisfy a predicate
    return AttributePredicate(
        tag=field, label=label, test=lambda r: getattr(r, field) is True
    )


def _any_flag(fields: tuple[str, ...], label: str) -> AttributePredicate:
    return AttributePredicate(
        tag="|".join(fields),
        label=label,
        test=lambda r: any(getattr(r, f) is True for f in fields),
    )


def _price_at_least(level: int, label: str) -> AttributePredicate:
    return AttributePredicate(
        tag=f"price>={level}",
        label=label,
        test=lambda r: r.price_level is not None and r.price_level >= level,
    )


def _price_at_most(level: int, label: str) -> AttributePredicate:
    return AttributePredicate(
        tag=f"price<={level}",
        label=label,
        test=lambda r: r.price_level is not None and r.price_level <= level,
    )


PRICE_AT_LEAST_2 = _price_at_least(2, "mid-range or higher prices")
PRICE_AT_LEAST_3 = _price_at_least(3, "upscale prices")
PRICE_AT_MOST_2 = _price_at_most(2, "affordable prices")
PRICE_AT_MOST_3 = _price_at_most(3, "reasonable prices for a group")
SERVES_ALCOHOL = _any_flag(("serves_wine", "serves_beer"), "serves wine or beer")
SERVES_WINE = _flag("serves_wine", "serves wine")
SERVES_BEER = _flag("serves_beer", "serves beer")
DINE_IN = _flag("dine_in", "dine-in seating")
RESERVABLE = _flag("reservable", "takes reservations")
SERVES_DINNER = _flag("serves_dinner", "serves dinner")
SERVES_BRUNCH = _flag("serves_brunch", "serves brunch")
SERVES_VEGETARIAN = _flag("serves_vegetarian_food", "vegetarian options")
TAKEOUT_OR_DELIVERY = _any_flag(("takeout", "delivery"), "takeout or delivery")
DELIVERY_OR_DINE_IN = _any_flag(("delivery", "dine_in"), "delivery or dine-in")

ROMANTIC = (PRICE_AT_LEAST_3, SERVES_ALCOHOL, DINE_IN)
CASUAL = (PRICE_AT_MOST_2, TAKEOUT_OR_DELIVERY)
UPSCALE = (PRICE_AT_LEAST_3, RESERVABLE, SERVES_WINE)
FUN = (SERVES_BEER, DINE_IN, PRICE_AT_MOST_3)
QUIET = (DINE_IN, RESERVABLE)
HEALTHY = (SERVES_VEGETARIAN,)

DATING = (SERVES_DINNER, RESERVABLE)
BUSINESS = (RESERVABLE, DINE_IN, PRICE_AT_LEAST_2)
GATHERING = (DELIVERY_OR_DINE_IN, PRICE_AT_MOST_3)
CELEBRATION = (SERVES_ALCOHOL, PRICE_AT_LEAST_3)
FAMILY = (DINE_IN, SERVES_VEGETARIAN, PRICE_AT_MOST_3)
BRUNCH = (SERVES_BRUNCH, DINE_IN)

MOOD_LEXICON: dict[str, tuple[AttributePredicate, ...]] = {
    "romantic": ROMANTIC,
    "intimate": ROMANTIC,
    "casual": CASUAL,
    "relaxed": CASUAL,
    "upscale": UPSCALE,
    "fancy": UPSCALE,
    "elegant": UPSCALE,
    "fun": FUN,
    "lively": FUN,
    "quiet": QUIET,
    "cozy": QUIET,
    "healthy": HEALTHY,
    "vegetarian": HEALTHY,
}

EVENT_LEXICON: dict[str, tuple[AttributePredicate, ...]] = {
    "dating": DATING,
    "date": DATING,
    "business": BUSINESS,
    "meeting": BUSINESS,
    "gathering": GATHERING,
    "friends": GATHERING,
    "celebration": CELEBRATION,
    "party": CELEBRATION,
    "birthday": CELEBRATION,
    "anniversary": CELEBRATION,
    "casual": CASUAL,
    "family": FAMILY,
    "brunch": BRUNCH,
}

_TOKEN_PATTERN = re.compile(r"[a-z]+")


def implied_attributes(
    text: str, lexicon: dict[str, tuple[AttributePredicate, ...]]
) -> tuple[list[str], list[AttributePredicate]]:
    """Look up every recognized token of ``text`` in ``lexicon``.

    Args:
        text: Free-text mood or event, matched case-insensitively
        lexicon: Token to predicate mapping

    Returns:
        Tuple of (recognized tokens, predicates they imply). Predicates shared
        by several tokens appear once, in first-seen order.
    """
    tokens: list[str] = []
    predicates: dict[str, AttributePredicate] = {}

    for token in _TOKEN_PATTERN.findall(text.lower()):
        if token not in lexicon or token in tokens:
            continue
        tokens.append(token)
        for predicate in lexicon[token]:
            predicates.setdefault(predicate.tag, predicate)

    return tokens, list(predicates.values())
