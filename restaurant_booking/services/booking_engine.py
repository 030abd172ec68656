"""Reservation decisions without a restaurant-side inventory system.

No real point-of-sale integration exists, so availability is synthetic: a
stable hash of the (place, date/time, party size) triple decides it. The same
request always gets the same verdict, and the same confirmation code.
"""

import hashlib
import logging
import re
from datetime import datetime

from restaurant_booking.models import (
    AvailabilityVerdict,
    ReservationOutcome,
    ReservationRequest,
    ReservationStatus,
    RestaurantRecord,
)

logger = logging.getLogger(__name__)

MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 20

BASE_AVAILABILITY = 0.75
LARGE_PARTY_THRESHOLD = 8
LARGE_PARTY_PENALTY = 0.30
OFF_HOURS_PENALTY = 0.30
EARLIEST_REGULAR_HOUR = 11
LATEST_REGULAR_HOUR = 22

CONFIRMATION_PREFIX = "RES-"


def _stable_fraction(*parts: object) -> float:
    """Map ``parts`` onto [0, 1) independently of process and platform."""
    digest = hashlib.sha256("|".join(str(p) for p in parts).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") / 2**64


def _as_aware(moment: datetime) -> datetime:
    """Attach the local timezone to naive values; aware values are kept as-is."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


def _format_when(moment: datetime) -> str:
    return moment.strftime("%A, %B %d, %Y at %I:%M %p")


class BookingEngine:
    """Validates reservation requests and decides availability.

    Stateless apart from the optional clock override used by tests.
    """

    def check_availability(
        self,
        restaurant: RestaurantRecord,
        date_time: str,
        party_size: int,
        *,
        now: datetime | None = None,
    ) -> AvailabilityVerdict:
        """Check whether a table is available.

        Args:
            restaurant: Restaurant to book at
            date_time: Requested date and time, ISO 8601. Naive values are
                taken as local time.
            party_size: Number of people, 1-20
            now: Reference time for the past-date check (defaults to now)

        Returns:
            AvailabilityVerdict; validation problems produce ``available=False``

        Raises:
            ValueError: If no restaurant is given
        """
        verdict, _status = self._evaluate(restaurant, date_time, party_size, now)
        return verdict

    def make_reservation(
        self,
        restaurant: RestaurantRecord,
        request: ReservationRequest,
        *,
        now: datetime | None = None,
    ) -> ReservationOutcome:
        """Attempt to reserve a table.

        Contact details are validated before availability is looked at.

        Args:
            restaurant: Restaurant to book at
            request: Reservation details
            now: Reference time for the past-date check (defaults to now)

        Returns:
            ReservationOutcome with a deterministic confirmation code on success

        Raises:
            ValueError: If no restaurant is given
        """
        if restaurant is None:
            raise ValueError("restaurant is required")

        logger.info(
            f"Reservation {ReservationStatus.REQUESTED.value} at {restaurant.name} "
            f"for {request.party_size} on {request.date_time}"
        )

        if not (request.contact_name or "").strip():
            return self._rejected("Contact name is required to make a reservation.")
        if not (request.contact_phone or "").strip():
            return self._rejected("Contact phone is required to make a reservation.")

        verdict, status = self._evaluate(
            restaurant, request.date_time, request.party_size, now
        )
        if not verdict.available:
            logger.info(f"Reservation at {restaurant.name} {status.value}")
            return ReservationOutcome(
                success=False, message=verdict.message, status=status
            )

        moment = datetime.fromisoformat(request.date_time)
        code = self._confirmation_code(
            restaurant.place_id, moment, request.party_size, request.contact_phone
        )
        message = (
            f"Reservation confirmed at {restaurant.name} for {request.party_size} "
            f"{'person' if request.party_size == 1 else 'people'} on "
            f"{_format_when(moment)} under the name {request.contact_name.strip()}."
        )
        if request.special_requests:
            message += f" Special requests noted: {request.special_requests}"

        logger.info(f"Reservation confirmed at {restaurant.name}: {code}")
        return ReservationOutcome(
            success=True,
            message=message,
            confirmation_code=code,
            status=ReservationStatus.CONFIRMED,
        )

    def booking_instructions(self, restaurant: RestaurantRecord) -> str:
        """Describe how to book a table at ``restaurant``.

        Args:
            restaurant: Restaurant to describe

        Returns:
            Plain-text instructions
        """
        if restaurant is None:
            raise ValueError("restaurant is required")

        lines = [f"Booking instructions for {restaurant.name}"]
        if restaurant.address:
            lines.append(f"Address: {restaurant.address}")
        lines.append("")

        if restaurant.reservable is True:
            lines.append("This restaurant accepts reservations.")
        elif restaurant.reservable is False:
            lines.append(
                "This restaurant does not accept reservations. "
                "Seating is first come, first served."
            )
        else:
            lines.append(
                "Reservation policy is unknown. Contact the restaurant to confirm."
            )

        channels = []
        if restaurant.phone_number:
            channels.append(f"- Call {restaurant.phone_number}")
        if restaurant.website:
            channels.append(f"- Visit {restaurant.website}")
        if restaurant.google_maps_url:
            channels.append(f"- View on Google Maps: {restaurant.google_maps_url}")

        if channels:
            lines.append("")
            lines.append("How to reach them:")
            lines.extend(channels)
        else:
            lines.append("No phone number or website is listed; consider visiting in person.")

        hours = restaurant.opening_hours
        if hours and hours.weekday_text:
            lines.append("")
            lines.append("Opening hours:")
            lines.extend(f"- {day}" for day in hours.weekday_text)

        return "\n".join(lines)

    def _evaluate(
        self,
        restaurant: RestaurantRecord,
        date_time: str,
        party_size: int,
        now: datetime | None,
    ) -> tuple[AvailabilityVerdict, ReservationStatus]:
        if restaurant is None:
            raise ValueError("restaurant is required")

        try:
            moment = datetime.fromisoformat(date_time)
        except (TypeError, ValueError):
            return (
                self._unavailable(
                    f"Invalid date/time format: {date_time!r}. "
                    "Please use ISO 8601, e.g. 2024-01-15T19:00:00."
                ),
                ReservationStatus.REJECTED,
            )

        reference = now if now is not None else datetime.now(moment.tzinfo)
        try:
            is_past = _as_aware(moment) <= _as_aware(reference)
        except (OverflowError, OSError):
            # Local-time conversion fails at the ends of the datetime range
            is_past = moment.replace(tzinfo=None) <= reference.replace(tzinfo=None)
        if is_past:
            return (
                self._unavailable(
                    "Cannot make reservations for past dates. "
                    "Please choose a future date and time."
                ),
                ReservationStatus.REJECTED,
            )

        if (
            isinstance(party_size, bool)
            or not isinstance(party_size, int)
            or not MIN_PARTY_SIZE <= party_size <= MAX_PARTY_SIZE
        ):
            return (
                self._unavailable(
                    f"Party size must be a whole number between {MIN_PARTY_SIZE} "
                    f"and {MAX_PARTY_SIZE}, got {party_size!r}."
                ),
                ReservationStatus.REJECTED,
            )

        if restaurant.reservable is False:
            return (
                self._unavailable(
                    f"{restaurant.name} does not accept reservations. "
                    "Walk-in seating may be available."
                ),
                ReservationStatus.DECLINED,
            )

        logger.debug(f"Request for {restaurant.place_id} {ReservationStatus.VALIDATED.value}")

        slot = moment.isoformat()
        draw = _stable_fraction(restaurant.place_id, slot, party_size)
        threshold = self._availability_threshold(moment, party_size)
        logger.debug(
            f"Availability draw for {restaurant.place_id} at {slot}: "
            f"{draw:.3f} < {threshold:.2f}"
        )

        if draw >= threshold:
            return (
                self._unavailable(
                    f"{restaurant.name} has no availability for {party_size} on "
                    f"{_format_when(moment)}. Please try a different time or "
                    "contact the restaurant directly."
                ),
                ReservationStatus.DECLINED,
            )

        return (
            AvailabilityVerdict(
                available=True,
                message=(
                    f"{restaurant.name} has availability for {party_size} on "
                    f"{_format_when(moment)}."
                ),
                suggested_slots=[slot],
            ),
            ReservationStatus.AVAILABILITY_DETERMINED,
        )

    @staticmethod
    def _availability_threshold(moment: datetime, party_size: int) -> float:
        threshold = BASE_AVAILABILITY
        if party_size > LARGE_PARTY_THRESHOLD:
            threshold -= LARGE_PARTY_PENALTY
        minutes = moment.hour * 60 + moment.minute
        if minutes < EARLIEST_REGULAR_HOUR * 60 or minutes > LATEST_REGULAR_HOUR * 60:
            threshold -= OFF_HOURS_PENALTY
        return threshold

    @staticmethod
    def _confirmation_code(
        place_id: str, moment: datetime, party_size: int, contact_phone: str
    ) -> str:
        phone_digits = re.sub(r"\D", "", contact_phone)
        digest = hashlib.sha256(
            f"{place_id}|{moment.isoformat()}|{party_size}|{phone_digits}".encode("utf-8")
        ).hexdigest()
        return CONFIRMATION_PREFIX + digest[:8].upper()

    @staticmethod
    def _unavailable(message: str) -> AvailabilityVerdict:
        return AvailabilityVerdict(available=False, message=message)

    @staticmethod
    def _rejected(message: str) -> ReservationOutcome:
        return ReservationOutcome(
            success=False, message=message, status=ReservationStatus.REJECTED
        )
