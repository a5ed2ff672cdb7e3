"""Business rules checked before a reservation is written.

Rules are plain functions that return None when the reservation passes and
raise a ReservationValidationError subclass when it does not. The room
availability rule needs storage and lives in room_conflict.
"""

from __future__ import annotations

from datetime import date

from reservas.domain.models import Reservation
from reservas.infra.time import today as current_date


class ReservationValidationError(Exception):
    """Raised when a reservation breaks a business rule.

    The message is meant for the API caller.
    """

    pass


class DateRuleViolation(ReservationValidationError):
    """Raised when the stay dates are inverted, empty or in the past."""

    pass


class GuestRuleViolation(ReservationValidationError):
    """Raised when the guest reference is missing or not positive."""

    pass


END_NOT_AFTER_START_MESSAGE = "The reservation end date must be after the start date."
START_IN_PAST_MESSAGE = "Reservations cannot be scheduled for past dates."
INVALID_GUEST_MESSAGE = "The guest ID is required and must be valid."


def validate_dates(reservation: Reservation, *, today: date | None = None) -> None:
    """Check the stay dates of a reservation.

    Args:
        reservation: Candidate reservation (dates must be set).
        today: Reference date. Defaults to the current date in APP_TIMEZONE.

    Raises:
        DateRuleViolation: If end_date <= start_date (a zero-night stay is
            rejected) or start_date is before today. Checking in today is
            allowed.
    """
    if reservation.end_date <= reservation.start_date:
        raise DateRuleViolation(END_NOT_AFTER_START_MESSAGE)

    if today is None:
        today = current_date()
    if reservation.start_date < today:
        raise DateRuleViolation(START_IN_PAST_MESSAGE)


def validate_guest(guest_id: int | None) -> None:
    """Check the guest reference.

    Only presence and sign are checked; there is no guest registry.

    Raises:
        GuestRuleViolation: If guest_id is None or <= 0.
    """
    if guest_id is None or guest_id <= 0:
        raise GuestRuleViolation(INVALID_GUEST_MESSAGE)
