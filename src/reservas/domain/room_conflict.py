"""Room conflict detection.

Checks whether a room already has a reservation overlapping the requested
stay.

Overlap formula:  (existing_end > new_start) AND (existing_start < new_end)
Strict inequality allows check-out day == check-in day (back-to-back stays).
"""

from __future__ import annotations

from datetime import date

from psycopg2.extensions import cursor as PgCursor

from reservas.domain.models import Reservation
from reservas.domain.rules import ReservationValidationError
from reservas.infra.repositories.reservations_repository import find_overlapping
from reservas.observability.logging import get_logger, log_fields

logger = get_logger(__name__)


class ConflictViolation(ReservationValidationError):
    """Raised when a room already has an overlapping reservation."""

    def __init__(
        self,
        message: str,
        *,
        room_number: str,
        conflicting_reservation_id: int | None = None,
    ) -> None:
        self.room_number = room_number
        self.conflicting_reservation_id = conflicting_reservation_id
        super().__init__(message)


def booked_message(room_number: str, start_date: date, end_date: date) -> str:
    return f"Room {room_number} is already booked from {start_date} to {end_date}."


def booked_by_another_message(room_number: str) -> str:
    return f"Room {room_number} is already booked by another reservation in this new period."


def find_room_conflicts(
    cur: PgCursor,
    *,
    room_number: str,
    start_date: date,
    end_date: date,
    exclude_reservation_id: int | None = None,
) -> list[Reservation]:
    """List reservations that block the room for [start_date, end_date).

    Args:
        cur: Database cursor (should be within a transaction).
        room_number: Room being booked.
        start_date: Desired check-in date (inclusive).
        end_date: Desired check-out date (exclusive / departure day).
        exclude_reservation_id: Reservation being edited. Its own row may
            match the overlap query and is not a conflict.

    Returns:
        Conflicting reservations, empty when the room is free.
    """
    overlapping = find_overlapping(
        cur,
        room_number=room_number,
        start_date=start_date,
        end_date=end_date,
    )
    if exclude_reservation_id is None:
        return overlapping
    return [r for r in overlapping if r.id != exclude_reservation_id]


def check_availability(
    cur: PgCursor,
    *,
    room_number: str,
    start_date: date,
    end_date: date,
    exclude_reservation_id: int | None = None,
) -> None:
    """Raise ConflictViolation if the room is taken in the requested period.

    With no exclude_reservation_id (creation) any overlapping row rejects;
    otherwise only a row with a different id does.
    """
    conflicts = find_room_conflicts(
        cur,
        room_number=room_number,
        start_date=start_date,
        end_date=end_date,
        exclude_reservation_id=exclude_reservation_id,
    )
    if not conflicts:
        return

    first = conflicts[0]
    logger.warning(
        "room conflict detected",
        extra=log_fields(
            room_number=room_number,
            requested_start_date=start_date.isoformat(),
            requested_end_date=end_date.isoformat(),
            excluded_reservation_id=exclude_reservation_id,
            conflicting_reservation_id=first.id,
            existing_start_date=first.start_date.isoformat(),
            existing_end_date=first.end_date.isoformat(),
        ),
    )

    if exclude_reservation_id is None:
        message = booked_message(room_number, start_date, end_date)
    else:
        message = booked_by_another_message(room_number)
    raise ConflictViolation(
        message,
        room_number=room_number,
        conflicting_reservation_id=first.id,
    )
