"""Reservation use cases: create, update, delete, get, list.

Each operation runs in one short transaction. Writes go through the same
gate, in this order, stopping at the first failure:

    validate_dates -> check_availability -> validate_guest

The availability check is read-then-write. Two concurrent writers can both
pass it; the no_room_overlap exclusion constraint rejects the second insert
or update, which surfaces here as the same ConflictViolation.
"""

from __future__ import annotations

from psycopg2 import errors as pg_errors

from reservas.domain.models import Reservation
from reservas.domain.room_conflict import (
    ConflictViolation,
    booked_by_another_message,
    booked_message,
    check_availability,
)
from reservas.domain.rules import validate_dates, validate_guest
from reservas.infra.db import txn
from reservas.infra.repositories.reservations_repository import (
    delete_reservation as _delete_row,
    find_all,
    find_by_id,
    insert_reservation,
    update_reservation as _update_row,
)
from reservas.observability.logging import get_logger, log_fields

logger = get_logger(__name__)


class ReservationNotFoundError(Exception):
    """Raised when no reservation has the requested id."""

    def __init__(self, reservation_id: int) -> None:
        self.reservation_id = reservation_id
        super().__init__(f"Reservation with ID {reservation_id} not found.")


def _load(cur, reservation_id: int) -> Reservation:
    reservation = find_by_id(cur, reservation_id)
    if reservation is None:
        raise ReservationNotFoundError(reservation_id)
    return reservation


def list_reservations() -> list[Reservation]:
    """Return all reservations. No filtering, no pagination."""
    with txn() as cur:
        return find_all(cur)


def get_reservation(reservation_id: int) -> Reservation:
    """Return one reservation.

    Raises:
        ReservationNotFoundError: If the id is unknown.
    """
    with txn() as cur:
        return _load(cur, reservation_id)


def create_reservation(reservation: Reservation) -> Reservation:
    """Validate and store a new reservation.

    Any id on the incoming record is ignored; storage assigns identity.

    Returns:
        The stored reservation, with its id.

    Raises:
        DateRuleViolation: Bad or past dates.
        ConflictViolation: Room already booked for an overlapping stay.
        GuestRuleViolation: Missing or non-positive guest id.
    """
    validate_dates(reservation)

    with txn() as cur:
        check_availability(
            cur,
            room_number=reservation.room_number,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
        )
        validate_guest(reservation.guest_id)

        try:
            created = insert_reservation(cur, reservation)
        except pg_errors.ExclusionViolation as exc:
            raise ConflictViolation(
                booked_message(
                    reservation.room_number,
                    reservation.start_date,
                    reservation.end_date,
                ),
                room_number=reservation.room_number,
            ) from exc

    logger.info(
        "reservation created",
        extra=log_fields(
            reservation_id=created.id,
            room_number=created.room_number,
            start_date=created.start_date.isoformat(),
            end_date=created.end_date.isoformat(),
        ),
    )
    return created


def update_reservation(reservation_id: int, details: Reservation) -> Reservation:
    """Overwrite a reservation with new details and re-validate it.

    Room, dates and guest are taken from ``details``; the id is kept. The
    reservation's own current row never counts as a conflict.

    Raises:
        ReservationNotFoundError: If the id is unknown.
        DateRuleViolation, ConflictViolation, GuestRuleViolation: As for
            create_reservation.
    """
    with txn() as cur:
        existing = _load(cur, reservation_id)
        candidate = existing.with_details(details)

        validate_dates(candidate)
        check_availability(
            cur,
            room_number=candidate.room_number,
            start_date=candidate.start_date,
            end_date=candidate.end_date,
            exclude_reservation_id=reservation_id,
        )
        validate_guest(candidate.guest_id)

        try:
            updated = _update_row(cur, candidate)
        except pg_errors.ExclusionViolation as exc:
            raise ConflictViolation(
                booked_by_another_message(candidate.room_number),
                room_number=candidate.room_number,
            ) from exc

        # Deleted by a concurrent request between load and update.
        if updated is None:
            raise ReservationNotFoundError(reservation_id)

    logger.info(
        "reservation updated",
        extra=log_fields(
            reservation_id=updated.id,
            room_number=updated.room_number,
            start_date=updated.start_date.isoformat(),
            end_date=updated.end_date.isoformat(),
        ),
    )
    return updated


def delete_reservation(reservation_id: int) -> None:
    """Remove a reservation (hard delete).

    Raises:
        ReservationNotFoundError: If the id is unknown.
    """
    with txn() as cur:
        _load(cur, reservation_id)
        if not _delete_row(cur, reservation_id):
            raise ReservationNotFoundError(reservation_id)

    logger.info(
        "reservation deleted",
        extra=log_fields(reservation_id=reservation_id),
    )
