"""Reservations repository - persistence for reservation records.

Uses raw SQL with psycopg2 (no ORM). Every function takes a cursor opened by
the caller, so several calls can share one transaction.
"""

from datetime import date

from psycopg2.extensions import cursor as PgCursor

from reservas.domain.models import Reservation
from reservas.infra.db import fetchall, fetchone

_COLUMNS = "id, room_number, start_date, end_date, guest_id"


def _row_to_reservation(row: tuple) -> Reservation:
    return Reservation(
        id=row[0],
        room_number=row[1],
        start_date=row[2],
        end_date=row[3],
        guest_id=row[4],
    )


def find_all(cur: PgCursor) -> list[Reservation]:
    """Return every reservation, oldest id first."""
    rows = fetchall(cur, f"SELECT {_COLUMNS} FROM reservations ORDER BY id")
    return [_row_to_reservation(row) for row in rows]


def find_by_id(cur: PgCursor, reservation_id: int) -> Reservation | None:
    """Return the reservation with this id, or None."""
    row = fetchone(
        cur,
        f"SELECT {_COLUMNS} FROM reservations WHERE id = %s",
        (reservation_id,),
    )
    return _row_to_reservation(row) if row is not None else None


def find_overlapping(
    cur: PgCursor,
    *,
    room_number: str,
    start_date: date,
    end_date: date,
) -> list[Reservation]:
    """Return reservations of a room whose stay overlaps [start_date, end_date).

    Overlap formula: existing.end_date > start_date AND existing.start_date < end_date.
    A stay that ends on the day another starts does not overlap it.
    """
    rows = fetchall(
        cur,
        f"""
        SELECT {_COLUMNS}
        FROM reservations
        WHERE room_number = %s
          AND end_date > %s
          AND start_date < %s
        """,
        (room_number, start_date, end_date),
    )
    return [_row_to_reservation(row) for row in rows]


def insert_reservation(cur: PgCursor, reservation: Reservation) -> Reservation:
    """Insert a reservation and return it with the id assigned by the database.

    Any id already set on ``reservation`` is ignored.
    """
    row = fetchone(
        cur,
        f"""
        INSERT INTO reservations (room_number, start_date, end_date, guest_id)
        VALUES (%s, %s, %s, %s)
        RETURNING {_COLUMNS}
        """,
        (
            reservation.room_number,
            reservation.start_date,
            reservation.end_date,
            reservation.guest_id,
        ),
    )
    return _row_to_reservation(row)


def update_reservation(cur: PgCursor, reservation: Reservation) -> Reservation | None:
    """Overwrite all fields of a stored reservation.

    Returns:
        The stored row after the update, or None if the id does not exist.
    """
    row = fetchone(
        cur,
        f"""
        UPDATE reservations
        SET room_number = %s,
            start_date = %s,
            end_date = %s,
            guest_id = %s,
            updated_at = now()
        WHERE id = %s
        RETURNING {_COLUMNS}
        """,
        (
            reservation.room_number,
            reservation.start_date,
            reservation.end_date,
            reservation.guest_id,
            reservation.id,
        ),
    )
    return _row_to_reservation(row) if row is not None else None


def delete_reservation(cur: PgCursor, reservation_id: int) -> bool:
    """Delete a reservation. Returns True if a row was removed."""
    row = fetchone(
        cur,
        "DELETE FROM reservations WHERE id = %s RETURNING id",
        (reservation_id,),
    )
    return row is not None
