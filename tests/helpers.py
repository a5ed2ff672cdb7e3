"""Shared test helper functions for Reservas tests.

This module contains helpers that can be imported by both conftest.py and
individual test files. These are NOT fixtures - they are regular classes and
functions.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from datetime import date, timedelta
from unittest.mock import MagicMock

from reservas.domain.models import Reservation

# Fixed "today" for every test that goes through the date rule.
TODAY = date(2030, 6, 10)


def day(offset: int) -> date:
    """TODAY shifted by offset days."""
    return TODAY + timedelta(days=offset)


def make_reservation(
    room_number: str = "101",
    start: int = 1,
    end: int = 3,
    guest_id: int | None = 1,
    reservation_id: int | None = None,
) -> Reservation:
    """Build a reservation with dates given as offsets from TODAY."""
    return Reservation(
        id=reservation_id,
        room_number=room_number,
        start_date=day(start),
        end_date=day(end),
        guest_id=guest_id,
    )


class FakeReservationStore:
    """In-memory stand-in for reservations_repository and txn().

    Method signatures mirror the repository functions (cursor first) so they
    can be patched in one for one.
    """

    def __init__(self) -> None:
        self.rows: dict[int, Reservation] = {}
        self._next_id = 1
        self.transactions = 0

    @contextmanager
    def txn(self):
        self.transactions += 1
        yield MagicMock()

    def seed(self, reservation: Reservation) -> Reservation:
        """Store a reservation directly, bypassing the business rules."""
        return self.insert_reservation(None, reservation)

    def find_all(self, cur) -> list[Reservation]:
        return [self.rows[k] for k in sorted(self.rows)]

    def find_by_id(self, cur, reservation_id: int) -> Reservation | None:
        return self.rows.get(reservation_id)

    def find_overlapping(self, cur, *, room_number, start_date, end_date) -> list[Reservation]:
        return [
            r
            for r in self.rows.values()
            if r.room_number == room_number
            and r.end_date > start_date
            and r.start_date < end_date
        ]

    def insert_reservation(self, cur, reservation: Reservation) -> Reservation:
        stored = replace(reservation, id=self._next_id)
        self._next_id += 1
        self.rows[stored.id] = stored
        return stored

    def update_reservation(self, cur, reservation: Reservation) -> Reservation | None:
        if reservation.id not in self.rows:
            return None
        self.rows[reservation.id] = reservation
        return reservation

    def delete_reservation(self, cur, reservation_id: int) -> bool:
        return self.rows.pop(reservation_id, None) is not None
