"""Shared pytest fixtures for Reservas tests."""
import sys
sys.dont_write_bytecode = True

from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402

from helpers import TODAY, FakeReservationStore  # noqa: E402


@pytest.fixture(autouse=True)
def _fixed_today():
    """Pin the date rule's notion of "today" so tests do not depend on the clock."""
    with patch("reservas.domain.rules.current_date", return_value=TODAY):
        yield TODAY


@pytest.fixture
def store():
    """In-memory reservation storage wired into the domain layer.

    Replaces txn() and every repository function the domain modules call,
    so use cases and API routes run without Postgres.
    """
    fake = FakeReservationStore()
    with patch("reservas.domain.reservations.txn", fake.txn), \
         patch("reservas.domain.reservations.find_all", fake.find_all), \
         patch("reservas.domain.reservations.find_by_id", fake.find_by_id), \
         patch("reservas.domain.reservations.insert_reservation", fake.insert_reservation), \
         patch("reservas.domain.reservations._update_row", fake.update_reservation), \
         patch("reservas.domain.reservations._delete_row", fake.delete_reservation), \
         patch("reservas.domain.room_conflict.find_overlapping", fake.find_overlapping):
        yield fake
