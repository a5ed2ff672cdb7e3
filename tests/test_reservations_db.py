"""Reservation use cases against a real Postgres (requires DATABASE_URL).

The database must be migrated (alembic upgrade head). Each test books its own
room numbers and deletes them afterwards.
"""

import os
import uuid

import pytest
from psycopg2 import errors as pg_errors

from helpers import make_reservation
from reservas.domain.reservations import (
    ReservationNotFoundError,
    create_reservation,
    delete_reservation,
    get_reservation,
    list_reservations,
    update_reservation,
)
from reservas.domain.room_conflict import ConflictViolation
from reservas.infra.db import txn
from reservas.infra.repositories.reservations_repository import insert_reservation

# Skip all tests if DATABASE_URL is not set
pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE_URL"),
    reason="DATABASE_URL not set - skipping reservation DB tests",
)


@pytest.fixture
def room():
    """Unique room number, cleaned up after the test."""
    room_number = f"test-{uuid.uuid4().hex[:10]}"
    yield room_number
    with txn() as cur:
        cur.execute("DELETE FROM reservations WHERE room_number = %s", (room_number,))


class TestLifecycle:
    def test_create_get_update_delete(self, room):
        created = create_reservation(make_reservation(room_number=room, start=1, end=3))
        assert created.id is not None

        fetched = get_reservation(created.id)
        assert fetched == created
        assert fetched.room_number == room

        updated = update_reservation(
            created.id, make_reservation(room_number=room, start=2, end=5, guest_id=9)
        )
        assert updated.id == created.id
        assert updated.guest_id == 9

        assert created.id in [r.id for r in list_reservations()]

        delete_reservation(created.id)
        with pytest.raises(ReservationNotFoundError):
            get_reservation(created.id)


class TestAvailability:
    def test_overlap_rejected_back_to_back_accepted(self, room):
        create_reservation(make_reservation(room_number=room, start=2, end=4))

        with pytest.raises(ConflictViolation):
            create_reservation(make_reservation(room_number=room, start=1, end=3))

        create_reservation(make_reservation(room_number=room, start=4, end=6))

    def test_update_does_not_conflict_with_itself(self, room):
        created = create_reservation(make_reservation(room_number=room, start=2, end=4))
        update_reservation(created.id, make_reservation(room_number=room, start=2, end=4))


class TestExclusionConstraint:
    def test_database_rejects_overlap_written_past_the_check(self, room):
        with txn() as cur:
            insert_reservation(cur, make_reservation(room_number=room, start=2, end=4))

        with pytest.raises(pg_errors.ExclusionViolation):
            with txn() as cur:
                insert_reservation(cur, make_reservation(room_number=room, start=3, end=5))
