"""Reservation entity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

# Shared hash for records that have not been persisted yet.
_UNSAVED_HASH = 31


@dataclass(frozen=True, eq=False)
class Reservation:
    """A room reservation.

    Identity is the storage-assigned ``id``. Two records are the same entity
    only when both ids are set and equal; a record without an id equals
    nothing but itself.
    """

    room_number: str
    start_date: date
    end_date: date
    guest_id: int | None
    id: int | None = None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Reservation):
            return NotImplemented
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else _UNSAVED_HASH

    def with_details(self, details: Reservation) -> Reservation:
        """Copy of this record carrying every field of ``details`` but our id."""
        return replace(
            self,
            room_number=details.room_number,
            start_date=details.start_date,
            end_date=details.end_date,
            guest_id=details.guest_id,
        )
