"""Reservations CRUD endpoints.

POST   /reservations          → create (201)
GET    /reservations          → list
GET    /reservations/{id}     → read
PUT    /reservations/{id}     → full update
DELETE /reservations/{id}     → delete (204)

Wire format is camelCase JSON:
{"id": 1, "roomNumber": "101", "startDate": "2030-01-01", "endDate": "2030-01-03", "guestId": 5}

Business rule failures and unknown ids are raised by the domain layer and
turned into responses by reservas.api.errors.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Path, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from reservas.domain import reservations as service
from reservas.domain.models import Reservation

router = APIRouter(prefix="/reservations", tags=["reservations"])


# ── Schemas ───────────────────────────────────────────────────────────────────


class ReservationRequest(BaseModel):
    """Body of POST and PUT.

    ``id`` is accepted and ignored. ``guestId`` may be missing so that the
    guest rule, not request parsing, rejects it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | None = None
    room_number: str
    start_date: date
    end_date: date
    guest_id: int | None = None


# ── Mapping ───────────────────────────────────────────────────────────────────


def _to_entity(body: ReservationRequest) -> Reservation:
    return Reservation(
        room_number=body.room_number,
        start_date=body.start_date,
        end_date=body.end_date,
        guest_id=body.guest_id,
    )


def _reservation_to_dict(reservation: Reservation) -> dict:
    return {
        "id": reservation.id,
        "roomNumber": reservation.room_number,
        "startDate": reservation.start_date.isoformat(),
        "endDate": reservation.end_date.isoformat(),
        "guestId": reservation.guest_id,
    }


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.post("", status_code=201)
def create_reservation(body: ReservationRequest) -> dict:
    """Create a reservation after date, availability and guest checks."""
    created = service.create_reservation(_to_entity(body))
    return _reservation_to_dict(created)


@router.get("")
def list_reservations() -> list[dict]:
    """List every reservation."""
    return [_reservation_to_dict(r) for r in service.list_reservations()]


@router.get("/{reservation_id}")
def get_reservation(
    reservation_id: int = Path(..., description="Reservation ID"),
) -> dict:
    return _reservation_to_dict(service.get_reservation(reservation_id))


@router.put("/{reservation_id}")
def update_reservation(
    body: ReservationRequest,
    reservation_id: int = Path(..., description="Reservation ID"),
) -> dict:
    """Replace room, dates and guest of a reservation, then re-validate."""
    updated = service.update_reservation(reservation_id, _to_entity(body))
    return _reservation_to_dict(updated)


@router.delete("/{reservation_id}", status_code=204)
def delete_reservation(
    reservation_id: int = Path(..., description="Reservation ID"),
) -> Response:
    service.delete_reservation(reservation_id)
    return Response(status_code=204)
