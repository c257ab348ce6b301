"""Tests for the reservation ledger."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import InvalidRequestError

from app.core.exceptions import (
    InsufficientCapacityError,
    InvalidStateTransitionError,
    ReservationNotFoundError,
    RoomNotFoundError,
    RoomUnavailableError,
    ValidationError,
)
from app.models.base.enums import ReservationStatus, RoomStatus
from app.services.hotel import AvailabilityService, ReservationService
from tests.conftest import FIXED_NOW, FRIDAY, MONDAY, SATURDAY, SUNDAY, fixed_clock


@pytest.fixture
def service(db):
    return ReservationService(db, clock=fixed_clock)


def test_reserve_confirms_interval(service, make_room):
    room = make_room()

    reservation = service.reserve(
        room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-1",
        booking_id="bk-1", amount=Decimal("268.8"),
    )

    assert reservation.status == ReservationStatus.CONFIRMED
    assert reservation.nights == 2
    assert reservation.amount == Decimal("268.80")
    assert service.get_reservation(reservation.id).booking_id == "bk-1"


def test_double_booking_is_rejected(service, make_room):
    room = make_room()
    first = service.reserve(room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-1")

    with pytest.raises(RoomUnavailableError) as exc_info:
        service.reserve(room.id, SATURDAY, MONDAY, guests=2, customer_id="cust-2")

    assert exc_info.value.reason == "Room is already reserved for the selected dates"
    assert exc_info.value.details["conflicting_ids"] == [first.id]


def test_second_session_sees_committed_reservation(session_factory, service, make_room):
    room = make_room()
    service.reserve(room.id, FRIDAY, SUNDAY, guests=1, customer_id="cust-1")

    other = session_factory()
    try:
        with pytest.raises(RoomUnavailableError):
            ReservationService(other, clock=fixed_clock).reserve(
                room.id, FRIDAY, SATURDAY, guests=1, customer_id="cust-2"
            )
    finally:
        other.close()


def test_back_to_back_reservations(service, make_room):
    room = make_room()
    service.reserve(room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-1")
    second = service.reserve(room.id, SUNDAY, MONDAY, guests=2, customer_id="cust-2")
    assert second.check_in == SUNDAY


def test_maintenance_window_blocks_reservation(service, make_room, add_maintenance):
    room = make_room()
    window = add_maintenance(room, SATURDAY, MONDAY)

    with pytest.raises(RoomUnavailableError) as exc_info:
        service.reserve(room.id, FRIDAY, SUNDAY, guests=1, customer_id="cust-1")

    assert exc_info.value.reason == "Room is under maintenance for the selected dates"
    assert exc_info.value.details["conflicting_ids"] == [window.id]


def test_out_of_order_room_cannot_be_reserved(service, make_room):
    room = make_room(status=RoomStatus.OUT_OF_ORDER)
    with pytest.raises(RoomUnavailableError):
        service.reserve(room.id, FRIDAY, SUNDAY, guests=1, customer_id="cust-1")


def test_deleted_room_cannot_be_reserved(db, service, make_room):
    room = make_room()
    room.soft_delete()
    db.commit()
    with pytest.raises(RoomNotFoundError):
        service.reserve(room.id, FRIDAY, SUNDAY, guests=1, customer_id="cust-1")


def test_capacity_is_enforced(service, make_room):
    room = make_room()
    with pytest.raises(InsufficientCapacityError) as exc_info:
        service.reserve(room.id, FRIDAY, SUNDAY, guests=4, customer_id="cust-1")
    assert exc_info.value.details["available"] == 3


def test_invalid_requests(service, make_room):
    room = make_room()
    with pytest.raises(ValidationError):
        service.reserve(room.id, SUNDAY, SUNDAY, guests=1, customer_id="cust-1")
    with pytest.raises(ValidationError):
        service.reserve(room.id, FRIDAY, SUNDAY, guests=0, customer_id="cust-1")


def test_cancel_frees_the_interval(db, service, make_room):
    room = make_room()
    reservation = service.reserve(room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-1")

    cancelled = service.cancel(reservation.id)

    assert cancelled.status == ReservationStatus.CANCELLED
    assert cancelled.cancelled_at == FIXED_NOW
    assert AvailabilityService(db, clock=fixed_clock).is_room_free(room.id, FRIDAY, SUNDAY)
    service.reserve(room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-2")


def test_cancel_is_idempotent(service, make_room):
    room = make_room()
    reservation = service.reserve(room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-1")

    service.cancel(reservation.id)
    again = service.cancel(reservation.id)

    assert again.status == ReservationStatus.CANCELLED
    assert again.cancelled_at == FIXED_NOW


def test_checked_in_reservation_cannot_be_cancelled(service, make_room, add_reservation):
    room = make_room()
    reservation = add_reservation(
        room, date(2024, 12, 1), date(2024, 12, 3), status=ReservationStatus.CHECKED_IN
    )
    with pytest.raises(InvalidStateTransitionError):
        service.cancel(reservation.id)


def test_cancel_unknown_reservation(service):
    with pytest.raises(ReservationNotFoundError):
        service.cancel("missing")


def test_room_never_loads_reservations_implicitly(service, make_room):
    room = make_room()
    service.reserve(room.id, FRIDAY, SUNDAY, guests=2, customer_id="cust-1")

    with pytest.raises(InvalidRequestError):
        room.reservations
    assert len(service.reservations.find_overlapping(room.id, FRIDAY, SUNDAY)) == 1
