"""Tests for the availability index."""

from datetime import date

import pytest

from app.core.exceptions import (
    HotelNotFoundError,
    InvalidDateRangeError,
    NotFoundError,
    ValidationError,
)
from app.models.base.enums import ReservationStatus, RoomStatus, RoomType
from app.services.hotel import AvailabilityService
from tests.conftest import FRIDAY, MONDAY, SATURDAY, SUNDAY, fixed_clock


@pytest.fixture
def service(db):
    return AvailabilityService(db, clock=fixed_clock)


# --- is_room_free ---

def test_room_without_reservations_is_free(service, make_room):
    room = make_room()
    assert service.is_room_free(room.id, FRIDAY, SUNDAY) is True


def test_overlapping_reservation_blocks_room(service, make_room, add_reservation):
    room = make_room()
    add_reservation(room, SATURDAY, MONDAY)

    assert service.is_room_free(room.id, FRIDAY, SUNDAY) is False
    assert service.is_room_free(room.id, SUNDAY, date(2024, 12, 10)) is False


def test_back_to_back_stays_do_not_overlap(service, make_room, add_reservation):
    """Half-open intervals: a check-out day is free for the next arrival."""
    room = make_room()
    add_reservation(room, FRIDAY, SUNDAY)

    assert service.is_room_free(room.id, SUNDAY, MONDAY) is True
    assert service.is_room_free(room.id, date(2024, 12, 4), FRIDAY) is True


def test_cancelled_reservation_does_not_block(service, make_room, add_reservation):
    room = make_room()
    add_reservation(room, FRIDAY, SUNDAY, status=ReservationStatus.CANCELLED)
    assert service.is_room_free(room.id, FRIDAY, SUNDAY) is True


def test_active_maintenance_window_blocks_room(service, make_room, add_maintenance):
    room = make_room()
    add_maintenance(room, SATURDAY, SUNDAY)

    assert service.is_room_free(room.id, FRIDAY, MONDAY) is False
    assert service.is_room_free(room.id, SUNDAY, MONDAY) is True


def test_completed_maintenance_window_does_not_block(service, make_room, add_maintenance):
    room = make_room()
    add_maintenance(room, FRIDAY, MONDAY, is_active=False)
    assert service.is_room_free(room.id, FRIDAY, SUNDAY) is True


def test_unknown_room_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.is_room_free("missing", FRIDAY, SUNDAY)


def test_invalid_range_raises_validation_error(service, make_room):
    room = make_room()
    with pytest.raises(InvalidDateRangeError):
        service.is_room_free(room.id, SUNDAY, FRIDAY)
    with pytest.raises(ValidationError):
        service.is_room_free(room.id, FRIDAY, FRIDAY)


# --- list_available ---

def test_list_available_filters_and_orders(service, hotel, make_room, add_reservation):
    taken = make_room(room_number="101")
    free_b = make_room(room_number="103")
    free_a = make_room(room_number="102")
    make_room(room_number="104", adults=1, children=0)  # too small
    make_room(room_number="105", status=RoomStatus.OUT_OF_ORDER)
    add_reservation(taken, FRIDAY, SATURDAY)

    rooms = service.list_available(hotel.id, FRIDAY, SUNDAY, guests=2)

    assert [room.id for room in rooms] == [free_a.id, free_b.id]


def test_list_available_room_type_filter(service, hotel, make_room):
    make_room(room_number="201", room_type=RoomType.STANDARD)
    suite = make_room(room_number="202", room_type=RoomType.SUITE)

    rooms = service.list_available(hotel.id, FRIDAY, SUNDAY, guests=1, room_type=RoomType.SUITE)

    assert [room.id for room in rooms] == [suite.id]


def test_list_available_excludes_soft_deleted_rooms(db, service, hotel, make_room):
    room = make_room()
    room.soft_delete()
    db.commit()

    assert service.list_available(hotel.id, FRIDAY, SUNDAY, guests=1) == []


def test_list_available_excludes_rooms_in_maintenance(service, hotel, make_room, add_maintenance):
    room = make_room()
    add_maintenance(room, FRIDAY, SATURDAY)
    assert service.list_available(hotel.id, FRIDAY, SUNDAY, guests=1) == []


def test_list_available_requires_a_guest(service, hotel):
    with pytest.raises(ValidationError):
        service.list_available(hotel.id, FRIDAY, SUNDAY, guests=0)


def test_list_available_unknown_hotel(service):
    with pytest.raises(HotelNotFoundError):
        service.list_available("nope", FRIDAY, SUNDAY, guests=1)


def test_availability_query_has_no_side_effects(db, service, make_room, add_reservation):
    room = make_room()
    add_reservation(room, FRIDAY, SUNDAY)
    service.list_available(room.hotel_id, FRIDAY, SUNDAY, guests=1)
    service.is_room_free(room.id, FRIDAY, SUNDAY)

    assert not db.new and not db.dirty and not db.deleted


# --- explain_unavailability ---

def test_explain_unavailability_lists_conflicts(service, make_room, add_reservation, add_maintenance):
    room = make_room()
    reservation = add_reservation(room, FRIDAY, SATURDAY)
    window = add_maintenance(room, SATURDAY, SUNDAY)

    explanation = service.explain_unavailability(room.id, FRIDAY, MONDAY)

    assert explanation.is_free is False
    assert explanation.reservation_ids == [reservation.id]
    assert explanation.maintenance_window_ids == [window.id]


def test_out_of_order_room_is_never_free(service, make_room):
    room = make_room(status=RoomStatus.OUT_OF_ORDER)

    assert service.is_room_free(room.id, FRIDAY, SUNDAY) is False

    explanation = service.explain_unavailability(room.id, FRIDAY, SUNDAY)
    assert explanation.is_free is False
    assert explanation.reason == "Room is out of order"
    assert explanation.reservation_ids == []
    assert explanation.maintenance_window_ids == []


def test_explain_unavailability_when_free(service, make_room):
    room = make_room()
    explanation = service.explain_unavailability(room.id, FRIDAY, SUNDAY)
    assert explanation.is_free is True
    assert explanation.reason is None
    assert explanation.reservation_ids == []
