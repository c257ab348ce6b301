"""Tests for the room registry: lifecycle, housekeeping and analytics."""

from datetime import date
from decimal import Decimal

import pydantic
import pytest

from app.core.exceptions import (
    ConflictError,
    HotelNotFoundError,
    InvalidStateTransitionError,
    RoomNotFoundError,
)
from app.models.base.enums import (
    HousekeepingStatus,
    ReservationStatus,
    RoomStatus,
    RoomType,
)
from app.schemas.hotel.room import RoomCreate, SeasonalRateCreate
from app.services.hotel import AvailabilityService, ReservationService, RoomService
from tests.conftest import FIXED_NOW, FRIDAY, SATURDAY, SUNDAY, fixed_clock

TODAY = FIXED_NOW.date()


@pytest.fixture
def service(db):
    return RoomService(db, clock=fixed_clock)


@pytest.fixture
def availability(db):
    return AvailabilityService(db, clock=fixed_clock)


def _room_create(**overrides) -> RoomCreate:
    values = dict(
        room_number="301",
        name="Garden Suite",
        room_type=RoomType.SUITE,
        adults=2,
        children=2,
        base_price=Decimal("250.00"),
    )
    values.update(overrides)
    return RoomCreate(**values)


# --- creation ---

def test_create_room_defaults_max_occupancy(service, hotel):
    room = service.create_room(hotel.id, _room_create(seasonal_rates=[
        SeasonalRateCreate(name="Peak", start_date=date(2024, 12, 20), end_date=date(2025, 1, 5), price=Decimal("400")),
    ]))

    assert room.max_occupancy == 4
    assert room.status == RoomStatus.AVAILABLE
    assert [rate.name for rate in room.seasonal_rates] == ["Peak"]


def test_room_numbers_are_unique_per_hotel(service, hotel, make_hotel):
    service.create_room(hotel.id, _room_create())
    with pytest.raises(ConflictError):
        service.create_room(hotel.id, _room_create(name="Duplicate"))

    other = make_hotel(name="Elsewhere")
    assert service.create_room(other.id, _room_create()).hotel_id == other.id


def test_create_room_for_unknown_hotel(service):
    with pytest.raises(HotelNotFoundError):
        service.create_room("missing", _room_create())


def test_room_capacity_is_validated():
    with pytest.raises(pydantic.ValidationError):
        _room_create(max_occupancy=3)


def test_seasonal_rates_append_in_order(service, make_room):
    room = make_room(seasonal_rates=[
        dict(name="First", start_date=FRIDAY, end_date=SUNDAY, price=Decimal("150.00")),
    ])

    service.add_seasonal_rate(room.id, SeasonalRateCreate(
        name="Second", start_date=FRIDAY, end_date=SUNDAY, price=Decimal("90.00"),
    ))

    reloaded = service.rooms.get_with_pricing(room.id)
    assert [(rate.name, rate.position) for rate in reloaded.seasonal_rates] == [("First", 0), ("Second", 1)]
    assert reloaded.seasonal_rate_for(FRIDAY).name == "First"


# --- occupancy ---

def test_check_in_and_check_out(db, service, make_room, add_reservation):
    room = make_room()
    reservation = add_reservation(room, TODAY, date(2024, 12, 3))

    service.check_in(room.id)
    assert room.status == RoomStatus.OCCUPIED
    assert room.housekeeping_status == HousekeepingStatus.DIRTY
    db.refresh(reservation)
    assert reservation.status == ReservationStatus.CHECKED_IN
    assert reservation.checked_in_at == FIXED_NOW

    service.check_out(room.id)
    assert room.status == RoomStatus.AVAILABLE
    assert room.inspection_required is True
    db.refresh(reservation)
    assert reservation.status == ReservationStatus.CHECKED_OUT


def test_check_in_with_explicit_reservation(db, service, make_room, add_reservation):
    room = make_room()
    reservation = add_reservation(room, FRIDAY, SUNDAY)

    service.check_in(room.id, reservation_id=reservation.id)

    db.refresh(reservation)
    assert reservation.status == ReservationStatus.CHECKED_IN


def test_check_in_with_reservation_for_another_room(service, make_room, add_reservation):
    room = make_room()
    other = make_room()
    reservation = add_reservation(other, FRIDAY, SUNDAY)

    with pytest.raises(ConflictError):
        service.check_in(room.id, reservation_id=reservation.id)


def test_occupancy_transitions_are_guarded(service, make_room):
    room = make_room()

    with pytest.raises(InvalidStateTransitionError):
        service.check_out(room.id)

    service.check_in(room.id)
    with pytest.raises(InvalidStateTransitionError):
        service.check_in(room.id)


def test_checked_in_reservation_is_not_cancellable(db, service, make_room, add_reservation):
    room = make_room()
    reservation = add_reservation(room, TODAY, date(2024, 12, 3))
    service.check_in(room.id)

    with pytest.raises(InvalidStateTransitionError):
        ReservationService(db, clock=fixed_clock).cancel(reservation.id)


# --- maintenance ---

def test_maintenance_covering_today_changes_status(service, availability, make_room):
    room = make_room()

    service.schedule_maintenance(room.id, TODAY, date(2024, 12, 4), reason="Leak")

    assert room.status == RoomStatus.MAINTENANCE
    assert availability.is_room_free(room.id, date(2024, 12, 2), date(2024, 12, 3)) is False
    with pytest.raises(InvalidStateTransitionError):
        service.check_in(room.id)


def test_future_maintenance_only_blocks_its_dates(service, availability, make_room):
    room = make_room()

    service.schedule_maintenance(room.id, FRIDAY, SATURDAY)

    assert room.status == RoomStatus.AVAILABLE
    assert availability.is_room_free(room.id, FRIDAY, SUNDAY) is False
    assert availability.is_room_free(room.id, SATURDAY, SUNDAY) is True


def test_complete_maintenance_reopens_room(service, availability, make_room):
    room = make_room()
    service.schedule_maintenance(room.id, TODAY, date(2024, 12, 4))

    service.complete_maintenance(room.id)

    assert room.status == RoomStatus.AVAILABLE
    assert room.housekeeping_status == HousekeepingStatus.CLEAN
    assert availability.is_room_free(room.id, TODAY, date(2024, 12, 4)) is True
    window = room.maintenance_windows[0]
    assert window.is_active is False
    assert window.completed_at == FIXED_NOW


def test_out_of_order_room_leaves_inventory(service, availability, hotel, make_room):
    room = make_room()
    service.set_out_of_order(room.id)

    assert room.status == RoomStatus.OUT_OF_ORDER
    assert availability.list_available(hotel.id, FRIDAY, SUNDAY, guests=1) == []


# --- housekeeping and lifecycle ---

def test_marking_room_clean(service, make_room):
    room = make_room(housekeeping_status=HousekeepingStatus.DIRTY, inspection_required=True)

    service.update_housekeeping(room.id, HousekeepingStatus.CLEAN, cleaned_by="staff-7", notes="Linen changed")

    assert room.housekeeping_status == HousekeepingStatus.CLEAN
    assert room.last_cleaned == FIXED_NOW
    assert room.cleaned_by == "staff-7"
    assert room.housekeeping_notes == "Linen changed"
    assert room.inspection_required is False


def test_deactivated_room_disappears(service, availability, hotel, make_room):
    room = make_room()

    service.deactivate(room.id)

    assert room.is_deleted is True
    with pytest.raises(RoomNotFoundError):
        service.get_room(room.id)
    assert availability.list_available(hotel.id, FRIDAY, SUNDAY, guests=1) == []


# --- analytics ---

def test_room_analytics_clips_to_period(service, make_room, add_reservation):
    room = make_room()
    add_reservation(room, date(2024, 11, 30), date(2024, 12, 3), amount=Decimal("300.00"))
    add_reservation(room, date(2024, 12, 5), date(2024, 12, 7), amount=Decimal("200.00"))
    add_reservation(
        room, date(2024, 12, 7), date(2024, 12, 8),
        amount=Decimal("999.00"), status=ReservationStatus.CANCELLED,
    )

    snapshot = service.room_analytics_snapshot(room.id, date(2024, 12, 1), date(2024, 12, 8))

    assert snapshot.bookings == 2
    assert snapshot.booked_nights == 4
    assert snapshot.available_nights == 7
    assert snapshot.occupancy_rate == Decimal("57.14")
    assert snapshot.revenue == Decimal("500.00")
    assert snapshot.generated_at == FIXED_NOW
