"""
Shared fixtures: in-memory SQLite store, per-test session, model
factories and a fixed clock.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from app.db.init_db import init_db
from app.db.session import build_engine
from app.models.base.enums import (
    DiscountType,
    OfferStatus,
    ReservationStatus,
    RoomStatus,
    RoomType,
)
from app.models.hotel import (
    Hotel,
    MaintenanceWindow,
    Offer,
    OfferBlackoutDate,
    ReservationInterval,
    Room,
    SeasonalRate,
)

# Sunday; 2024-12-06 is a Friday and 2024-12-07 a Saturday
FIXED_NOW = datetime(2024, 12, 1, 12, 0, 0)

FRIDAY = date(2024, 12, 6)
SATURDAY = date(2024, 12, 7)
SUNDAY = date(2024, 12, 8)
MONDAY = date(2024, 12, 9)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return fixed_clock


# --- factories ---

@pytest.fixture
def make_hotel(db):
    def _make_hotel(**overrides) -> Hotel:
        values = dict(
            owner_id="owner-1",
            name="Seaside Inn",
            gst_rate=Decimal("12.00"),
            service_tax_rate=Decimal("0.00"),
            base_occupancy=2,
            extra_person_charge=Decimal("500.00"),
            holiday_dates=[],
        )
        values.update(overrides)
        hotel = Hotel(**values)
        db.add(hotel)
        db.commit()
        return hotel

    return _make_hotel


@pytest.fixture
def hotel(make_hotel):
    return make_hotel()


@pytest.fixture
def make_room(db, hotel):
    counter = {"n": 100}

    def _make_room(seasonal_rates=(), target_hotel=None, **overrides) -> Room:
        counter["n"] += 1
        values = dict(
            hotel_id=(target_hotel or hotel).id,
            room_number=str(counter["n"]),
            name=f"Room {counter['n']}",
            room_type=RoomType.DELUXE,
            adults=2,
            children=1,
            base_price=Decimal("100.00"),
            weekend_surcharge=Decimal("20.00"),
            holiday_surcharge=Decimal("0.00"),
            status=RoomStatus.AVAILABLE,
        )
        values.update(overrides)
        room = Room(**values)
        for rate in seasonal_rates:
            room.seasonal_rates.append(SeasonalRate(**rate))
        db.add(room)
        db.commit()
        return room

    return _make_room


@pytest.fixture
def make_offer(db, hotel):
    def _make_offer(blackout_dates=(), **overrides) -> Offer:
        values = dict(
            hotel_id=hotel.id,
            owner_id=hotel.owner_id,
            title="Winter Saver",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("20.00"),
            max_discount=Decimal("50.00"),
            valid_from=datetime(2024, 11, 1),
            valid_until=datetime(2025, 1, 31, 23, 59, 59),
            status=OfferStatus.ACTIVE,
            is_approved=True,
        )
        values.update(overrides)
        offer = Offer(**values)
        for day in blackout_dates:
            offer.blackout_dates.append(OfferBlackoutDate(blackout_date=day))
        db.add(offer)
        db.commit()
        return offer

    return _make_offer


@pytest.fixture
def add_reservation(db):
    """Insert a reservation row directly, bypassing the ledger guard."""
    def _add(room, check_in, check_out, status=ReservationStatus.CONFIRMED, **overrides) -> ReservationInterval:
        values = dict(
            room_id=room.id,
            customer_id="cust-1",
            check_in=check_in,
            check_out=check_out,
            guests=2,
            status=status,
        )
        values.update(overrides)
        reservation = ReservationInterval(**values)
        db.add(reservation)
        db.commit()
        return reservation

    return _add


@pytest.fixture
def add_maintenance(db):
    def _add(room, start_date, end_date, is_active=True) -> MaintenanceWindow:
        window = MaintenanceWindow(
            room_id=room.id,
            start_date=start_date,
            end_date=end_date,
            reason="Plumbing",
            is_active=is_active,
        )
        db.add(window)
        db.commit()
        return window

    return _add
