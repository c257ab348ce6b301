# app/services/hotel/room_service.py
"""
Inventory unit registry.

Room lifecycle operations: creation, check-in/out, maintenance,
housekeeping, soft deactivation, seasonal rates and occupancy analytics.
Every mutator returns the updated room aggregate.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ConflictError,
    InvalidStateTransitionError,
)
from app.core.utils import CurrencyUtils, DateTimeUtils
from app.models.base.enums import (
    HousekeepingStatus,
    MaintenanceKind,
    ReservationStatus,
    RoomStatus,
)
from app.models.hotel import Room
from app.repositories.hotel import HotelRepository, ReservationRepository, RoomRepository
from app.schemas.hotel.room import RoomAnalytics, RoomCreate, SeasonalRateCreate
from app.services.base import BaseService, Clock

CHECK_IN_FROM = frozenset({RoomStatus.AVAILABLE, RoomStatus.RESERVED})


class RoomService(BaseService):
    """
    Service for room registry operations.

    Responsibilities:
    - Create rooms with their seasonal rates
    - Move rooms through occupancy and maintenance states
    - Track housekeeping
    - Derive occupancy analytics from reservations
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.rooms = RoomRepository(db_session)
        self.hotels = HotelRepository(db_session)
        self.reservations = ReservationRepository(db_session)

    # ==================== CREATION ====================

    def create_room(self, hotel_id: str, data: RoomCreate) -> Room:
        """
        Register a room in a hotel.

        Raises:
            HotelNotFoundError: If the hotel does not exist
            ConflictError: If the room number is already used in the hotel
        """
        with self.transaction():
            self.hotels.get_by_id(hotel_id)
            if self.rooms.find_by_number(hotel_id, data.room_number) is not None:
                raise ConflictError(
                    f"Room number {data.room_number} already exists in this hotel",
                    details={"hotel_id": hotel_id, "room_number": data.room_number},
                )
            room = self.rooms.create(
                hotel_id=hotel_id,
                **data.model_dump(exclude={"seasonal_rates"}),
            )
            for rate in data.seasonal_rates:
                self.rooms.append_seasonal_rate(room, **rate.model_dump())

        self._logger.info(
            "Room created",
            extra={"room_id": room.id, "hotel_id": hotel_id, "room_number": room.room_number},
        )
        return room

    def get_room(self, room_id: str) -> Room:
        return self.rooms.get_by_id(room_id)

    # ==================== OCCUPANCY ====================

    def check_in(self, room_id: str, reservation_id: Optional[str] = None) -> Room:
        """
        Mark a room occupied and its reservation checked-in.

        Without a reservation id, the pending or confirmed reservation
        covering today is used when there is one.
        """
        with self.transaction():
            room = self.rooms.lock(room_id)
            if room.status not in CHECK_IN_FROM:
                raise InvalidStateTransitionError("room", room.status.value, RoomStatus.OCCUPIED.value)

            if reservation_id is not None:
                reservation = self.reservations.get_by_id(reservation_id)
                if reservation.room_id != room_id:
                    raise ConflictError(
                        "Reservation belongs to a different room",
                        details={"reservation_id": reservation_id, "room_id": room_id},
                    )
                if reservation.status not in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED):
                    raise InvalidStateTransitionError(
                        "reservation",
                        reservation.status.value,
                        ReservationStatus.CHECKED_IN.value,
                    )
            else:
                reservation = self.reservations.find_arriving(room_id, self.today())

            if reservation is not None:
                self.reservations.mark(reservation, ReservationStatus.CHECKED_IN, self.now())

            room.status = RoomStatus.OCCUPIED
            room.housekeeping_status = HousekeepingStatus.DIRTY
            self.rooms.flush("check_in")

        self._logger.info(
            "Room checked in",
            extra={"room_id": room_id, "reservation_id": reservation.id if reservation else None},
        )
        return room

    def check_out(self, room_id: str) -> Room:
        """Release an occupied room and flag it for cleaning and inspection."""
        with self.transaction():
            room = self.rooms.lock(room_id)
            if room.status != RoomStatus.OCCUPIED:
                raise InvalidStateTransitionError("room", room.status.value, RoomStatus.AVAILABLE.value)

            reservation = self.reservations.find_in_house(room_id)
            if reservation is not None:
                self.reservations.mark(reservation, ReservationStatus.CHECKED_OUT, self.now())

            room.status = RoomStatus.AVAILABLE
            room.housekeeping_status = HousekeepingStatus.DIRTY
            room.inspection_required = True
            self.rooms.flush("check_out")

        self._logger.info("Room checked out", extra={"room_id": room_id})
        return room

    # ==================== MAINTENANCE ====================

    def schedule_maintenance(
        self,
        room_id: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
        kind: MaintenanceKind = MaintenanceKind.MAINTENANCE,
    ) -> Room:
        """
        Block a room for [start_date, end_date).

        The room's status becomes ``maintenance`` when the window covers
        today; future windows only block availability for their dates.
        """
        DateTimeUtils.validate_stay_range(start_date, end_date)
        with self.transaction():
            room = self.rooms.lock(room_id)
            window = self.rooms.append_maintenance_window(
                room,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                kind=kind,
            )
            if window.covers(self.today()) and room.status != RoomStatus.OUT_OF_ORDER:
                room.status = RoomStatus.MAINTENANCE
                self.rooms.flush("schedule_maintenance")

        self._logger.info(
            "Maintenance scheduled",
            extra={
                "room_id": room_id,
                "window_id": window.id,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
            },
        )
        return room

    def complete_maintenance(self, room_id: str) -> Room:
        """Close the windows covering today and return the room to service."""
        with self.transaction():
            room = self.rooms.lock(room_id)
            now = self.now()
            for window in self.rooms.active_windows_covering(room_id, now.date()):
                window.is_active = False
                window.completed_at = now
            room.status = RoomStatus.AVAILABLE
            room.housekeeping_status = HousekeepingStatus.CLEAN
            room.inspection_required = False
            self.rooms.flush("complete_maintenance")

        self._logger.info("Maintenance completed", extra={"room_id": room_id})
        return room

    def set_out_of_order(self, room_id: str) -> Room:
        """Take a room out of service indefinitely."""
        with self.transaction():
            room = self.rooms.lock(room_id)
            room.status = RoomStatus.OUT_OF_ORDER
            room.housekeeping_status = HousekeepingStatus.OUT_OF_ORDER
            self.rooms.flush("set_out_of_order")
        self._logger.info("Room out of order", extra={"room_id": room_id})
        return room

    # ==================== HOUSEKEEPING ====================

    def update_housekeeping(
        self,
        room_id: str,
        status: HousekeepingStatus,
        cleaned_by: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Room:
        with self.transaction():
            room = self.rooms.lock(room_id)
            room.housekeeping_status = status
            if status == HousekeepingStatus.CLEAN:
                room.last_cleaned = self.now()
                room.cleaned_by = cleaned_by
                room.inspection_required = False
            if notes:
                room.housekeeping_notes = notes
            self.rooms.flush("update_housekeeping")
        return room

    # ==================== PRICING & LIFECYCLE ====================

    def add_seasonal_rate(self, room_id: str, data: SeasonalRateCreate) -> Room:
        """Append a seasonal rate after the existing ones."""
        with self.transaction():
            room = self.rooms.get_with_pricing(room_id)
            self.rooms.append_seasonal_rate(room, **data.model_dump())
        return room

    def deactivate(self, room_id: str) -> Room:
        """Soft delete a room; it disappears from every availability query."""
        with self.transaction():
            room = self.rooms.lock(room_id)
            self.rooms.soft_delete(room)
        return room

    # ==================== ANALYTICS ====================

    def room_analytics_snapshot(self, room_id: str, start: date, end: date) -> RoomAnalytics:
        """
        Occupancy figures for [start, end), computed from reservations.

        Nights are clipped to the period; revenue counts the full booked
        amount of every reservation that overlaps the period.
        """
        period_nights = DateTimeUtils.validate_stay_range(start, end)
        self.rooms.get_by_id(room_id)

        reservations = self.reservations.find_overlapping(room_id, start, end)
        booked_nights = sum(
            (min(item.check_out, end) - max(item.check_in, start)).days for item in reservations
        )
        revenue = CurrencyUtils.quantize(
            sum((item.amount or Decimal("0")) for item in reservations)
        )
        occupancy = CurrencyUtils.quantize(
            Decimal(booked_nights) * Decimal("100") / Decimal(period_nights)
        )
        return RoomAnalytics(
            room_id=room_id,
            period_start=start,
            period_end=end,
            bookings=len(reservations),
            booked_nights=booked_nights,
            available_nights=period_nights,
            occupancy_rate=occupancy,
            revenue=revenue,
            generated_at=self.now(),
        )
