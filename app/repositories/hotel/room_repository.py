# app/repositories/hotel/room_repository.py
"""
Room repository with availability queries and child-record management.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import RoomNotFoundError
from app.models.base.enums import ReservationStatus, RoomStatus, RoomType
from app.models.hotel import MaintenanceWindow, ReservationInterval, Room, SeasonalRate
from app.repositories.base.base_repository import BaseRepository
from app.repositories.hotel.interval_predicates import room_is_free


class RoomRepository(BaseRepository[Room]):
    """
    Repository for Room entity and its child records.

    Handles:
    - Bookable candidate search with overlap exclusion
    - Per-room availability checks and conflict lookup
    - Seasonal rates and maintenance windows
    """

    not_found_error = RoomNotFoundError

    def __init__(self, session: Session):
        super().__init__(Room, session)

    # ============================================================================
    # ROOM LOOKUPS
    # ============================================================================

    def get_with_pricing(self, room_id: str) -> Room:
        """Load a room together with its hotel and ordered seasonal rates."""
        stmt = self._not_deleted(
            select(Room)
            .where(Room.id == room_id)
            .options(selectinload(Room.seasonal_rates), selectinload(Room.hotel))
        )
        with self.translate_errors("get_with_pricing"):
            room = self.db.execute(stmt).scalars().first()
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def lock(self, room_id: str) -> Room:
        """Take a row lock on the room for the rest of the transaction."""
        return self.get_by_id(room_id, for_update=True)

    def find_by_number(self, hotel_id: str, room_number: str) -> Optional[Room]:
        stmt = self._not_deleted(
            select(Room).where(Room.hotel_id == hotel_id, Room.room_number == room_number)
        )
        with self.translate_errors("find_by_number"):
            return self.db.execute(stmt).scalars().first()

    # ============================================================================
    # AVAILABILITY
    # ============================================================================

    def find_available(
        self,
        hotel_id: str,
        check_in: date,
        check_out: date,
        guests: int,
        room_type: Optional[RoomType] = None,
    ) -> List[Room]:
        """
        Find rooms that can host the stay.

        Args:
            hotel_id: Hotel to search
            check_in: First night
            check_out: Departure date (exclusive)
            guests: Number of guests
            room_type: Optional room type filter

        Returns:
            Free rooms ordered by room number
        """
        stmt = (
            select(Room)
            .where(
                Room.hotel_id == hotel_id,
                Room.status != RoomStatus.OUT_OF_ORDER,
                Room.max_occupancy >= guests,
                room_is_free(Room.id, check_in, check_out),
            )
            .options(selectinload(Room.seasonal_rates), selectinload(Room.hotel))
            .order_by(Room.room_number)
        )
        if room_type is not None:
            stmt = stmt.where(Room.room_type == room_type)
        stmt = self._not_deleted(stmt)

        with self.translate_errors("find_available"):
            return list(self.db.execute(stmt).scalars().all())

    def is_free(self, room_id: str, check_in: date, check_out: date) -> bool:
        with self.translate_errors("is_free"):
            return bool(self.db.scalar(select(room_is_free(room_id, check_in, check_out))))

    def conflicting_reservation_ids(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
    ) -> List[str]:
        stmt = (
            select(ReservationInterval.id)
            .where(
                ReservationInterval.room_id == room_id,
                ReservationInterval.status != ReservationStatus.CANCELLED,
                ReservationInterval.check_in < check_out,
                ReservationInterval.check_out > check_in,
            )
            .order_by(ReservationInterval.check_in)
        )
        with self.translate_errors("conflicting_reservation_ids"):
            return list(self.db.execute(stmt).scalars().all())

    def conflicting_maintenance_ids(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
    ) -> List[str]:
        stmt = (
            select(MaintenanceWindow.id)
            .where(
                MaintenanceWindow.room_id == room_id,
                MaintenanceWindow.is_active.is_(True),
                MaintenanceWindow.start_date < check_out,
                MaintenanceWindow.end_date > check_in,
            )
            .order_by(MaintenanceWindow.start_date)
        )
        with self.translate_errors("conflicting_maintenance_ids"):
            return list(self.db.execute(stmt).scalars().all())

    # ============================================================================
    # CHILD RECORDS
    # ============================================================================

    def append_seasonal_rate(self, room: Room, **values) -> SeasonalRate:
        """Append a seasonal rate at the end of the room's ordered list."""
        rate = SeasonalRate(**values)
        room.seasonal_rates.append(rate)
        self.flush("append_seasonal_rate")
        return rate

    def append_maintenance_window(self, room: Room, **values) -> MaintenanceWindow:
        window = MaintenanceWindow(**values)
        room.maintenance_windows.append(window)
        self.flush("append_maintenance_window")
        return window

    def active_windows_covering(self, room_id: str, day: date) -> List[MaintenanceWindow]:
        stmt = select(MaintenanceWindow).where(
            MaintenanceWindow.room_id == room_id,
            MaintenanceWindow.is_active.is_(True),
            MaintenanceWindow.start_date <= day,
            MaintenanceWindow.end_date > day,
        )
        with self.translate_errors("active_windows_covering"):
            return list(self.db.execute(stmt).scalars().all())
