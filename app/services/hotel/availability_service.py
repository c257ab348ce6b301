# app/services/hotel/availability_service.py
"""
Availability index.

Answers whether rooms are free for a half-open date range. Every query is
a pure read of persisted reservation and maintenance state.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.utils import DateTimeUtils
from app.models.base.enums import RoomType
from app.models.hotel import Room
from app.repositories.hotel import HotelRepository, RoomRepository
from app.schemas.hotel.availability import UnavailabilityExplanation
from app.services.base import BaseService, Clock

OUT_OF_ORDER_REASON = "Room is out of order"


class AvailabilityService(BaseService):
    """
    Service for room availability queries.

    Responsibilities:
    - Check a single room for a date range
    - Search capacity-eligible free rooms in a hotel
    - Explain why a room is blocked
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.rooms = RoomRepository(db_session)
        self.hotels = HotelRepository(db_session)

    def is_room_free(self, room_id: str, check_in: date, check_out: date) -> bool:
        """
        Check whether a room is free for [check_in, check_out).

        Args:
            room_id: Room to check
            check_in: First night
            check_out: Departure date (exclusive)

        Returns:
            False if the room is out of order, or if a non-cancelled
            reservation or an active maintenance window intersects the range

        Raises:
            ValidationError: If the range is malformed
            RoomNotFoundError: If the room does not exist
        """
        DateTimeUtils.validate_stay_range(check_in, check_out)
        room = self.rooms.get_by_id(room_id)
        if not room.is_bookable:
            return False
        return self.rooms.is_free(room_id, check_in, check_out)

    def list_available(
        self,
        hotel_id: str,
        check_in: date,
        check_out: date,
        guests: int,
        room_type: Optional[RoomType] = None,
    ) -> List[Room]:
        """
        List rooms in a hotel that can host the stay.

        Soft-deleted and out-of-order rooms are never returned. Results are
        ordered by room number.

        Args:
            hotel_id: Hotel to search
            check_in: First night
            check_out: Departure date (exclusive)
            guests: Guests to accommodate in one room
            room_type: Optional room type filter

        Returns:
            Free rooms whose max occupancy covers the guests
        """
        DateTimeUtils.validate_stay_range(check_in, check_out)
        self._validate_guests(guests)
        self.hotels.get_by_id(hotel_id)

        rooms = self.rooms.find_available(hotel_id, check_in, check_out, guests, room_type)
        self._logger.debug(
            "Availability search",
            extra={
                "hotel_id": hotel_id,
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
                "guests": guests,
                "available_count": len(rooms),
            },
        )
        return rooms

    def explain_unavailability(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
    ) -> UnavailabilityExplanation:
        """List the reservations and maintenance windows blocking a room."""
        DateTimeUtils.validate_stay_range(check_in, check_out)
        room = self.rooms.get_by_id(room_id)
        reason = None if room.is_bookable else OUT_OF_ORDER_REASON

        reservation_ids = self.rooms.conflicting_reservation_ids(room_id, check_in, check_out)
        window_ids = self.rooms.conflicting_maintenance_ids(room_id, check_in, check_out)
        return UnavailabilityExplanation(
            room_id=room_id,
            check_in=check_in,
            check_out=check_out,
            is_free=reason is None and not reservation_ids and not window_ids,
            reason=reason,
            reservation_ids=reservation_ids,
            maintenance_window_ids=window_ids,
        )

    @staticmethod
    def _validate_guests(guests: int) -> None:
        if guests is None or guests < 1:
            raise ValidationError(
                "At least one guest is required",
                field_errors={"guests": ["must be >= 1"]},
            )
