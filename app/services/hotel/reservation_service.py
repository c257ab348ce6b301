# app/services/hotel/reservation_service.py
"""
Reservation ledger.

Atomic reserve and cancel primitives called by the booking orchestrator.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    InsufficientCapacityError,
    InvalidStateTransitionError,
    RoomUnavailableError,
    ValidationError,
)
from app.core.utils import CurrencyUtils, DateTimeUtils
from app.models.base.enums import ReservationStatus
from app.models.hotel import ReservationInterval
from app.repositories.hotel import ReservationRepository, RoomRepository
from app.services.base import BaseService, Clock

CANCELLABLE_STATUSES = frozenset({
    ReservationStatus.PENDING,
    ReservationStatus.CONFIRMED,
    ReservationStatus.MODIFIED,
    ReservationStatus.NO_SHOW,
})


class ReservationService(BaseService):
    """
    Service for reservation intervals.

    Responsibilities:
    - Reserve a room with a row lock and a conditional insert
    - Cancel reservations, freeing the interval
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.rooms = RoomRepository(db_session)
        self.reservations = ReservationRepository(db_session)

    def reserve(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        guests: int,
        customer_id: str,
        booking_id: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> ReservationInterval:
        """
        Hold a room for [check_in, check_out).

        The room row is locked, then the reservation is written with a
        conditional insert that only succeeds when no non-cancelled
        reservation or active maintenance window overlaps.

        Args:
            room_id: Room to reserve
            check_in: First night
            check_out: Departure date (exclusive)
            guests: Number of guests
            customer_id: Customer reference
            booking_id: External booking reference
            amount: Booked price

        Returns:
            The confirmed reservation

        Raises:
            ValidationError: If the range or guest count is invalid
            RoomNotFoundError: If the room does not exist
            InsufficientCapacityError: If guests exceed the room's capacity
            RoomUnavailableError: If the interval is already taken
        """
        DateTimeUtils.validate_stay_range(check_in, check_out)
        if guests is None or guests < 1:
            raise ValidationError(
                "At least one guest is required",
                field_errors={"guests": ["must be >= 1"]},
            )
        if amount is not None:
            amount = CurrencyUtils.quantize(amount)

        with self.transaction():
            room = self.rooms.lock(room_id)
            if not room.is_bookable:
                raise RoomUnavailableError(
                    "Room is out of order",
                    room_id=room_id,
                    reason="Room is out of order",
                )
            if guests > room.max_occupancy:
                raise InsufficientCapacityError(
                    f"Room {room.room_number} holds at most {room.max_occupancy} guests",
                    requested=guests,
                    available=room.max_occupancy,
                )

            reservation = self.reservations.insert_if_free(
                room_id=room_id,
                check_in=check_in,
                check_out=check_out,
                guests=guests,
                customer_id=customer_id,
                booking_id=booking_id,
                amount=amount,
            )
            if reservation is None:
                raise self._unavailable(room_id, check_in, check_out)

        self._logger.info(
            "Reservation created",
            extra={
                "reservation_id": reservation.id,
                "room_id": room_id,
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
            },
        )
        return reservation

    def _unavailable(self, room_id: str, check_in: date, check_out: date) -> RoomUnavailableError:
        reservation_ids = self.rooms.conflicting_reservation_ids(room_id, check_in, check_out)
        window_ids = self.rooms.conflicting_maintenance_ids(room_id, check_in, check_out)
        reason = (
            "Room is already reserved for the selected dates"
            if reservation_ids
            else "Room is under maintenance for the selected dates"
        )
        self._logger.warning(
            "Reservation rejected",
            extra={"room_id": room_id, "reason": reason, "conflicts": reservation_ids + window_ids},
        )
        return RoomUnavailableError(
            room_id=room_id,
            reason=reason,
            conflicting_ids=reservation_ids + window_ids,
        )

    def cancel(self, reservation_id: str) -> ReservationInterval:
        """
        Cancel a reservation; cancelling twice is a no-op.

        Raises:
            ReservationNotFoundError: If the reservation does not exist
            InvalidStateTransitionError: If the guest already checked in or out
        """
        with self.transaction():
            reservation = self.reservations.get_by_id(reservation_id, for_update=True)
            if reservation.is_cancelled:
                return reservation
            if reservation.status not in CANCELLABLE_STATUSES:
                raise InvalidStateTransitionError(
                    "reservation",
                    reservation.status.value,
                    ReservationStatus.CANCELLED.value,
                )
            self.reservations.mark(reservation, ReservationStatus.CANCELLED, self.now())

        self._logger.info(
            "Reservation cancelled",
            extra={"reservation_id": reservation_id, "room_id": reservation.room_id},
        )
        return reservation

    def get_reservation(self, reservation_id: str) -> ReservationInterval:
        return self.reservations.get_by_id(reservation_id)
