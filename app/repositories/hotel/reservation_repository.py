# app/repositories/hotel/reservation_repository.py
"""
Reservation interval repository.

The insert path is a single conditional ``INSERT ... SELECT ... WHERE NOT
EXISTS`` so the overlap check and the write cannot be separated.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import insert, literal, select
from sqlalchemy.orm import Session

from app.core.exceptions import ReservationNotFoundError
from app.core.utils import DateTimeUtils, IDGenerator
from app.models.base.enums import ReservationStatus
from app.models.hotel import ReservationInterval
from app.repositories.base.base_repository import BaseRepository
from app.repositories.hotel.interval_predicates import room_is_free


class ReservationRepository(BaseRepository[ReservationInterval]):
    """Repository for reservation intervals."""

    not_found_error = ReservationNotFoundError

    def __init__(self, session: Session):
        super().__init__(ReservationInterval, session)

    # ============================================================================
    # GUARDED INSERT
    # ============================================================================

    def insert_if_free(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        guests: int,
        customer_id: str,
        booking_id: Optional[str] = None,
        amount: Optional[Decimal] = None,
        status: ReservationStatus = ReservationStatus.CONFIRMED,
    ) -> Optional[ReservationInterval]:
        """
        Insert a reservation only when the room is free for the interval.

        Args:
            room_id: Room to reserve
            check_in: First night
            check_out: Departure date (exclusive)
            guests: Number of guests
            customer_id: Customer reference
            booking_id: External booking reference
            amount: Booked price
            status: Initial status

        Returns:
            The new reservation, or None when an overlapping reservation or
            active maintenance window exists
        """
        now = DateTimeUtils.now_utc()
        values = {
            "id": IDGenerator.generate_uuid(),
            "room_id": room_id,
            "booking_id": booking_id,
            "customer_id": customer_id,
            "check_in": check_in,
            "check_out": check_out,
            "guests": guests,
            "amount": amount,
            "status": status,
            "created_at": now,
            "updated_at": now,
        }
        table = ReservationInterval.__table__
        source = select(
            *[literal(value, type_=table.c[name].type) for name, value in values.items()]
        ).where(room_is_free(room_id, check_in, check_out))

        with self.translate_errors("insert_if_free"):
            result = self.db.execute(insert(table).from_select(list(values), source))
            if result.rowcount == 0:
                return None
            return self.db.get(ReservationInterval, values["id"])

    # ============================================================================
    # QUERIES
    # ============================================================================

    def find_overlapping(
        self,
        room_id: str,
        start: date,
        end: date,
        include_cancelled: bool = False,
    ) -> List[ReservationInterval]:
        stmt = (
            select(ReservationInterval)
            .where(
                ReservationInterval.room_id == room_id,
                ReservationInterval.check_in < end,
                ReservationInterval.check_out > start,
            )
            .order_by(ReservationInterval.check_in)
        )
        if not include_cancelled:
            stmt = stmt.where(ReservationInterval.status != ReservationStatus.CANCELLED)
        with self.translate_errors("find_overlapping"):
            return list(self.db.execute(stmt).scalars().all())

    def find_arriving(self, room_id: str, day: date) -> Optional[ReservationInterval]:
        """Pending or confirmed reservation whose stay covers the given day."""
        stmt = (
            select(ReservationInterval)
            .where(
                ReservationInterval.room_id == room_id,
                ReservationInterval.status.in_(
                    [ReservationStatus.PENDING, ReservationStatus.CONFIRMED]
                ),
                ReservationInterval.check_in <= day,
                ReservationInterval.check_out > day,
            )
            .order_by(ReservationInterval.check_in)
        )
        with self.translate_errors("find_arriving"):
            return self.db.execute(stmt).scalars().first()

    def find_in_house(self, room_id: str) -> Optional[ReservationInterval]:
        stmt = (
            select(ReservationInterval)
            .where(
                ReservationInterval.room_id == room_id,
                ReservationInterval.status == ReservationStatus.CHECKED_IN,
            )
            .order_by(ReservationInterval.check_in.desc())
        )
        with self.translate_errors("find_in_house"):
            return self.db.execute(stmt).scalars().first()

    def mark(
        self,
        reservation: ReservationInterval,
        status: ReservationStatus,
        at: Optional[datetime] = None,
    ) -> ReservationInterval:
        """Set a reservation's status and the matching timestamp."""
        at = at or DateTimeUtils.now_utc()
        reservation.status = status
        if status == ReservationStatus.CANCELLED:
            reservation.cancelled_at = at
        elif status == ReservationStatus.CHECKED_IN:
            reservation.checked_in_at = at
        elif status == ReservationStatus.CHECKED_OUT:
            reservation.checked_out_at = at
        self.flush("mark_reservation")
        return reservation
