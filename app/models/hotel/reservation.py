# app/models/hotel/reservation.py
"""
Reservation interval model.

A reservation holds a room for the half-open night range
[check_in, check_out). For a given room no two non-cancelled
reservations may overlap.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import ReservationStatus
from app.models.base.types import MoneyType, enum_type

if TYPE_CHECKING:
    from app.models.hotel.room import Room

__all__ = ["ReservationInterval"]


class ReservationInterval(TimestampModel):
    """Room occupancy interval written by the booking orchestrator."""

    __tablename__ = "reservation_intervals"

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    booking_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        index=True,
        comment="External booking reference",
    )
    customer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    amount: Mapped[Optional[Decimal]] = mapped_column(MoneyType, nullable=True)

    status: Mapped[ReservationStatus] = mapped_column(
        enum_type(ReservationStatus, "reservation_status"),
        nullable=False,
        default=ReservationStatus.CONFIRMED,
        index=True,
    )
    checked_in_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    checked_out_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    room: Mapped["Room"] = relationship("Room", back_populates="reservations")

    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_reservation_range"),
        CheckConstraint("guests >= 1", name="ck_reservation_guests"),
        Index("ix_reservation_room_dates", "room_id", "check_in", "check_out"),
    )

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def is_cancelled(self) -> bool:
        return self.status == ReservationStatus.CANCELLED

    def __repr__(self) -> str:
        return (
            f"<ReservationInterval(id={self.id}, room_id={self.room_id}, "
            f"{self.check_in}..{self.check_out}, status={self.status})>"
        )
