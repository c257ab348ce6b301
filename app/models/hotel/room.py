# app/models/hotel/room.py
"""
Room (inventory unit) models.

A room owns its ordered seasonal rate list and its maintenance windows;
both are child rows mutated through the room aggregate.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    event,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import SoftDeleteModel, TimestampModel
from app.models.base.enums import (
    BedType,
    HousekeepingStatus,
    MaintenanceKind,
    RoomStatus,
    RoomType,
)
from app.models.base.types import MoneyType, enum_type

if TYPE_CHECKING:
    from app.models.hotel.hotel import Hotel
    from app.models.hotel.reservation import ReservationInterval

__all__ = [
    "Room",
    "SeasonalRate",
    "MaintenanceWindow",
]


class Room(SoftDeleteModel):
    """
    Bookable room with capacity, pricing and housekeeping state.

    Rooms are never hard-deleted; ``soft_delete`` hides them from every
    repository query.
    """

    __tablename__ = "rooms"

    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    room_type: Mapped[RoomType] = mapped_column(
        enum_type(RoomType, "room_type"),
        nullable=False,
        index=True,
    )

    # Capacity
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    infants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_occupancy: Mapped[int] = mapped_column(Integer, nullable=False)

    # Bed configuration
    bed_type: Mapped[BedType] = mapped_column(
        enum_type(BedType, "bed_type"),
        nullable=False,
        default=BedType.DOUBLE,
    )
    bed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Pricing
    base_price: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    weekend_surcharge: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        default=Decimal("0.00"),
    )
    holiday_surcharge: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        default=Decimal("0.00"),
    )

    # Availability
    status: Mapped[RoomStatus] = mapped_column(
        enum_type(RoomStatus, "room_status"),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )

    # Housekeeping
    housekeeping_status: Mapped[HousekeepingStatus] = mapped_column(
        enum_type(HousekeepingStatus, "housekeeping_status"),
        nullable=False,
        default=HousekeepingStatus.CLEAN,
    )
    last_cleaned: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    cleaned_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    housekeeping_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    inspection_required: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Relationships
    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="rooms")
    seasonal_rates: Mapped[List["SeasonalRate"]] = relationship(
        "SeasonalRate",
        back_populates="room",
        order_by="SeasonalRate.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )
    maintenance_windows: Mapped[List["MaintenanceWindow"]] = relationship(
        "MaintenanceWindow",
        back_populates="room",
        order_by="MaintenanceWindow.start_date",
        cascade="all, delete-orphan",
    )
    # queried through ReservationRepository, never loaded from the room
    reservations: Mapped[List["ReservationInterval"]] = relationship(
        "ReservationInterval",
        back_populates="room",
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("hotel_id", "room_number", name="uq_room_hotel_number"),
        CheckConstraint(
            "max_occupancy >= adults + children",
            name="ck_room_occupancy_covers_capacity",
        ),
        CheckConstraint("base_price >= 0", name="ck_room_base_price_non_negative"),
        Index("ix_rooms_hotel_type", "hotel_id", "room_type"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number}, status={self.status})>"

    @property
    def is_bookable(self) -> bool:
        """Out-of-order and deleted rooms are unbookable indefinitely."""
        return not self.is_deleted and self.status != RoomStatus.OUT_OF_ORDER

    def seasonal_rate_for(self, night: date) -> Optional["SeasonalRate"]:
        """
        Find the seasonal rate applying to a night.

        Windows are checked in their configured order and the first
        active window containing the night wins.
        """
        for rate in self.seasonal_rates:
            if rate.is_active and rate.covers(night):
                return rate
        return None


class SeasonalRate(TimestampModel):
    """Nightly price override for an inclusive date window."""

    __tablename__ = "room_seasonal_rates"

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    room: Mapped["Room"] = relationship("Room", back_populates="seasonal_rates")

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_seasonal_rate_range"),
    )

    def covers(self, night: date) -> bool:
        return self.start_date <= night <= self.end_date


class MaintenanceWindow(TimestampModel):
    """
    Period [start_date, end_date) during which a room cannot be booked.

    Completed windows are kept for history with ``is_active`` cleared.
    """

    __tablename__ = "room_maintenance_windows"

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    kind: Mapped[MaintenanceKind] = mapped_column(
        enum_type(MaintenanceKind, "maintenance_kind"),
        nullable=False,
        default=MaintenanceKind.MAINTENANCE,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    room: Mapped["Room"] = relationship("Room", back_populates="maintenance_windows")

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_maintenance_window_range"),
        Index("ix_maintenance_room_dates", "room_id", "start_date", "end_date"),
    )

    def covers(self, day: date) -> bool:
        return self.start_date <= day < self.end_date


@event.listens_for(Room, "before_insert")
def default_max_occupancy(mapper, connection, target):
    """Max occupancy defaults to adults + children."""
    if target.adults is None:
        target.adults = 2
    if target.children is None:
        target.children = 0
    if target.max_occupancy is None:
        target.max_occupancy = target.adults + target.children
