# app/models/hotel/hotel.py
"""
Hotel model.

Only the attributes the availability, pricing and offer engine consumes
are stored here; vendor management lives outside this service.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import SoftDeleteModel
from app.models.base.types import DateListType, MoneyType, RateType

if TYPE_CHECKING:
    from app.models.hotel.offer import Offer
    from app.models.hotel.room import Room

__all__ = ["Hotel"]


class Hotel(SoftDeleteModel):
    """
    Hotel with tax configuration and extra-guest policy.

    ``holiday_dates`` lists the calendar dates on which each room's
    holiday surcharge applies.
    """

    __tablename__ = "hotels"

    owner_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Vendor that owns the hotel",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Tax configuration (percent)
    gst_rate: Mapped[Decimal] = mapped_column(
        RateType,
        nullable=False,
        default=Decimal("12.00"),
    )
    service_tax_rate: Mapped[Decimal] = mapped_column(
        RateType,
        nullable=False,
        default=Decimal("0.00"),
    )

    # Extra guest policy
    base_occupancy: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=2,
        comment="Guests included in the room price",
    )
    extra_person_charge: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        default=Decimal("0.00"),
        comment="Per extra guest, per night",
    )

    holiday_dates: Mapped[List[date]] = mapped_column(
        DateListType,
        nullable=False,
        default=list,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="hotel",
        order_by="Room.room_number",
    )
    offers: Mapped[List["Offer"]] = relationship(
        "Offer",
        back_populates="hotel",
    )

    __table_args__ = (
        Index("ix_hotels_owner_active", "owner_id", "is_active"),
    )

    def is_holiday(self, night: date) -> bool:
        """Check whether a night carries the holiday surcharge."""
        return night in set(self.holiday_dates or [])

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name={self.name})>"
