# app/models/hotel/offer.py
"""
Promotional offer models.

Offer is the aggregate root; blackout dates and redemptions are child
rows. Analytics ratios are derived on read from the stored counters.
"""

import math
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
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.utils import CurrencyUtils, DateTimeUtils
from app.models.base.base_model import SoftDeleteModel, TimestampModel
from app.models.base.enums import DiscountType, OfferStatus
from app.models.base.types import MoneyType, StringListType, enum_type

if TYPE_CHECKING:
    from app.models.hotel.hotel import Hotel

__all__ = [
    "Offer",
    "OfferBlackoutDate",
    "OfferRedemption",
]


class Offer(SoftDeleteModel):
    """
    Hotel promotional offer.

    Holds the discount definition, eligibility conditions, validity
    window, usage limits, lifecycle status and analytics counters.
    """

    __tablename__ = "offers"

    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    owner_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Discount
    discount_type: Mapped[DiscountType] = mapped_column(
        enum_type(DiscountType, "discount_type"),
        nullable=False,
    )
    discount_value: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        default=Decimal("0.00"),
    )
    max_discount: Mapped[Optional[Decimal]] = mapped_column(MoneyType, nullable=True)
    free_nights: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    upgrade_category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Conditions
    minimum_stay: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    maximum_stay: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    minimum_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    minimum_booking_amount: Mapped[Optional[Decimal]] = mapped_column(
        MoneyType,
        nullable=True,
    )
    advance_booking_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    applicable_room_types: Mapped[List[str]] = mapped_column(
        StringListType,
        nullable=False,
        default=list,
    )

    # Validity (inclusive, naive UTC)
    valid_from: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    valid_until: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Usage limits
    total_bookings: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="NULL means unlimited",
    )
    bookings_per_customer: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    current_bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    promo_code: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        unique=True,
    )

    # Lifecycle
    status: Mapped[OfferStatus] = mapped_column(
        enum_type(OfferStatus, "offer_status"),
        nullable=False,
        default=OfferStatus.DRAFT,
    )
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    approved_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Analytics counters
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    clicks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    revenue: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        default=Decimal("0.00"),
    )

    # Relationships
    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="offers")
    blackout_dates: Mapped[List["OfferBlackoutDate"]] = relationship(
        "OfferBlackoutDate",
        back_populates="offer",
        order_by="OfferBlackoutDate.blackout_date",
        cascade="all, delete-orphan",
    )
    redemptions: Mapped[List["OfferRedemption"]] = relationship(
        "OfferRedemption",
        back_populates="offer",
        order_by="OfferRedemption.redeemed_at",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("valid_until >= valid_from", name="ck_offer_validity_range"),
        CheckConstraint(
            "total_bookings IS NULL OR current_bookings <= total_bookings",
            name="ck_offer_usage_within_limit",
        ),
        CheckConstraint("discount_value >= 0", name="ck_offer_discount_non_negative"),
        Index("ix_offers_hotel_status", "hotel_id", "status"),
        Index("ix_offers_status_approved", "status", "is_approved"),
        Index("ix_offers_validity", "valid_from", "valid_until"),
    )

    def __repr__(self) -> str:
        return f"<Offer(id={self.id}, title={self.title}, status={self.status})>"

    # ==================== Validity ====================

    @property
    def usage_available(self) -> bool:
        """True while the total booking cap has not been reached."""
        return self.total_bookings is None or self.current_bookings < self.total_bookings

    def is_within_validity(self, now: datetime) -> bool:
        return self.valid_from <= now <= self.valid_until

    def is_elapsed(self, now: datetime) -> bool:
        return now > self.valid_until

    def blackout_set(self) -> set:
        return {item.blackout_date for item in self.blackout_dates}

    # ==================== Derived analytics ====================

    @property
    def conversion_rate(self) -> Decimal:
        """Bookings per click as a ratio (0 when there are no clicks)."""
        if not self.clicks:
            return Decimal("0")
        return (Decimal(self.bookings) / Decimal(self.clicks)).quantize(Decimal("0.0001"))

    @property
    def average_booking_value(self) -> Decimal:
        if not self.bookings:
            return Decimal("0.00")
        return CurrencyUtils.quantize(self.revenue / Decimal(self.bookings))

    @property
    def booking_percentage(self) -> Decimal:
        if not self.total_bookings:
            return Decimal("0")
        return CurrencyUtils.quantize(
            Decimal(self.current_bookings) * Decimal("100") / Decimal(self.total_bookings)
        )

    def days_remaining(self, now: Optional[datetime] = None) -> int:
        """Whole days until the validity window closes (never negative)."""
        now = now or DateTimeUtils.now_utc()
        seconds = (self.valid_until - now).total_seconds()
        days = math.ceil(seconds / 86400)
        return days if days > 0 else 0

    @property
    def savings_display(self) -> str:
        if self.discount_type == DiscountType.PERCENTAGE:
            return f"Save {self.discount_value.normalize():f}%"
        if self.discount_type == DiscountType.FIXED_AMOUNT:
            return f"Save {CurrencyUtils.format_currency(self.discount_value)}"
        if self.discount_type == DiscountType.FREE_NIGHTS:
            nights = self.free_nights or 0
            return f"{nights} Free Night{'s' if nights > 1 else ''}"
        if self.discount_type == DiscountType.UPGRADE:
            return f"Free Upgrade to {self.upgrade_category}"
        return "Special Offer"


class OfferBlackoutDate(TimestampModel):
    """Calendar date on which an offer cannot be used."""

    __tablename__ = "offer_blackout_dates"

    offer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("offers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    blackout_date: Mapped[date] = mapped_column(Date, nullable=False)

    offer: Mapped["Offer"] = relationship("Offer", back_populates="blackout_dates")

    __table_args__ = (
        UniqueConstraint("offer_id", "blackout_date", name="uq_offer_blackout_date"),
    )


class OfferRedemption(TimestampModel):
    """One successful application of an offer to one booking."""

    __tablename__ = "offer_redemptions"

    offer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("offers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    booking_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    redeemed_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=DateTimeUtils.now_utc,
    )
    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    original_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    offer: Mapped["Offer"] = relationship("Offer", back_populates="redemptions")

    __table_args__ = (
        Index("ix_offer_redemptions_offer_customer", "offer_id", "customer_id"),
    )
