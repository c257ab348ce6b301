# --- File: app/schemas/hotel/offer.py ---
"""
Offer schemas: definition, applicability verdicts, discounts and analytics.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.models.base.enums import DiscountType, OfferStatus, RoomType
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from app.schemas.hotel.stay import Stay

__all__ = [
    "OfferCreate",
    "OfferResponse",
    "OfferAnalytics",
    "Applicability",
    "DiscountResult",
    "ApplyOfferRequest",
    "ApplicabilityRequest",
    "OfferApproval",
]


class OfferCreate(BaseCreateSchema):
    """
    Offer definition.

    New offers start in ``draft`` and become redeemable once approved.
    """

    hotel_id: str
    owner_id: str
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    discount_type: DiscountType
    discount_value: Decimal = Field(default=Decimal("0.00"), ge=0)
    max_discount: Optional[Decimal] = Field(default=None, ge=0)
    free_nights: Optional[int] = Field(default=None, ge=1)
    upgrade_category: Optional[str] = Field(default=None, max_length=50)

    minimum_stay: int = Field(default=1, ge=1)
    maximum_stay: Optional[int] = Field(default=None, ge=1)
    minimum_rooms: int = Field(default=1, ge=1)
    minimum_booking_amount: Optional[Decimal] = Field(default=None, ge=0)
    advance_booking_days: Optional[int] = Field(default=None, ge=0)
    blackout_dates: List[date] = Field(default_factory=list)
    applicable_room_types: List[RoomType] = Field(default_factory=list)

    valid_from: datetime
    valid_until: datetime

    total_bookings: Optional[int] = Field(
        default=None,
        ge=1,
        description="Total redemptions allowed (None = unlimited)",
    )
    bookings_per_customer: int = Field(default=1, ge=1)

    promo_code: Optional[str] = Field(default=None, min_length=3, max_length=20)

    @field_validator("promo_code")
    @classmethod
    def normalize_promo_code(cls, v: Optional[str]) -> Optional[str]:
        """Promo codes are stored upper-cased."""
        return v.upper() if v else v

    @field_validator("valid_from", "valid_until")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        """Validity bounds are stored as naive UTC."""
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @model_validator(mode="after")
    def validate_offer(self) -> "OfferCreate":
        if self.valid_until < self.valid_from:
            raise ValueError("valid_until must not be before valid_from")
        if self.maximum_stay is not None and self.maximum_stay < self.minimum_stay:
            raise ValueError("maximum_stay must be at least minimum_stay")
        if self.discount_type == DiscountType.PERCENTAGE and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        if self.discount_type == DiscountType.FREE_NIGHTS and not self.free_nights:
            raise ValueError("free_nights is required for free-nights offers")
        if self.discount_type == DiscountType.UPGRADE and not self.upgrade_category:
            raise ValueError("upgrade_category is required for upgrade offers")
        return self


class OfferResponse(BaseResponseSchema):
    """Offer as exposed by the API."""

    hotel_id: str
    title: str
    discount_type: DiscountType
    discount_value: Decimal
    max_discount: Optional[Decimal] = None
    free_nights: Optional[int] = None
    minimum_stay: int
    maximum_stay: Optional[int] = None
    valid_from: datetime
    valid_until: datetime
    total_bookings: Optional[int] = None
    bookings_per_customer: int
    current_bookings: int
    promo_code: Optional[str] = None
    status: OfferStatus
    is_approved: bool
    savings_display: str


class OfferAnalytics(BaseSchema):
    """Read-only analytics snapshot; ratios are derived from the counters."""

    offer_id: str
    views: int
    clicks: int
    bookings: int
    revenue: Decimal
    conversion_rate: Decimal = Field(..., description="bookings / clicks")
    average_booking_value: Decimal = Field(..., description="revenue / bookings")
    current_bookings: int
    total_bookings: Optional[int] = None
    booking_percentage: Decimal
    days_remaining: int


class Applicability(BaseSchema):
    """Eligibility verdict; ``reason`` names the first failing rule."""

    applicable: bool
    reason: Optional[str] = None
    code: Optional[str] = None


class DiscountResult(BaseSchema):
    """Discount computed for an original amount."""

    original_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal


class ApplicabilityRequest(BaseSchema):
    """Request body for an applicability check."""

    stay: Stay
    customer_id: Optional[str] = None


class ApplyOfferRequest(BaseSchema):
    """Request body for redeeming an offer against a booking."""

    customer_id: str
    stay: Stay
    booking_id: Optional[str] = None


class OfferApproval(BaseSchema):
    approved_by: str
