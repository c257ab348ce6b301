# --- File: app/schemas/hotel/pricing.py ---
"""
Rate composer output schemas.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "NightRate",
    "StayQuote",
    "QuoteRequest",
]


class NightRate(BaseSchema):
    """Price of a single night."""

    night: date = Field(..., description="Calendar date of the night")
    base_rate: Decimal = Field(..., description="Base or seasonal nightly price")
    seasonal_rate_name: Optional[str] = Field(
        default=None,
        description="Seasonal window that set the base rate",
    )
    weekend_surcharge: Decimal = Field(default=Decimal("0.00"))
    holiday_surcharge: Decimal = Field(default=Decimal("0.00"))
    amount: Decimal = Field(..., description="Total for the night")


class StayQuote(BaseSchema):
    """Full price breakdown for a stay in one room."""

    room_id: str
    check_in: date
    check_out: date
    guests: int
    nights: int
    per_night_breakdown: List[NightRate]
    room_subtotal: Decimal = Field(..., description="Sum of nightly amounts")
    extra_guests: int = Field(default=0, description="Guests above base occupancy")
    extra_guest_charge: Decimal = Field(default=Decimal("0.00"))
    subtotal: Decimal = Field(..., description="Room subtotal plus extra guest charge")
    gst: Decimal = Field(default=Decimal("0.00"))
    service_tax: Decimal = Field(default=Decimal("0.00"))
    tax: Decimal = Field(default=Decimal("0.00"), description="gst + service_tax")
    total: Decimal
    currency: str = Field(default="INR")


class QuoteRequest(BaseSchema):
    """Request body for pricing a stay."""

    check_in: date
    check_out: date
    guests: int = Field(default=1, ge=1)
