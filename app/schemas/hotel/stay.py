# --- File: app/schemas/hotel/stay.py ---
"""
Stay descriptions shared by pricing, offers and the conflict resolver.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.core.utils import DateTimeUtils
from app.models.base.enums import RoomType
from app.schemas.common.base import BaseSchema

__all__ = [
    "Stay",
    "StayRequest",
]


class Stay(BaseSchema):
    """
    Stay evaluated against an offer's eligibility rules.

    The date range is checked when ``nights`` is read so that a malformed
    range surfaces as a domain validation error.
    """

    check_in: date = Field(..., description="First night of the stay")
    check_out: date = Field(..., description="Departure date (exclusive)")
    rooms: int = Field(default=1, ge=1, description="Number of rooms booked")
    guests: int = Field(default=1, ge=1, description="Number of guests")
    amount: Decimal = Field(
        default=Decimal("0.00"),
        ge=0,
        description="Booking amount the offer is applied to",
    )
    room_type: Optional[RoomType] = Field(default=None, description="Room type booked")

    @property
    def nights(self) -> int:
        return DateTimeUtils.validate_stay_range(self.check_in, self.check_out)


class StayRequest(BaseSchema):
    """Candidate stay submitted to the reservation conflict resolver."""

    hotel_id: str = Field(..., description="Hotel to search")
    check_in: date = Field(..., description="First night of the stay")
    check_out: date = Field(..., description="Departure date (exclusive)")
    guests: int = Field(..., ge=1, description="Guests per room")
    rooms: int = Field(default=1, ge=1, description="Number of rooms requested")
    room_type: Optional[RoomType] = Field(default=None, description="Room type filter")
    offer_id: Optional[str] = Field(default=None, description="Offer to evaluate")
    customer_id: Optional[str] = Field(
        default=None,
        description="Customer, for per-customer offer limits",
    )
