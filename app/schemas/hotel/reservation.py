# --- File: app/schemas/hotel/reservation.py ---
"""
Reservation ledger and conflict resolver schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, computed_field

from app.models.base.enums import ReservationStatus, RoomType
from app.schemas.common.base import BaseResponseSchema, BaseSchema
from app.schemas.hotel.offer import Applicability, DiscountResult
from app.schemas.hotel.pricing import StayQuote

__all__ = [
    "ReservationCreate",
    "ReservationResponse",
    "ResolutionCandidate",
    "ResolutionResult",
]


class ReservationCreate(BaseSchema):
    """Request to hold a room for [check_in, check_out)."""

    room_id: str
    check_in: date
    check_out: date
    guests: int = Field(default=1, ge=1)
    customer_id: str
    booking_id: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)


class ReservationResponse(BaseResponseSchema):
    room_id: str
    booking_id: Optional[str] = None
    customer_id: str
    check_in: date
    check_out: date
    guests: int
    amount: Optional[Decimal] = None
    status: ReservationStatus
    cancelled_at: Optional[datetime] = None


class ResolutionCandidate(BaseSchema):
    """A free room priced for the stay, with the offer evaluated if requested."""

    room_id: str
    room_number: str
    room_type: RoomType
    quote: StayQuote
    applicability: Optional[Applicability] = None
    discount: Optional[DiscountResult] = None
    final_amount: Decimal


class ResolutionResult(BaseSchema):
    """Ranked answer to "what can I book, for how much"."""

    hotel_id: str
    check_in: date
    check_out: date
    nights: int
    guests: int
    rooms: int
    offer_id: Optional[str] = None
    candidates: List[ResolutionCandidate] = Field(default_factory=list)

    @computed_field
    @property
    def can_fulfil(self) -> bool:
        """Enough free rooms for the requested room count."""
        return len(self.candidates) >= self.rooms
