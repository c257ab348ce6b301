# --- File: app/schemas/hotel/room.py ---
"""
Room registry schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from app.models.base.enums import (
    BedType,
    HousekeepingStatus,
    MaintenanceKind,
    RoomStatus,
    RoomType,
)
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "SeasonalRateCreate",
    "RoomCreate",
    "RoomResponse",
    "MaintenanceRequest",
    "HousekeepingUpdate",
    "CheckInRequest",
    "RoomAnalytics",
]


class SeasonalRateCreate(BaseCreateSchema):
    """Seasonal price override with inclusive bounds."""

    name: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date
    price: Decimal = Field(..., ge=0)
    is_active: bool = True

    @model_validator(mode="after")
    def validate_window(self) -> "SeasonalRateCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class RoomCreate(BaseCreateSchema):
    """Room definition; max_occupancy defaults to adults + children."""

    room_number: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    room_type: RoomType
    adults: int = Field(default=2, ge=1)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)
    max_occupancy: Optional[int] = Field(default=None, ge=1)
    bed_type: BedType = BedType.DOUBLE
    bed_count: int = Field(default=1, ge=1)
    base_price: Decimal = Field(..., ge=0)
    weekend_surcharge: Decimal = Field(default=Decimal("0.00"), ge=0)
    holiday_surcharge: Decimal = Field(default=Decimal("0.00"), ge=0)
    seasonal_rates: List[SeasonalRateCreate] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_capacity(self) -> "RoomCreate":
        if self.max_occupancy is not None and self.max_occupancy < self.adults + self.children:
            raise ValueError("max_occupancy must cover adults + children")
        return self


class RoomResponse(BaseResponseSchema):
    hotel_id: str
    room_number: str
    name: str
    room_type: RoomType
    adults: int
    children: int
    max_occupancy: int
    base_price: Decimal
    weekend_surcharge: Decimal
    holiday_surcharge: Decimal
    status: RoomStatus
    housekeeping_status: HousekeepingStatus
    inspection_required: bool


class MaintenanceRequest(BaseSchema):
    """Maintenance window over [start_date, end_date)."""

    start_date: date
    end_date: date
    reason: Optional[str] = Field(default=None, max_length=255)
    kind: MaintenanceKind = MaintenanceKind.MAINTENANCE


class HousekeepingUpdate(BaseSchema):
    status: HousekeepingStatus
    cleaned_by: Optional[str] = None
    notes: Optional[str] = None


class CheckInRequest(BaseSchema):
    reservation_id: Optional[str] = None


class RoomAnalytics(BaseSchema):
    """Occupancy figures derived from reservations over a period."""

    room_id: str
    period_start: date
    period_end: date
    bookings: int
    booked_nights: int
    available_nights: int
    occupancy_rate: Decimal = Field(..., description="Percent of nights booked")
    revenue: Decimal
    generated_at: datetime
