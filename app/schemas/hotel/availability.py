# --- File: app/schemas/hotel/availability.py ---
"""
Availability index schemas.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.models.base.enums import RoomStatus, RoomType
from app.schemas.common.base import BaseSchema

__all__ = [
    "AvailableRoom",
    "RoomFreeResponse",
    "UnavailabilityExplanation",
]


class AvailableRoom(BaseSchema):
    """Room returned by an availability search."""

    id: str
    room_number: str
    name: str
    room_type: RoomType
    max_occupancy: int
    base_price: Decimal
    status: RoomStatus


class RoomFreeResponse(BaseSchema):
    room_id: str
    check_in: date
    check_out: date
    is_free: bool


class UnavailabilityExplanation(BaseSchema):
    """Records that block a room for a date range."""

    room_id: str
    check_in: date
    check_out: date
    is_free: bool
    reason: Optional[str] = Field(default=None, description="Set when the room itself is unbookable")
    reservation_ids: List[str] = Field(default_factory=list)
    maintenance_window_ids: List[str] = Field(default_factory=list)
