# app/api/v1/availability.py
"""
Availability endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.models.base.enums import RoomType
from app.schemas.hotel.availability import (
    AvailableRoom,
    RoomFreeResponse,
    UnavailabilityExplanation,
)
from app.services.hotel import AvailabilityService

router = APIRouter(tags=["Availability"])


@router.get("/hotels/{hotel_id}/availability", response_model=List[AvailableRoom])
def list_available_rooms(
    hotel_id: str,
    check_in: date = Query(..., description="First night"),
    check_out: date = Query(..., description="Departure date (exclusive)"),
    guests: int = Query(1, description="Guests per room"),
    room_type: Optional[RoomType] = Query(None),
    service: AvailabilityService = Depends(deps.get_availability_service),
):
    return service.list_available(hotel_id, check_in, check_out, guests, room_type)


@router.get("/rooms/{room_id}/availability", response_model=RoomFreeResponse)
def check_room_availability(
    room_id: str,
    check_in: date = Query(...),
    check_out: date = Query(...),
    service: AvailabilityService = Depends(deps.get_availability_service),
):
    return RoomFreeResponse(
        room_id=room_id,
        check_in=check_in,
        check_out=check_out,
        is_free=service.is_room_free(room_id, check_in, check_out),
    )


@router.get("/rooms/{room_id}/conflicts", response_model=UnavailabilityExplanation)
def explain_room_unavailability(
    room_id: str,
    check_in: date = Query(...),
    check_out: date = Query(...),
    service: AvailabilityService = Depends(deps.get_availability_service),
):
    return service.explain_unavailability(room_id, check_in, check_out)
