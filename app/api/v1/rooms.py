# app/api/v1/rooms.py
"""
Room registry and quote endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.schemas.hotel.pricing import QuoteRequest, StayQuote
from app.schemas.hotel.room import (
    CheckInRequest,
    HousekeepingUpdate,
    MaintenanceRequest,
    RoomAnalytics,
    RoomCreate,
    RoomResponse,
    SeasonalRateCreate,
)
from app.services.hotel import PricingService, RoomService

router = APIRouter(tags=["Rooms"])


@router.post(
    "/hotels/{hotel_id}/rooms",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_room(
    hotel_id: str,
    payload: RoomCreate,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.create_room(hotel_id, payload)


@router.get("/rooms/{room_id}", response_model=RoomResponse)
def read_room(room_id: str, service: RoomService = Depends(deps.get_room_service)):
    return service.get_room(room_id)


@router.post("/rooms/{room_id}/quote", response_model=StayQuote)
def quote_stay(
    room_id: str,
    payload: QuoteRequest,
    service: PricingService = Depends(deps.get_pricing_service),
):
    return service.quote(room_id, payload.check_in, payload.check_out, payload.guests)


# --- Lifecycle ----------------------------------------------------------------

@router.post("/rooms/{room_id}/check-in", response_model=RoomResponse)
def check_in_room(
    room_id: str,
    payload: CheckInRequest,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.check_in(room_id, payload.reservation_id)


@router.post("/rooms/{room_id}/check-out", response_model=RoomResponse)
def check_out_room(room_id: str, service: RoomService = Depends(deps.get_room_service)):
    return service.check_out(room_id)


@router.post("/rooms/{room_id}/maintenance", response_model=RoomResponse)
def schedule_maintenance(
    room_id: str,
    payload: MaintenanceRequest,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.schedule_maintenance(
        room_id,
        payload.start_date,
        payload.end_date,
        payload.reason,
        payload.kind,
    )


@router.post("/rooms/{room_id}/maintenance/complete", response_model=RoomResponse)
def complete_maintenance(room_id: str, service: RoomService = Depends(deps.get_room_service)):
    return service.complete_maintenance(room_id)


@router.post("/rooms/{room_id}/out-of-order", response_model=RoomResponse)
def set_out_of_order(room_id: str, service: RoomService = Depends(deps.get_room_service)):
    return service.set_out_of_order(room_id)


@router.put("/rooms/{room_id}/housekeeping", response_model=RoomResponse)
def update_housekeeping(
    room_id: str,
    payload: HousekeepingUpdate,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.update_housekeeping(room_id, payload.status, payload.cleaned_by, payload.notes)


@router.post("/rooms/{room_id}/seasonal-rates", response_model=RoomResponse)
def add_seasonal_rate(
    room_id: str,
    payload: SeasonalRateCreate,
    service: RoomService = Depends(deps.get_room_service),
):
    return service.add_seasonal_rate(room_id, payload)


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_room(room_id: str, service: RoomService = Depends(deps.get_room_service)):
    service.deactivate(room_id)


@router.get("/rooms/{room_id}/analytics", response_model=RoomAnalytics)
def room_analytics(
    room_id: str,
    start: date = Query(...),
    end: date = Query(...),
    service: RoomService = Depends(deps.get_room_service),
):
    return service.room_analytics_snapshot(room_id, start, end)
