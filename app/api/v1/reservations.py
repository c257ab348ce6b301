# app/api/v1/reservations.py
"""
Reservation ledger and conflict resolver endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas.hotel.reservation import (
    ReservationCreate,
    ReservationResponse,
    ResolutionResult,
)
from app.schemas.hotel.stay import StayRequest
from app.services.hotel import ReservationService, ResolverService

router = APIRouter(tags=["Reservations"])


@router.post(
    "/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_reservation(
    payload: ReservationCreate,
    service: ReservationService = Depends(deps.get_reservation_service),
):
    return service.reserve(
        payload.room_id,
        payload.check_in,
        payload.check_out,
        payload.guests,
        payload.customer_id,
        booking_id=payload.booking_id,
        amount=payload.amount,
    )


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
def read_reservation(
    reservation_id: str,
    service: ReservationService = Depends(deps.get_reservation_service),
):
    return service.get_reservation(reservation_id)


@router.post("/reservations/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: str,
    service: ReservationService = Depends(deps.get_reservation_service),
):
    return service.cancel(reservation_id)


@router.post("/resolve", response_model=ResolutionResult)
def resolve_stay(
    payload: StayRequest,
    service: ResolverService = Depends(deps.get_resolver_service),
):
    return service.resolve(payload)
