# app/api/v1/offers.py
"""
Offer ledger endpoints.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas.hotel.offer import (
    Applicability,
    ApplicabilityRequest,
    ApplyOfferRequest,
    DiscountResult,
    OfferAnalytics,
    OfferApproval,
    OfferCreate,
    OfferResponse,
)
from app.services.hotel import OfferService

router = APIRouter(tags=["Offers"])


@router.post("/offers", response_model=OfferResponse, status_code=status.HTTP_201_CREATED)
def create_offer(payload: OfferCreate, service: OfferService = Depends(deps.get_offer_service)):
    return service.create_offer(payload)


@router.post("/offers/expire-elapsed")
def expire_elapsed_offers(service: OfferService = Depends(deps.get_offer_service)) -> Dict[str, int]:
    return {"expired": service.expire_elapsed()}


@router.get("/offers/promo/{promo_code}", response_model=OfferResponse)
def read_offer_by_promo_code(
    promo_code: str,
    service: OfferService = Depends(deps.get_offer_service),
):
    return service.find_by_promo_code(promo_code)


@router.get("/hotels/{hotel_id}/offers/active", response_model=List[OfferResponse])
def list_active_offers(hotel_id: str, service: OfferService = Depends(deps.get_offer_service)):
    return service.active_offers(hotel_id)


@router.get("/offers/{offer_id}", response_model=OfferResponse)
def read_offer(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    return service.get_offer(offer_id)


# --- Applicability and redemption ---------------------------------------------

@router.post("/offers/{offer_id}/applicability", response_model=Applicability)
def check_offer_applicability(
    offer_id: str,
    payload: ApplicabilityRequest,
    service: OfferService = Depends(deps.get_offer_service),
):
    return service.check_applicability(offer_id, payload.stay, payload.customer_id)


@router.post("/offers/{offer_id}/redeem", response_model=DiscountResult)
def redeem_offer(
    offer_id: str,
    payload: ApplyOfferRequest,
    service: OfferService = Depends(deps.get_offer_service),
):
    return service.apply_offer(offer_id, payload.customer_id, payload.stay, payload.booking_id)


# --- Status transitions -------------------------------------------------------

@router.post("/offers/{offer_id}/approve", response_model=OfferResponse)
def approve_offer(
    offer_id: str,
    payload: OfferApproval,
    service: OfferService = Depends(deps.get_offer_service),
):
    return service.approve(offer_id, payload.approved_by)


@router.post("/offers/{offer_id}/pause", response_model=OfferResponse)
def pause_offer(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    return service.pause(offer_id)


@router.post("/offers/{offer_id}/resume", response_model=OfferResponse)
def resume_offer(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    return service.resume(offer_id)


@router.post("/offers/{offer_id}/cancel", response_model=OfferResponse)
def cancel_offer(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    return service.cancel(offer_id)


# --- Analytics ----------------------------------------------------------------

@router.post("/offers/{offer_id}/views", status_code=status.HTTP_204_NO_CONTENT)
def record_offer_view(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    service.record_view(offer_id)


@router.post("/offers/{offer_id}/clicks", status_code=status.HTTP_204_NO_CONTENT)
def record_offer_click(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    service.record_click(offer_id)


@router.get("/offers/{offer_id}/analytics", response_model=OfferAnalytics)
def offer_analytics(offer_id: str, service: OfferService = Depends(deps.get_offer_service)):
    return service.analytics_snapshot(offer_id)
