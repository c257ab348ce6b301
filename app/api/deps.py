# app/api/deps.py
"""
Shared FastAPI dependencies.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from app.api import deps

    @router.get("/rooms/{room_id}")
    def read_room(room_id: str, rooms = Depends(deps.get_room_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.hotel import (
    AvailabilityService,
    OfferService,
    PricingService,
    ReservationService,
    ResolverService,
    RoomService,
)


# --- Services -----------------------------------------------------------------

def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_pricing_service(db: Session = Depends(get_db)) -> PricingService:
    return PricingService(db)


def get_offer_service(db: Session = Depends(get_db)) -> OfferService:
    return OfferService(db)


def get_reservation_service(db: Session = Depends(get_db)) -> ReservationService:
    return ReservationService(db)


def get_resolver_service(db: Session = Depends(get_db)) -> ResolverService:
    return ResolverService(db)


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    return RoomService(db)


__all__ = [
    "get_db",
    "get_availability_service",
    "get_pricing_service",
    "get_offer_service",
    "get_reservation_service",
    "get_resolver_service",
    "get_room_service",
]
