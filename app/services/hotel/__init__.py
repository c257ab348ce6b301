"""
Hotel engine services.
"""

from app.services.hotel.availability_service import AvailabilityService
from app.services.hotel.offer_service import OfferService
from app.services.hotel.pricing_service import PricingService
from app.services.hotel.reservation_service import ReservationService
from app.services.hotel.resolver_service import ResolverService
from app.services.hotel.room_service import RoomService

__all__ = [
    "AvailabilityService",
    "PricingService",
    "OfferService",
    "ReservationService",
    "ResolverService",
    "RoomService",
]
