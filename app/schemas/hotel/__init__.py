"""
Hotel engine schemas package.
"""

from app.schemas.hotel.availability import (
    AvailableRoom,
    RoomFreeResponse,
    UnavailabilityExplanation,
)
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
from app.schemas.hotel.pricing import NightRate, QuoteRequest, StayQuote
from app.schemas.hotel.reservation import (
    ReservationCreate,
    ReservationResponse,
    ResolutionCandidate,
    ResolutionResult,
)
from app.schemas.hotel.room import (
    CheckInRequest,
    HousekeepingUpdate,
    MaintenanceRequest,
    RoomAnalytics,
    RoomCreate,
    RoomResponse,
    SeasonalRateCreate,
)
from app.schemas.hotel.stay import Stay, StayRequest

__all__ = [
    # Stay
    "Stay",
    "StayRequest",
    # Availability
    "AvailableRoom",
    "RoomFreeResponse",
    "UnavailabilityExplanation",
    # Pricing
    "NightRate",
    "StayQuote",
    "QuoteRequest",
    # Offers
    "OfferCreate",
    "OfferResponse",
    "OfferAnalytics",
    "Applicability",
    "ApplicabilityRequest",
    "ApplyOfferRequest",
    "DiscountResult",
    "OfferApproval",
    # Reservations
    "ReservationCreate",
    "ReservationResponse",
    "ResolutionCandidate",
    "ResolutionResult",
    # Rooms
    "RoomCreate",
    "RoomResponse",
    "SeasonalRateCreate",
    "MaintenanceRequest",
    "HousekeepingUpdate",
    "CheckInRequest",
    "RoomAnalytics",
]
