"""
Database models package.

Importing this package registers every model with the declarative base.
"""

from app.models.base import Base
from app.models.hotel import (
    Hotel,
    MaintenanceWindow,
    Offer,
    OfferBlackoutDate,
    OfferRedemption,
    ReservationInterval,
    Room,
    SeasonalRate,
)

__all__ = [
    "Base",
    "Hotel",
    "Room",
    "SeasonalRate",
    "MaintenanceWindow",
    "ReservationInterval",
    "Offer",
    "OfferBlackoutDate",
    "OfferRedemption",
]
