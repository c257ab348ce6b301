"""
Hotel models package.

Rooms with their seasonal rates and maintenance windows, reservation
intervals and promotional offers.
"""

from app.models.hotel.hotel import Hotel
from app.models.hotel.offer import Offer, OfferBlackoutDate, OfferRedemption
from app.models.hotel.reservation import ReservationInterval
from app.models.hotel.room import MaintenanceWindow, Room, SeasonalRate

__all__ = [
    "Hotel",
    "Room",
    "SeasonalRate",
    "MaintenanceWindow",
    "ReservationInterval",
    "Offer",
    "OfferBlackoutDate",
    "OfferRedemption",
]
