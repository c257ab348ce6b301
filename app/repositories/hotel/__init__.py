"""
Hotel repositories package.
"""

from app.repositories.hotel.hotel_repository import HotelRepository
from app.repositories.hotel.offer_repository import OfferRepository
from app.repositories.hotel.reservation_repository import ReservationRepository
from app.repositories.hotel.room_repository import RoomRepository

__all__ = [
    "HotelRepository",
    "RoomRepository",
    "ReservationRepository",
    "OfferRepository",
]
