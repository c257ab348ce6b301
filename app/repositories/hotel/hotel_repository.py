# app/repositories/hotel/hotel_repository.py
"""
Hotel repository.
"""

from sqlalchemy.orm import Session

from app.core.exceptions import HotelNotFoundError
from app.models.hotel import Hotel
from app.repositories.base.base_repository import BaseRepository


class HotelRepository(BaseRepository[Hotel]):
    """Repository for the hotel attributes consumed by pricing and offers."""

    not_found_error = HotelNotFoundError

    def __init__(self, session: Session):
        super().__init__(Hotel, session)
