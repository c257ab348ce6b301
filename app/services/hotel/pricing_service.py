# app/services/hotel/pricing_service.py
"""
Rate composer for nightly pricing.

Handles seasonal overrides, weekend and holiday surcharges, extra-guest
charges and flat-rate taxes.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.utils import CurrencyUtils, DateTimeUtils
from app.models.hotel import Hotel, Room
from app.repositories.hotel import RoomRepository
from app.schemas.hotel.pricing import NightRate, StayQuote
from app.services.base import BaseService, Clock

ZERO = Decimal("0.00")


class PricingService(BaseService):
    """
    Service for stay pricing calculations.

    Responsibilities:
    - Compose per-night rates from base, seasonal and surcharge rules
    - Add extra-guest charges above the hotel's base occupancy
    - Apply hotel tax rates to produce the total
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.rooms = RoomRepository(db_session)

    def quote(self, room_id: str, check_in: date, check_out: date, guests: int) -> StayQuote:
        """Load a room with its pricing state and price the stay."""
        room = self.rooms.get_with_pricing(room_id)
        return self.price_stay(room, check_in, check_out, guests)

    # ==================== PRICE CALCULATION ====================

    def price_stay(self, room: Room, check_in: date, check_out: date, guests: int) -> StayQuote:
        """
        Price a stay in one room.

        Deterministic: identical room state and arguments always produce
        an identical quote.

        Args:
            room: Room with hotel and seasonal rates loaded
            check_in: First night
            check_out: Departure date (exclusive)
            guests: Number of guests

        Returns:
            StayQuote with the per-night breakdown and totals

        Raises:
            ValidationError: If the range or guest count is invalid
        """
        nights = DateTimeUtils.validate_stay_range(check_in, check_out)
        if guests is None or guests < 1:
            raise ValidationError(
                "At least one guest is required",
                field_errors={"guests": ["must be >= 1"]},
            )
        hotel: Optional[Hotel] = room.hotel

        breakdown = [
            self._price_night(room, hotel, night)
            for night in DateTimeUtils.iter_nights(check_in, check_out)
        ]
        room_subtotal = CurrencyUtils.quantize(sum((night.amount for night in breakdown), ZERO))

        extra_guests, extra_guest_charge = self._extra_guest_charge(hotel, guests, nights)
        subtotal = CurrencyUtils.quantize(room_subtotal + extra_guest_charge)

        gst_rate = hotel.gst_rate if hotel is not None else settings.pricing.DEFAULT_GST_RATE
        service_tax_rate = (
            hotel.service_tax_rate if hotel is not None else settings.pricing.DEFAULT_SERVICE_TAX_RATE
        )
        gst = CurrencyUtils.percentage_of(subtotal, gst_rate)
        service_tax = CurrencyUtils.percentage_of(subtotal, service_tax_rate)
        tax = CurrencyUtils.quantize(gst + service_tax)

        return StayQuote(
            room_id=room.id,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            nights=nights,
            per_night_breakdown=breakdown,
            room_subtotal=room_subtotal,
            extra_guests=extra_guests,
            extra_guest_charge=extra_guest_charge,
            subtotal=subtotal,
            gst=gst,
            service_tax=service_tax,
            tax=tax,
            total=CurrencyUtils.quantize(subtotal + tax),
            currency=settings.pricing.CURRENCY,
        )

    def _price_night(self, room: Room, hotel: Optional[Hotel], night: date) -> NightRate:
        # First matching active seasonal window wins
        season = room.seasonal_rate_for(night)
        base_rate = CurrencyUtils.quantize(season.price if season else room.base_price)

        weekend = ZERO
        if DateTimeUtils.is_weekend_night(night):
            weekend = CurrencyUtils.quantize(room.weekend_surcharge or ZERO)

        holiday = ZERO
        if hotel is not None and hotel.is_holiday(night):
            holiday = CurrencyUtils.quantize(room.holiday_surcharge or ZERO)

        return NightRate(
            night=night,
            base_rate=base_rate,
            seasonal_rate_name=season.name if season else None,
            weekend_surcharge=weekend,
            holiday_surcharge=holiday,
            amount=CurrencyUtils.quantize(base_rate + weekend + holiday),
        )

    @staticmethod
    def _extra_guest_charge(hotel: Optional[Hotel], guests: int, nights: int):
        base_occupancy = (
            hotel.base_occupancy if hotel is not None else settings.pricing.DEFAULT_BASE_OCCUPANCY
        )
        extra_guests = max(0, guests - base_occupancy)
        if not extra_guests or hotel is None:
            return extra_guests, ZERO
        charge = CurrencyUtils.to_decimal(hotel.extra_person_charge) * extra_guests * nights
        return extra_guests, CurrencyUtils.quantize(charge)

