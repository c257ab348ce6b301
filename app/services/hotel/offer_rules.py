# app/services/hotel/offer_rules.py
"""
Offer eligibility and discount rules.

Pure functions of an offer, a stay and a reference time. They never touch
the session, so the conflict resolver can call them on a read path.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from app.core.utils import CurrencyUtils
from app.models.base.enums import DiscountType, OfferStatus
from app.models.hotel import Offer
from app.schemas.hotel.offer import Applicability, DiscountResult
from app.schemas.hotel.stay import Stay

ZERO = Decimal("0.00")


class RuleCode:
    """Machine readable codes for the first failing eligibility rule."""

    OFFER_INACTIVE = "OFFER_INACTIVE"
    OFFER_LIMIT_EXCEEDED = "OFFER_LIMIT_EXCEEDED"
    MINIMUM_STAY = "MINIMUM_STAY"
    MAXIMUM_STAY = "MAXIMUM_STAY"
    MINIMUM_ROOMS = "MINIMUM_ROOMS"
    MINIMUM_AMOUNT = "MINIMUM_AMOUNT"
    ADVANCE_BOOKING = "ADVANCE_BOOKING"
    BLACKOUT_DATE = "BLACKOUT_DATE"
    ROOM_TYPE = "ROOM_TYPE"
    CUSTOMER_LIMIT_EXCEEDED = "CUSTOMER_LIMIT_EXCEEDED"


LIMIT_CODES = frozenset({RuleCode.OFFER_LIMIT_EXCEEDED, RuleCode.CUSTOMER_LIMIT_EXCEEDED})


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _reject(reason: str, code: str) -> Applicability:
    return Applicability(applicable=False, reason=reason, code=code)


# ==================== APPLICABILITY ====================

def evaluate_applicability(
    offer: Offer,
    stay: Stay,
    now: datetime,
    prior_redemptions: Optional[int] = None,
) -> Applicability:
    """
    Evaluate an offer's eligibility rules against a stay.

    Rules run in a fixed order and the first failure wins.

    Args:
        offer: Offer with its blackout dates loaded
        stay: Stay being booked
        now: Reference time for validity and advance-booking checks
        prior_redemptions: The customer's earlier redemptions of this
            offer, or None to skip the per-customer check

    Returns:
        Applicability verdict with the failing reason and code
    """
    nights = stay.nights

    if offer.status != OfferStatus.ACTIVE or not offer.is_within_validity(now):
        return _reject("Offer expired or inactive", RuleCode.OFFER_INACTIVE)
    if not offer.usage_available:
        return _reject("Offer booking limit exceeded", RuleCode.OFFER_LIMIT_EXCEEDED)

    if nights < offer.minimum_stay:
        return _reject(
            f"Minimum stay of {_plural(offer.minimum_stay, 'night')} required",
            RuleCode.MINIMUM_STAY,
        )

    if offer.maximum_stay is not None and nights > offer.maximum_stay:
        return _reject(
            f"Maximum stay of {_plural(offer.maximum_stay, 'night')} exceeded",
            RuleCode.MAXIMUM_STAY,
        )

    if stay.rooms < offer.minimum_rooms:
        return _reject(
            f"Minimum {_plural(offer.minimum_rooms, 'room')} required",
            RuleCode.MINIMUM_ROOMS,
        )

    if offer.minimum_booking_amount is not None and stay.amount < offer.minimum_booking_amount:
        return _reject(
            f"Minimum booking amount is {CurrencyUtils.format_currency(offer.minimum_booking_amount)}",
            RuleCode.MINIMUM_AMOUNT,
        )

    if offer.advance_booking_days:
        days_ahead = (stay.check_in - now.date()).days
        if days_ahead < offer.advance_booking_days:
            return _reject(
                f"Must book at least {_plural(offer.advance_booking_days, 'day')} in advance",
                RuleCode.ADVANCE_BOOKING,
            )

    blackout = offer.blackout_set()
    if blackout and any(
        stay.check_in <= day < stay.check_out for day in blackout
    ):
        return _reject("Offer not available for selected dates", RuleCode.BLACKOUT_DATE)

    if offer.applicable_room_types:
        room_type = stay.room_type.value if stay.room_type is not None else None
        if room_type not in offer.applicable_room_types:
            return _reject("Offer not available for this room type", RuleCode.ROOM_TYPE)

    if prior_redemptions is not None and prior_redemptions >= offer.bookings_per_customer:
        return _reject(
            "Customer booking limit exceeded for this offer",
            RuleCode.CUSTOMER_LIMIT_EXCEEDED,
        )

    return Applicability(applicable=True)


# ==================== DISCOUNT ====================

def calculate_discount(
    offer: Offer,
    original_amount: Union[int, str, Decimal],
    nights: int = 1,
) -> DiscountResult:
    """
    Compute the discount an offer grants on an amount.

    Args:
        offer: Offer whose discount definition applies
        original_amount: Amount before discount
        nights: Nights in the stay (used by free-night offers)

    Returns:
        DiscountResult where 0 <= discount <= original
    """
    original = CurrencyUtils.quantize(original_amount)
    if original < ZERO:
        original = ZERO
    discount = ZERO

    if offer.discount_type == DiscountType.PERCENTAGE:
        discount = CurrencyUtils.percentage_of(original, offer.discount_value)
        if offer.max_discount and discount > offer.max_discount:
            discount = CurrencyUtils.quantize(offer.max_discount)

    elif offer.discount_type == DiscountType.FIXED_AMOUNT:
        discount = min(CurrencyUtils.quantize(offer.discount_value), original)

    elif offer.discount_type == DiscountType.FREE_NIGHTS:
        if nights > 0 and offer.free_nights:
            free = min(offer.free_nights, nights)
            discount = CurrencyUtils.quantize(original * Decimal(free) / Decimal(nights))

    # Upgrade and package offers carry no monetary discount

    discount = max(ZERO, min(discount, original))
    return DiscountResult(
        original_amount=original,
        discount_amount=discount,
        final_amount=max(ZERO, original - discount),
    )
