# app/services/hotel/offer_service.py
"""
Offer ledger service.

Owns offer lifecycle, eligibility checks, atomic redemption and the
view/click/booking analytics counters.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ErrorCode,
    InvalidStateTransitionError,
    LimitExceededError,
    OfferNotApplicableError,
    OfferNotFoundError,
)
from app.models.base.enums import OfferStatus
from app.models.hotel import Offer
from app.repositories.hotel import HotelRepository, OfferRepository
from app.schemas.hotel.offer import (
    Applicability,
    DiscountResult,
    OfferAnalytics,
    OfferCreate,
)
from app.schemas.hotel.stay import Stay
from app.services.base import BaseService, Clock
from app.services.hotel import offer_rules
from app.services.hotel.offer_rules import RuleCode

# Allowed status transitions; expired and cancelled are terminal
OFFER_TRANSITIONS: Dict[OfferStatus, FrozenSet[OfferStatus]] = {
    OfferStatus.DRAFT: frozenset({OfferStatus.ACTIVE, OfferStatus.CANCELLED}),
    OfferStatus.ACTIVE: frozenset({OfferStatus.PAUSED, OfferStatus.CANCELLED, OfferStatus.EXPIRED}),
    OfferStatus.PAUSED: frozenset({OfferStatus.ACTIVE, OfferStatus.CANCELLED, OfferStatus.EXPIRED}),
    OfferStatus.EXPIRED: frozenset(),
    OfferStatus.CANCELLED: frozenset(),
}


class OfferService(BaseService):
    """
    Service for promotional offers.

    Responsibilities:
    - Create offers and drive the status state machine
    - Check applicability and compute discounts
    - Redeem offers atomically against usage limits
    - Maintain analytics counters and expire elapsed offers
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.offers = OfferRepository(db_session)
        self.hotels = HotelRepository(db_session)

    # ==================== CREATION ====================

    def create_offer(self, data: OfferCreate) -> Offer:
        """
        Create a draft offer.

        Args:
            data: Offer definition

        Returns:
            The persisted offer in ``draft`` status
        """
        with self.transaction():
            self.hotels.get_by_id(data.hotel_id)
            values = data.model_dump(exclude={"blackout_dates", "applicable_room_types"})
            offer = self.offers.create(
                **values,
                applicable_room_types=[room_type.value for room_type in data.applicable_room_types],
                status=OfferStatus.DRAFT,
            )
            if data.blackout_dates:
                self.offers.add_blackout_dates(offer, data.blackout_dates)

        self._logger.info(
            "Offer created",
            extra={"offer_id": offer.id, "hotel_id": offer.hotel_id, "discount_type": offer.discount_type.value},
        )
        return offer

    def add_blackout_dates(self, offer_id: str, dates: Iterable[date]) -> Offer:
        with self.transaction():
            offer = self.offers.get_with_rules(offer_id)
            self.offers.add_blackout_dates(offer, dates)
        return offer

    # ==================== LOOKUPS ====================

    def get_offer(self, offer_id: str) -> Offer:
        """
        Load an offer through the write path.

        An active or paused offer whose validity has ended is persisted as
        ``expired`` before it is returned.
        """
        offer = self.offers.get_with_rules(offer_id)
        if offer.status in (OfferStatus.ACTIVE, OfferStatus.PAUSED) and offer.is_elapsed(self.now()):
            with self.transaction():
                self.offers.expire_elapsed(self.now(), offer_id=offer_id)
            self._logger.info("Offer expired on load", extra={"offer_id": offer_id})
        return offer

    def find_by_promo_code(self, promo_code: str) -> Offer:
        offer = self.offers.find_by_promo_code(promo_code)
        if offer is None:
            raise OfferNotFoundError(promo_code.upper())
        return offer

    def active_offers(self, hotel_id: Optional[str] = None, now: Optional[datetime] = None) -> List[Offer]:
        """Offers currently redeemable, filtered at query time."""
        return self.offers.find_active(hotel_id, now or self.now())

    # ==================== APPLICABILITY & DISCOUNT ====================

    def is_applicable(
        self,
        offer: Offer,
        stay: Stay,
        customer_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Applicability:
        """
        Check whether an offer can be applied to a stay.

        Read-only: a lagging stored status is never corrected here, but
        validity is always compared against ``now``.

        Args:
            offer: Offer to evaluate
            stay: Stay being booked
            customer_id: Customer, enables the per-customer limit check
            now: Reference time (defaults to the service clock)

        Returns:
            Applicability verdict
        """
        prior = None
        if customer_id is not None:
            prior = self.offers.count_customer_redemptions(offer.id, customer_id)
        return offer_rules.evaluate_applicability(offer, stay, now or self.now(), prior)

    def check_applicability(
        self,
        offer_id: str,
        stay: Stay,
        customer_id: Optional[str] = None,
    ) -> Applicability:
        return self.is_applicable(self.offers.get_with_rules(offer_id), stay, customer_id)

    def calculate_discount(
        self,
        offer: Offer,
        original_amount: Union[int, str, Decimal],
        nights: int = 1,
    ) -> DiscountResult:
        return offer_rules.calculate_discount(offer, original_amount, nights)

    # ==================== REDEMPTION ====================

    def apply_offer(
        self,
        offer_id: str,
        customer_id: str,
        stay: Stay,
        booking_id: Optional[str] = None,
    ) -> DiscountResult:
        """
        Redeem an offer for a booking.

        Re-validates the offer, takes a usage slot with a conditional
        UPDATE, re-counts the customer's redemptions, records the
        redemption and updates analytics, all in one transaction.

        Args:
            offer_id: Offer to redeem
            customer_id: Redeeming customer
            stay: Stay details including the amount to discount
            booking_id: External booking reference

        Returns:
            DiscountResult for the stay amount

        Raises:
            OfferNotFoundError: If the offer does not exist
            OfferNotApplicableError: If an eligibility rule fails
            LimitExceededError: If the total or per-customer cap is reached
        """
        nights = stay.nights
        self.get_offer(offer_id)

        with self.transaction():
            offer = self.offers.get_with_rules(offer_id, for_update=True)
            now = self.now()

            verdict = self.is_applicable(offer, stay, customer_id, now)
            if not verdict.applicable:
                raise self._rejection_error(offer, verdict)

            if not self.offers.claim_usage_slot(offer_id):
                raise LimitExceededError(
                    "Offer booking limit exceeded",
                    limit=offer.total_bookings,
                    current=offer.current_bookings,
                    error_code=ErrorCode.OFFER_LIMIT_EXCEEDED,
                )

            prior = self.offers.count_customer_redemptions(offer_id, customer_id)
            if prior >= offer.bookings_per_customer:
                raise LimitExceededError(
                    "Customer booking limit exceeded for this offer",
                    limit=offer.bookings_per_customer,
                    current=prior,
                    error_code=ErrorCode.CUSTOMER_LIMIT_EXCEEDED,
                )

            result = offer_rules.calculate_discount(offer, stay.amount, nights)
            self.offers.add_redemption(
                offer_id=offer_id,
                customer_id=customer_id,
                booking_id=booking_id,
                redeemed_at=now,
                check_in=stay.check_in,
                check_out=stay.check_out,
                rooms=stay.rooms,
                guests=stay.guests,
                original_amount=result.original_amount,
                discount_amount=result.discount_amount,
                final_amount=result.final_amount,
            )
            self.offers.record_booking(offer_id, result.final_amount)

        self._logger.info(
            "Offer redeemed",
            extra={
                "offer_id": offer_id,
                "customer": customer_id,
                "discount_amount": str(result.discount_amount),
                "final_amount": str(result.final_amount),
            },
        )
        return result

    def _rejection_error(self, offer: Offer, verdict: Applicability) -> Exception:
        self._logger.warning(
            "Offer redemption rejected",
            extra={"offer_id": offer.id, "reason": verdict.reason, "rule": verdict.code},
        )
        if verdict.code == RuleCode.OFFER_LIMIT_EXCEEDED:
            return LimitExceededError(
                verdict.reason,
                limit=offer.total_bookings,
                current=offer.current_bookings,
                error_code=ErrorCode.OFFER_LIMIT_EXCEEDED,
            )
        if verdict.code == RuleCode.CUSTOMER_LIMIT_EXCEEDED:
            return LimitExceededError(
                verdict.reason,
                limit=offer.bookings_per_customer,
                error_code=ErrorCode.CUSTOMER_LIMIT_EXCEEDED,
            )
        return OfferNotApplicableError(verdict.reason, offer_id=offer.id, rule=verdict.code)

    # ==================== STATUS TRANSITIONS ====================

    def approve(self, offer_id: str, approved_by: str) -> Offer:
        """Approve a draft offer, making it active."""
        offer = self.get_offer(offer_id)
        with self.transaction():
            self._transition(offer, OfferStatus.ACTIVE, allowed_from={OfferStatus.DRAFT})
            offer.is_approved = True
            offer.approved_by = approved_by
            offer.approved_at = self.now()
            self.offers.flush("approve_offer")
        return offer

    def pause(self, offer_id: str) -> Offer:
        return self._change_status(offer_id, OfferStatus.PAUSED)

    def resume(self, offer_id: str) -> Offer:
        return self._change_status(offer_id, OfferStatus.ACTIVE, allowed_from={OfferStatus.PAUSED})

    def cancel(self, offer_id: str) -> Offer:
        return self._change_status(offer_id, OfferStatus.CANCELLED)

    def expire(self, offer_id: str) -> Offer:
        return self._change_status(offer_id, OfferStatus.EXPIRED)

    def _change_status(
        self,
        offer_id: str,
        target: OfferStatus,
        allowed_from: Optional[set] = None,
    ) -> Offer:
        offer = self.get_offer(offer_id)
        with self.transaction():
            self._transition(offer, target, allowed_from)
            self.offers.flush("change_offer_status")
        return offer

    def _transition(
        self,
        offer: Offer,
        target: OfferStatus,
        allowed_from: Optional[set] = None,
    ) -> None:
        current = offer.status
        permitted = target in OFFER_TRANSITIONS[current]
        if allowed_from is not None:
            permitted = permitted and current in allowed_from
        if not permitted:
            self._logger.warning(
                "Illegal offer status transition",
                extra={"offer_id": offer.id, "current_status": current.value, "target_status": target.value},
            )
            raise InvalidStateTransitionError("offer", current.value, target.value)
        offer.status = target
        self._logger.info(
            "Offer status changed",
            extra={"offer_id": offer.id, "from_status": current.value, "to_status": target.value},
        )

    def expire_elapsed(self, now: Optional[datetime] = None) -> int:
        """
        Sweep active and paused offers whose validity has ended.

        Returns:
            Number of offers moved to ``expired``
        """
        with self.transaction():
            count = self.offers.expire_elapsed(now or self.now())
        if count:
            self._logger.info("Expired elapsed offers", extra={"expired_count": count})
        return count

    # ==================== ANALYTICS ====================

    def record_view(self, offer_id: str) -> None:
        self._increment(offer_id, "views")

    def record_click(self, offer_id: str) -> None:
        self._increment(offer_id, "clicks")

    def _increment(self, offer_id: str, field: str) -> None:
        with self.transaction():
            if not self.offers.increment_counter(offer_id, field):
                raise OfferNotFoundError(offer_id)

    def analytics_snapshot(self, offer_id: str) -> OfferAnalytics:
        """Read-only analytics with derived ratios."""
        offer = self.offers.get_by_id(offer_id)
        return OfferAnalytics(
            offer_id=offer.id,
            views=offer.views,
            clicks=offer.clicks,
            bookings=offer.bookings,
            revenue=offer.revenue,
            conversion_rate=offer.conversion_rate,
            average_booking_value=offer.average_booking_value,
            current_bookings=offer.current_bookings,
            total_bookings=offer.total_bookings,
            booking_percentage=offer.booking_percentage,
            days_remaining=offer.days_remaining(self.now()),
        )
