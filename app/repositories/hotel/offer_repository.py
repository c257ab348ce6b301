# app/repositories/hotel/offer_repository.py
"""
Offer repository with atomic usage and analytics counters.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import OfferNotFoundError
from app.core.utils import CurrencyUtils
from app.models.base.enums import OfferStatus
from app.models.hotel import Offer, OfferBlackoutDate, OfferRedemption
from app.repositories.base.base_repository import BaseRepository

EXPIRABLE_STATUSES = (OfferStatus.ACTIVE, OfferStatus.PAUSED)
COUNTER_FIELDS = ("views", "clicks")


class OfferRepository(BaseRepository[Offer]):
    """
    Repository for offers, blackout dates and redemptions.

    Usage and analytics counters are changed with single conditional
    UPDATE statements, never read-modify-write.
    """

    not_found_error = OfferNotFoundError

    def __init__(self, session: Session):
        super().__init__(Offer, session)

    # ============================================================================
    # LOOKUPS
    # ============================================================================

    def get_with_rules(self, offer_id: str, for_update: bool = False) -> Offer:
        """Load an offer together with its blackout dates."""
        stmt = self._not_deleted(
            select(Offer)
            .where(Offer.id == offer_id)
            .options(selectinload(Offer.blackout_dates))
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        with self.translate_errors("get_with_rules"):
            offer = self.db.execute(stmt).scalars().first()
        if offer is None:
            raise OfferNotFoundError(offer_id)
        return offer

    def find_by_promo_code(self, promo_code: str) -> Optional[Offer]:
        stmt = self._not_deleted(
            select(Offer)
            .where(Offer.promo_code == promo_code.strip().upper())
            .options(selectinload(Offer.blackout_dates))
        )
        with self.translate_errors("find_by_promo_code"):
            return self.db.execute(stmt).scalars().first()

    def find_active(self, hotel_id: Optional[str], now: datetime) -> List[Offer]:
        """
        Offers that are currently active.

        The filter is evaluated at query time so an offer whose stored
        status still says ``active`` after its validity ended is excluded.
        """
        stmt = (
            select(Offer)
            .where(
                Offer.status == OfferStatus.ACTIVE,
                Offer.is_approved.is_(True),
                Offer.valid_from <= now,
                Offer.valid_until >= now,
                or_(
                    Offer.total_bookings.is_(None),
                    Offer.current_bookings < Offer.total_bookings,
                ),
            )
            .options(selectinload(Offer.blackout_dates))
            .order_by(Offer.valid_until, Offer.title)
        )
        if hotel_id is not None:
            stmt = stmt.where(Offer.hotel_id == hotel_id)
        stmt = self._not_deleted(stmt)
        with self.translate_errors("find_active"):
            return list(self.db.execute(stmt).scalars().all())

    # ============================================================================
    # EXPIRY
    # ============================================================================

    def expire_elapsed(self, now: datetime, offer_id: Optional[str] = None) -> int:
        """
        Persist ``expired`` for active or paused offers past their validity.

        Args:
            now: Reference time
            offer_id: Restrict the sweep to one offer

        Returns:
            Number of offers expired
        """
        stmt = (
            update(Offer)
            .where(
                Offer.status.in_(EXPIRABLE_STATUSES),
                Offer.valid_until < now,
                Offer.is_deleted.is_(False),
            )
            .values(status=OfferStatus.EXPIRED)
            .execution_options(synchronize_session="fetch")
        )
        if offer_id is not None:
            stmt = stmt.where(Offer.id == offer_id)
        with self.translate_errors("expire_elapsed"):
            return self.db.execute(stmt).rowcount

    # ============================================================================
    # USAGE AND ANALYTICS COUNTERS
    # ============================================================================

    def claim_usage_slot(self, offer_id: str) -> bool:
        """
        Atomically take one slot of the total booking limit.

        Returns:
            False when the limit is already reached
        """
        stmt = (
            update(Offer)
            .where(
                Offer.id == offer_id,
                or_(
                    Offer.total_bookings.is_(None),
                    Offer.current_bookings < Offer.total_bookings,
                ),
            )
            .values(current_bookings=Offer.current_bookings + 1)
            .execution_options(synchronize_session="fetch")
        )
        with self.translate_errors("claim_usage_slot"):
            return self.db.execute(stmt).rowcount == 1

    def record_booking(self, offer_id: str, revenue: Decimal) -> None:
        stmt = (
            update(Offer)
            .where(Offer.id == offer_id)
            .values(
                bookings=Offer.bookings + 1,
                revenue=Offer.revenue + CurrencyUtils.quantize(revenue),
            )
            .execution_options(synchronize_session="fetch")
        )
        with self.translate_errors("record_booking"):
            self.db.execute(stmt)

    def increment_counter(self, offer_id: str, field: str) -> bool:
        """
        Increment a view or click counter.

        Returns:
            False when the offer does not exist
        """
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unknown offer counter '{field}'")
        column = getattr(Offer, field)
        stmt = (
            update(Offer)
            .where(Offer.id == offer_id, Offer.is_deleted.is_(False))
            .values({field: column + 1})
            .execution_options(synchronize_session="fetch")
        )
        with self.translate_errors(f"increment_{field}"):
            return self.db.execute(stmt).rowcount == 1

    # ============================================================================
    # CHILD RECORDS
    # ============================================================================

    def count_customer_redemptions(self, offer_id: str, customer_id: str) -> int:
        stmt = select(func.count(OfferRedemption.id)).where(
            OfferRedemption.offer_id == offer_id,
            OfferRedemption.customer_id == customer_id,
        )
        with self.translate_errors("count_customer_redemptions"):
            return int(self.db.scalar(stmt) or 0)

    def add_redemption(self, **values) -> OfferRedemption:
        redemption = OfferRedemption(**values)
        with self.translate_errors("add_redemption"):
            self.db.add(redemption)
            self.db.flush()
        return redemption

    def list_redemptions(self, offer_id: str) -> List[OfferRedemption]:
        stmt = (
            select(OfferRedemption)
            .where(OfferRedemption.offer_id == offer_id)
            .order_by(OfferRedemption.redeemed_at)
        )
        with self.translate_errors("list_redemptions"):
            return list(self.db.execute(stmt).scalars().all())

    def add_blackout_dates(self, offer: Offer, dates: Iterable[date]) -> Offer:
        existing = offer.blackout_set()
        for day in sorted(set(dates) - existing):
            offer.blackout_dates.append(OfferBlackoutDate(blackout_date=day))
        self.flush("add_blackout_dates")
        return offer
