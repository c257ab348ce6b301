# app/services/hotel/resolver_service.py
"""
Reservation conflict resolver.

Combines availability, pricing and offer rules to answer "what can I
book, for how much" without mutating anything.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.hotel import Offer
from app.repositories.hotel import OfferRepository
from app.schemas.hotel.offer import Applicability
from app.schemas.hotel.reservation import ResolutionCandidate, ResolutionResult
from app.schemas.hotel.stay import Stay, StayRequest
from app.services.base import BaseService, Clock
from app.services.hotel import offer_rules
from app.services.hotel.availability_service import AvailabilityService
from app.services.hotel.pricing_service import PricingService


class ResolverService(BaseService):
    """
    Read-only orchestration over the availability index, rate composer
    and offer ledger.
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.availability = AvailabilityService(db_session, clock)
        self.pricing = PricingService(db_session, clock)
        self.offers = OfferRepository(db_session)

    def resolve(self, request: StayRequest) -> ResolutionResult:
        """
        Rank the bookable rooms for a candidate stay.

        Args:
            request: Stay parameters with an optional offer to evaluate

        Returns:
            Candidates ordered by final amount, then room number
        """
        rooms = self.availability.list_available(
            request.hotel_id,
            request.check_in,
            request.check_out,
            request.guests,
            request.room_type,
        )
        nights = (request.check_out - request.check_in).days
        now = self.now()

        offer: Optional[Offer] = None
        prior_redemptions: Optional[int] = None
        if request.offer_id:
            # Plain read: lazy expiry is not persisted here
            offer = self.offers.get_with_rules(request.offer_id)
            if request.customer_id:
                prior_redemptions = self.offers.count_customer_redemptions(
                    offer.id, request.customer_id
                )

        candidates: List[ResolutionCandidate] = []
        for room in rooms:
            quote = self.pricing.price_stay(room, request.check_in, request.check_out, request.guests)
            applicability = None
            discount = None
            final_amount = quote.total

            if offer is not None:
                if offer.hotel_id != request.hotel_id:
                    applicability = Applicability(
                        applicable=False,
                        reason="Offer is not available at this hotel",
                        code="HOTEL_MISMATCH",
                    )
                else:
                    stay = Stay(
                        check_in=request.check_in,
                        check_out=request.check_out,
                        rooms=request.rooms,
                        guests=request.guests,
                        amount=quote.total,
                        room_type=room.room_type,
                    )
                    applicability = offer_rules.evaluate_applicability(
                        offer, stay, now, prior_redemptions
                    )
                if applicability.applicable:
                    discount = offer_rules.calculate_discount(offer, quote.total, nights)
                    final_amount = discount.final_amount

            candidates.append(
                ResolutionCandidate(
                    room_id=room.id,
                    room_number=room.room_number,
                    room_type=room.room_type,
                    quote=quote,
                    applicability=applicability,
                    discount=discount,
                    final_amount=final_amount,
                )
            )

        candidates.sort(key=lambda candidate: (candidate.final_amount, candidate.room_number))

        self._logger.debug(
            "Stay resolved",
            extra={
                "hotel_id": request.hotel_id,
                "candidate_count": len(candidates),
                "offer_id": request.offer_id,
            },
        )
        return ResolutionResult(
            hotel_id=request.hotel_id,
            check_in=request.check_in,
            check_out=request.check_out,
            nights=nights,
            guests=request.guests,
            rooms=request.rooms,
            offer_id=request.offer_id,
            candidates=candidates,
        )
