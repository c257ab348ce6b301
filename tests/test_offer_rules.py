"""Tests for offer eligibility and discount rules."""

from datetime import date, datetime
from decimal import Decimal

from app.models.base.enums import DiscountType, OfferStatus, RoomType
from app.schemas.hotel.stay import Stay
from app.services.hotel.offer_rules import RuleCode, calculate_discount, evaluate_applicability
from tests.conftest import FIXED_NOW, FRIDAY, MONDAY, SUNDAY


def _stay(check_in=FRIDAY, check_out=SUNDAY, **overrides) -> Stay:
    values = dict(check_in=check_in, check_out=check_out, rooms=1, guests=2, amount=Decimal("1000.00"))
    values.update(overrides)
    return Stay(**values)


# --- discount ---

def test_percentage_discount_is_capped(make_offer):
    offer = make_offer()
    result = calculate_discount(offer, Decimal("1000.00"), nights=2)

    assert result.discount_amount == Decimal("50.00")
    assert result.final_amount == Decimal("950.00")


def test_percentage_discount_below_cap(make_offer):
    offer = make_offer()
    result = calculate_discount(offer, Decimal("200.00"))
    assert result.discount_amount == Decimal("40.00")


def test_zero_max_discount_means_uncapped(make_offer):
    offer = make_offer(max_discount=Decimal("0.00"))
    result = calculate_discount(offer, Decimal("1000.00"), nights=2)

    assert result.discount_amount == Decimal("200.00")
    assert result.final_amount == Decimal("800.00")


def test_fixed_amount_never_exceeds_original(make_offer):
    offer = make_offer(discount_type=DiscountType.FIXED_AMOUNT, discount_value=Decimal("300.00"), max_discount=None)

    assert calculate_discount(offer, Decimal("1000.00")).final_amount == Decimal("700.00")
    small = calculate_discount(offer, Decimal("120.00"))
    assert small.discount_amount == Decimal("120.00")
    assert small.final_amount == Decimal("0.00")


def test_free_nights_discount_is_prorated(make_offer):
    offer = make_offer(discount_type=DiscountType.FREE_NIGHTS, discount_value=Decimal("0"), free_nights=1)

    result = calculate_discount(offer, Decimal("900.00"), nights=3)
    assert result.discount_amount == Decimal("300.00")

    # More free nights than nights booked covers the whole stay at most
    generous = make_offer(
        discount_type=DiscountType.FREE_NIGHTS,
        discount_value=Decimal("0"),
        free_nights=5,
        title="Generous",
    )
    assert calculate_discount(generous, Decimal("900.00"), nights=3).final_amount == Decimal("0.00")


def test_upgrade_offer_has_no_monetary_discount(make_offer):
    offer = make_offer(discount_type=DiscountType.UPGRADE, discount_value=Decimal("0"), upgrade_category="suite")
    assert calculate_discount(offer, Decimal("500.00")).discount_amount == Decimal("0.00")


def test_discount_is_bounded_by_original(make_offer):
    offer = make_offer(discount_value=Decimal("100.00"), max_discount=None)
    for amount in ("0", "0.01", "99.99", "12345.67"):
        result = calculate_discount(offer, Decimal(amount))
        assert Decimal("0") <= result.discount_amount <= result.original_amount
        assert result.final_amount == result.original_amount - result.discount_amount


# --- applicability ---

def test_applicable_offer(make_offer):
    verdict = evaluate_applicability(make_offer(), _stay(), FIXED_NOW)
    assert verdict.applicable is True
    assert verdict.reason is None


def test_inactive_offer_is_rejected(make_offer):
    offer = make_offer(status=OfferStatus.PAUSED)
    verdict = evaluate_applicability(offer, _stay(), FIXED_NOW)
    assert verdict.code == RuleCode.OFFER_INACTIVE


def test_offer_outside_validity_is_rejected(make_offer):
    offer = make_offer()
    verdict = evaluate_applicability(offer, _stay(), datetime(2025, 2, 1))
    assert verdict.applicable is False
    assert verdict.code == RuleCode.OFFER_INACTIVE


def test_minimum_stay_reason(make_offer):
    offer = make_offer(minimum_stay=2)
    verdict = evaluate_applicability(offer, _stay(check_out=date(2024, 12, 7)), FIXED_NOW)

    assert verdict.applicable is False
    assert verdict.reason == "Minimum stay of 2 nights required"
    assert verdict.code == RuleCode.MINIMUM_STAY


def test_maximum_stay_reason(make_offer):
    offer = make_offer(maximum_stay=2)
    verdict = evaluate_applicability(offer, _stay(check_out=MONDAY), FIXED_NOW)
    assert verdict.reason == "Maximum stay of 2 nights exceeded"


def test_minimum_rooms_reason(make_offer):
    offer = make_offer(minimum_rooms=2)
    verdict = evaluate_applicability(offer, _stay(rooms=1), FIXED_NOW)
    assert verdict.reason == "Minimum 2 rooms required"


def test_minimum_amount_reason(make_offer):
    offer = make_offer(minimum_booking_amount=Decimal("5000.00"))
    verdict = evaluate_applicability(offer, _stay(), FIXED_NOW)
    assert verdict.reason == "Minimum booking amount is ₹5,000.00"
    assert verdict.code == RuleCode.MINIMUM_AMOUNT


def test_advance_booking_reason(make_offer):
    offer = make_offer(advance_booking_days=7)
    verdict = evaluate_applicability(offer, _stay(), FIXED_NOW)
    assert verdict.reason == "Must book at least 7 days in advance"

    relaxed = make_offer(advance_booking_days=5, title="Relaxed")
    assert evaluate_applicability(relaxed, _stay(), FIXED_NOW).applicable is True


def test_zero_advance_days_means_no_lead_time_rule(make_offer):
    offer = make_offer(advance_booking_days=0)
    past_stay = _stay(check_in=date(2024, 11, 28), check_out=date(2024, 11, 30))

    assert evaluate_applicability(offer, past_stay, FIXED_NOW).applicable is True


def test_blackout_date_inside_stay_is_rejected(make_offer):
    offer = make_offer(blackout_dates=[date(2024, 12, 25)])
    verdict = evaluate_applicability(
        offer,
        _stay(check_in=date(2024, 12, 24), check_out=date(2024, 12, 26)),
        FIXED_NOW,
    )

    assert verdict.applicable is False
    assert verdict.reason == "Offer not available for selected dates"


def test_blackout_on_departure_day_does_not_block(make_offer):
    offer = make_offer(blackout_dates=[date(2024, 12, 26)])
    verdict = evaluate_applicability(
        offer,
        _stay(check_in=date(2024, 12, 24), check_out=date(2024, 12, 26)),
        FIXED_NOW,
    )
    assert verdict.applicable is True


def test_room_type_restriction(make_offer):
    offer = make_offer(applicable_room_types=["suite"])

    assert evaluate_applicability(offer, _stay(room_type=RoomType.SUITE), FIXED_NOW).applicable is True
    rejected = evaluate_applicability(offer, _stay(room_type=RoomType.DELUXE), FIXED_NOW)
    assert rejected.reason == "Offer not available for this room type"
    assert evaluate_applicability(offer, _stay(), FIXED_NOW).code == RuleCode.ROOM_TYPE


def test_usage_cap_reached(make_offer):
    offer = make_offer(total_bookings=3, current_bookings=3)
    verdict = evaluate_applicability(offer, _stay(), FIXED_NOW)
    assert verdict.code == RuleCode.OFFER_LIMIT_EXCEEDED


def test_customer_limit_only_checked_when_count_given(make_offer):
    offer = make_offer(bookings_per_customer=1)

    assert evaluate_applicability(offer, _stay(), FIXED_NOW).applicable is True
    assert evaluate_applicability(offer, _stay(), FIXED_NOW, prior_redemptions=0).applicable is True
    verdict = evaluate_applicability(offer, _stay(), FIXED_NOW, prior_redemptions=1)
    assert verdict.code == RuleCode.CUSTOMER_LIMIT_EXCEEDED


def test_first_failing_rule_wins(make_offer):
    offer = make_offer(minimum_stay=3, minimum_rooms=2)
    verdict = evaluate_applicability(offer, _stay(rooms=1), FIXED_NOW)
    assert verdict.code == RuleCode.MINIMUM_STAY
