"""Tests for date range and money helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from app.core.exceptions import InvalidDateRangeError, ValidationError
from app.core.utils import CurrencyUtils, DateTimeUtils


def test_stay_range_returns_nights():
    assert DateTimeUtils.validate_stay_range(date(2024, 12, 6), date(2024, 12, 9)) == 3


def test_empty_and_reversed_ranges_are_rejected():
    with pytest.raises(InvalidDateRangeError) as exc_info:
        DateTimeUtils.validate_stay_range(date(2024, 12, 6), date(2024, 12, 6))
    assert exc_info.value.status_code == 422
    assert exc_info.value.details["start_date"] == "2024-12-06"

    with pytest.raises(InvalidDateRangeError):
        DateTimeUtils.validate_stay_range(date(2024, 12, 9), date(2024, 12, 6))


def test_missing_and_datetime_bounds_are_rejected():
    with pytest.raises(ValidationError) as exc_info:
        DateTimeUtils.validate_stay_range(None, date(2024, 12, 6))
    assert exc_info.value.details["field_errors"]["check_in"] == ["required"]

    with pytest.raises(ValidationError):
        DateTimeUtils.validate_stay_range(datetime(2024, 12, 6), datetime(2024, 12, 8))


def test_iter_nights_excludes_departure_day():
    nights = list(DateTimeUtils.iter_nights(date(2024, 12, 30), date(2025, 1, 2)))
    assert nights == [date(2024, 12, 30), date(2024, 12, 31), date(2025, 1, 1)]


def test_half_open_overlap():
    a, b, c = date(2024, 12, 1), date(2024, 12, 3), date(2024, 12, 5)
    assert DateTimeUtils.overlaps(a, c, b, c) is True
    assert DateTimeUtils.overlaps(a, b, b, c) is False


def test_weekend_nights_are_friday_and_saturday():
    assert DateTimeUtils.is_weekend_night(date(2024, 12, 6)) is True
    assert DateTimeUtils.is_weekend_night(date(2024, 12, 7)) is True
    assert DateTimeUtils.is_weekend_night(date(2024, 12, 8)) is False


def test_quantize_rounds_half_up():
    assert CurrencyUtils.quantize("2.345") == Decimal("2.35")
    assert CurrencyUtils.quantize(0.1 + 0.2) == Decimal("0.30")


def test_percentage_of():
    assert CurrencyUtils.percentage_of(Decimal("268.80"), 20) == Decimal("53.76")
    assert CurrencyUtils.percentage_of(240, Decimal("12.00")) == Decimal("28.80")


def test_format_currency():
    assert CurrencyUtils.format_currency(Decimal("5000")) == "₹5,000.00"
    assert CurrencyUtils.format_currency(12, "USD") == "$12.00"
    assert CurrencyUtils.format_currency(3, "CHF") == "CHF 3.00"
