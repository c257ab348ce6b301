"""
Utility Functions and Helpers

Date range and money helpers shared by the availability, pricing and
offer services.
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Union

from .exceptions import InvalidDateRangeError, ValidationError

CENT = Decimal("0.01")


class IDGenerator:
    """ID generation utilities"""

    @staticmethod
    def generate_uuid() -> str:
        """Generate a random UUID string"""
        return str(uuid.uuid4())


class DateTimeUtils:
    """Date and time utilities"""

    @staticmethod
    def now_utc() -> datetime:
        """
        Get current UTC datetime as a naive value.

        Stored timestamps are naive UTC so they compare cleanly across
        PostgreSQL and SQLite.
        """
        return datetime.now(timezone.utc).replace(tzinfo=None)

    @staticmethod
    def validate_stay_range(check_in: date, check_out: date) -> int:
        """
        Validate a half-open stay range and return its number of nights.

        Raises:
            ValidationError: If either bound is missing
            InvalidDateRangeError: If check_in is not before check_out
        """
        if check_in is None or check_out is None:
            raise ValidationError(
                "Check-in and check-out dates are required",
                field_errors={
                    "check_in": [] if check_in else ["required"],
                    "check_out": [] if check_out else ["required"],
                },
            )
        if isinstance(check_in, datetime) or isinstance(check_out, datetime):
            raise ValidationError("Stay bounds must be calendar dates, not datetimes")
        if check_in >= check_out:
            raise InvalidDateRangeError(
                start_date=check_in.isoformat(),
                end_date=check_out.isoformat(),
            )
        return (check_out - check_in).days

    @staticmethod
    def iter_nights(check_in: date, check_out: date) -> Iterator[date]:
        """Yield every night (calendar date) in the half-open range [check_in, check_out)"""
        current = check_in
        while current < check_out:
            yield current
            current += timedelta(days=1)

    @staticmethod
    def overlaps(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
        """Half-open interval overlap test"""
        return start_a < end_b and start_b < end_a

    @staticmethod
    def is_weekend_night(night: date) -> bool:
        """Friday and Saturday nights carry the weekend surcharge"""
        return night.weekday() in (4, 5)


class CurrencyUtils:
    """Currency and money handling utilities"""

    @staticmethod
    def to_decimal(amount: Union[int, float, str, Decimal, None]) -> Decimal:
        """Convert a numeric value to Decimal without binary float artifacts"""
        if amount is None:
            return Decimal("0")
        if isinstance(amount, Decimal):
            return amount
        return Decimal(str(amount))

    @staticmethod
    def quantize(amount: Union[int, float, str, Decimal]) -> Decimal:
        """Round to 2 decimal places using commercial rounding"""
        return CurrencyUtils.to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def percentage_of(
        amount: Union[int, float, Decimal],
        rate: Union[int, float, Decimal],
    ) -> Decimal:
        """
        Calculate a percentage of an amount.

        Args:
            amount: Base amount
            rate: Rate in percent (e.g. 12 for 12%)

        Returns:
            Rounded percentage amount
        """
        amount = CurrencyUtils.to_decimal(amount)
        rate = CurrencyUtils.to_decimal(rate)
        return CurrencyUtils.quantize(amount * rate / Decimal("100"))

    @staticmethod
    def format_currency(amount: Union[int, float, Decimal], currency_code: str = "INR") -> str:
        """Format amount as currency string"""
        currency_symbols = {
            'USD': '$',
            'EUR': '€',
            'GBP': '£',
            'INR': '₹'
        }
        symbol = currency_symbols.get(currency_code, f"{currency_code} ")
        return f"{symbol}{CurrencyUtils.quantize(amount):,.2f}"
