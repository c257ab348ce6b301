"""
Custom SQLAlchemy types for specialized data handling.

Provides fixed-precision money storage and a portable JSON list type.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Optional

from sqlalchemy import JSON, Enum, Numeric, TypeDecorator


class MoneyType(TypeDecorator):
    """
    Money type with fixed precision.

    Stores monetary values with 2 decimal places and always returns
    ``Decimal`` regardless of the backing dialect.
    """

    impl = Numeric(15, 2)
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[Decimal]:
        """Validate and round monetary value."""
        if value is None:
            return value

        if not isinstance(value, Decimal):
            value = Decimal(str(value))

        # Round to 2 decimal places
        return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def process_result_value(self, value: Any, dialect) -> Optional[Decimal]:
        """Return monetary value as Decimal."""
        if value is None:
            return value
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return value.quantize(Decimal('0.01'))


class RateType(TypeDecorator):
    """Percentage rate (e.g. 12.50 for 12.5%) stored with 2 decimal places."""

    impl = Numeric(5, 2)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Optional[Decimal]:
        if value is None:
            return value
        return Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def process_result_value(self, value: Any, dialect) -> Optional[Decimal]:
        if value is None:
            return value
        return Decimal(str(value)).quantize(Decimal('0.01'))


class StringListType(TypeDecorator):
    """
    JSON list of strings.

    Used instead of PostgreSQL ARRAY so the schema stays portable.
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Optional[List[str]]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple, set)):
            raise ValueError(f"StringListType requires a list, got {type(value)}")
        return [str(item.value if hasattr(item, "value") else item) for item in value]

    def process_result_value(self, value: Any, dialect) -> List[str]:
        return list(value or [])


class DateListType(TypeDecorator):
    """JSON list of ISO calendar dates."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Optional[List[str]]:
        if value is None:
            return []
        return sorted({
            item.isoformat() if isinstance(item, date) else date.fromisoformat(str(item)).isoformat()
            for item in value
        })

    def process_result_value(self, value: Any, dialect) -> List[date]:
        return [date.fromisoformat(item) for item in (value or [])]


def enum_type(enum_cls, name: str) -> Enum:
    """
    Portable enum column type storing the member *value*.

    Args:
        enum_cls: ``str`` based enum class
        name: Constraint name

    Returns:
        SQLAlchemy ``Enum`` type backed by VARCHAR plus a CHECK constraint
    """
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
