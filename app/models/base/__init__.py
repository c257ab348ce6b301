"""
Base models package.

Provides base classes, custom types and enums for all database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
    SoftDeleteModel,
)

from app.models.base.enums import (
    RoomType,
    BedType,
    RoomStatus,
    HousekeepingStatus,
    MaintenanceKind,
    ReservationStatus,
    DiscountType,
    OfferStatus,
)

from app.models.base.types import (
    MoneyType,
    RateType,
    StringListType,
    DateListType,
    enum_type,
)

__all__ = [
    # Base models
    "Base",
    "BaseModel",
    "TimestampModel",
    "SoftDeleteModel",

    # Enums
    "RoomType",
    "BedType",
    "RoomStatus",
    "HousekeepingStatus",
    "MaintenanceKind",
    "ReservationStatus",
    "DiscountType",
    "OfferStatus",

    # Custom types
    "MoneyType",
    "RateType",
    "StringListType",
    "DateListType",
    "enum_type",
]
