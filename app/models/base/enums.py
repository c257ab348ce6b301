"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class RoomType(str, enum.Enum):
    """Room type categorization."""
    STANDARD = "standard"
    DELUXE = "deluxe"
    PREMIUM = "premium"
    SUITE = "suite"
    EXECUTIVE = "executive"
    PRESIDENTIAL = "presidential"
    FAMILY = "family"
    CONNECTING = "connecting"
    ACCESSIBLE = "accessible"
    STUDIO = "studio"
    APARTMENT = "apartment"
    VILLA = "villa"
    PENTHOUSE = "penthouse"


class BedType(str, enum.Enum):
    """Bed configuration of a room."""
    SINGLE = "single"
    DOUBLE = "double"
    QUEEN = "queen"
    KING = "king"
    TWIN = "twin"
    SOFA_BED = "sofa-bed"
    BUNK_BED = "bunk-bed"
    MURPHY_BED = "murphy-bed"


class RoomStatus(str, enum.Enum):
    """Room availability status."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    OUT_OF_ORDER = "out-of-order"
    RESERVED = "reserved"


class HousekeepingStatus(str, enum.Enum):
    """Room housekeeping status."""
    CLEAN = "clean"
    DIRTY = "dirty"
    OUT_OF_ORDER = "out-of-order"


class MaintenanceKind(str, enum.Enum):
    """Type of scheduled maintenance work."""
    CLEANING = "cleaning"
    REPAIR = "repair"
    RENOVATION = "renovation"
    INSPECTION = "inspection"
    MAINTENANCE = "maintenance"


class ReservationStatus(str, enum.Enum):
    """Lifecycle of a reservation interval."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    NO_SHOW = "no-show"
    MODIFIED = "modified"
    CANCELLED = "cancelled"


class DiscountType(str, enum.Enum):
    """How an offer reduces the booking amount."""
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed-amount"
    FREE_NIGHTS = "free-nights"
    UPGRADE = "upgrade"
    PACKAGE = "package"


class OfferStatus(str, enum.Enum):
    """Offer lifecycle status."""
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


__all__ = [
    "RoomType",
    "BedType",
    "RoomStatus",
    "HousekeepingStatus",
    "MaintenanceKind",
    "ReservationStatus",
    "DiscountType",
    "OfferStatus",
]
