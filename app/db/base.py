"""Declarative base with every model imported so metadata is complete."""
from app.models.base.base_model import Base

# Import all models here to ensure they're registered with Base
from app.models.hotel import (  # noqa: F401
    Hotel,
    MaintenanceWindow,
    Offer,
    OfferBlackoutDate,
    OfferRedemption,
    ReservationInterval,
    Room,
    SeasonalRate,
)

__all__ = ["Base"]
