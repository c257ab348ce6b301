# app/repositories/hotel/interval_predicates.py
"""
Declarative SQL predicates for half-open date interval overlap.

Two stays [a, b) and [c, d) overlap when ``a < d and c < b``. Both
predicates accept either a literal room id or the ``Room.id`` column,
in which case they correlate with the enclosing room query.
"""

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.sql.elements import ColumnElement

from app.models.base.enums import ReservationStatus
from app.models.hotel import MaintenanceWindow, ReservationInterval


def reservation_overlap(room_id: Any, check_in: date, check_out: date) -> ColumnElement[bool]:
    """EXISTS a non-cancelled reservation on the room intersecting [check_in, check_out)."""
    return (
        select(ReservationInterval.id)
        .where(
            ReservationInterval.room_id == room_id,
            ReservationInterval.status != ReservationStatus.CANCELLED,
            ReservationInterval.check_in < check_out,
            ReservationInterval.check_out > check_in,
        )
        .exists()
    )


def maintenance_overlap(room_id: Any, check_in: date, check_out: date) -> ColumnElement[bool]:
    """EXISTS an active maintenance window on the room intersecting [check_in, check_out)."""
    return (
        select(MaintenanceWindow.id)
        .where(
            MaintenanceWindow.room_id == room_id,
            MaintenanceWindow.is_active.is_(True),
            MaintenanceWindow.start_date < check_out,
            MaintenanceWindow.end_date > check_in,
        )
        .exists()
    )


def room_is_free(room_id: Any, check_in: date, check_out: date) -> ColumnElement[bool]:
    return ~reservation_overlap(room_id, check_in, check_out) & ~maintenance_overlap(
        room_id, check_in, check_out
    )
