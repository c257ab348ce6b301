"""
Custom Exceptions for the Hotel Availability & Offer Engine

This module defines the domain error taxonomy raised by repositories and
services. Every error carries a machine readable code, a human readable
message and structured details so callers can surface precise reasons.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Conflict errors
    CONFLICT = "CONFLICT"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    OFFER_NOT_APPLICABLE = "OFFER_NOT_APPLICABLE"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"

    # Limit errors
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    OFFER_LIMIT_EXCEEDED = "OFFER_LIMIT_EXCEEDED"
    CUSTOMER_LIMIT_EXCEEDED = "CUSTOMER_LIMIT_EXCEEDED"

    # Infrastructure errors
    DATABASE_ERROR = "DATABASE_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Validation Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when input data (dates, stay fields, amounts) is malformed"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class InvalidDateRangeError(ValidationError):
    """Exception raised when check-in is not strictly before check-out"""

    def __init__(
        self,
        message: str = "Check-in date must be before check-out date",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        super().__init__(message, error_code=ErrorCode.INVALID_DATE_RANGE)
        self.details.update({
            "start_date": start_date,
            "end_date": end_date
        })


# ========================================
# Resource Not Found Exceptions
# ========================================

class NotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class HotelNotFoundError(NotFoundError):
    """Exception raised when a hotel is not found"""

    def __init__(self, hotel_id: Optional[str] = None):
        super().__init__("Hotel", hotel_id)


class RoomNotFoundError(NotFoundError):
    """Exception raised when a room is not found"""

    def __init__(self, room_id: Optional[str] = None):
        super().__init__("Room", room_id)


class OfferNotFoundError(NotFoundError):
    """Exception raised when an offer is not found"""

    def __init__(self, offer_id: Optional[str] = None):
        super().__init__("Offer", offer_id)


class ReservationNotFoundError(NotFoundError):
    """Exception raised when a reservation interval is not found"""

    def __init__(self, reservation_id: Optional[str] = None):
        super().__init__("Reservation", reservation_id)


# ========================================
# Conflict Exceptions
# ========================================

class ConflictError(BaseAppException):
    """
    Exception raised when an operation conflicts with current state.

    The ``reason`` attribute carries the first failing rule so callers
    can show it verbatim.
    """

    def __init__(
        self,
        message: str = "Conflict detected",
        reason: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 409
    ):
        self.reason = reason or message
        payload = {"reason": self.reason}
        if details:
            payload.update(details)
        super().__init__(message, error_code, payload, status_code)


class RoomUnavailableError(ConflictError):
    """Exception raised when a room is not free for the requested interval"""

    def __init__(
        self,
        message: str = "Room is not available for the selected dates",
        room_id: Optional[str] = None,
        reason: Optional[str] = None,
        conflicting_ids: Optional[List[str]] = None
    ):
        super().__init__(
            message,
            reason=reason,
            error_code=ErrorCode.ROOM_UNAVAILABLE,
            details={
                "room_id": room_id,
                "conflicting_ids": conflicting_ids or [],
            },
        )


class InsufficientCapacityError(ConflictError):
    """Exception raised when a room cannot hold the requested number of guests"""

    def __init__(
        self,
        message: str = "Insufficient capacity",
        requested: Optional[int] = None,
        available: Optional[int] = None
    ):
        super().__init__(
            message,
            error_code=ErrorCode.INSUFFICIENT_CAPACITY,
            details={
                "requested": requested,
                "available": available
            },
        )


class OfferNotApplicableError(ConflictError):
    """Exception raised when an offer's eligibility rules reject a stay"""

    def __init__(
        self,
        reason: str,
        offer_id: Optional[str] = None,
        rule: Optional[str] = None
    ):
        super().__init__(
            reason,
            reason=reason,
            error_code=ErrorCode.OFFER_NOT_APPLICABLE,
            details={"offer_id": offer_id, "rule": rule},
        )


class InvalidStateTransitionError(ConflictError):
    """Exception raised when a status change is not allowed"""

    def __init__(
        self,
        entity: str,
        current: str,
        target: str
    ):
        message = f"Cannot change {entity} status from '{current}' to '{target}'"
        super().__init__(
            message,
            error_code=ErrorCode.INVALID_STATE_TRANSITION,
            details={"current_status": current, "target_status": target},
        )


# ========================================
# Limit Exceptions
# ========================================

class LimitExceededError(BaseAppException):
    """Exception raised when a usage or redemption cap has been reached"""

    def __init__(
        self,
        message: str = "Usage limit exceeded",
        limit: Optional[int] = None,
        current: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.LIMIT_EXCEEDED,
        status_code: int = 409
    ):
        self.reason = message
        details = {
            "reason": message,
            "limit": limit,
            "current": current
        }
        super().__init__(message, error_code, details, status_code)


# ========================================
# Infrastructure Exceptions
# ========================================

class InfrastructureError(BaseAppException):
    """Exception raised when the backing store is unreachable or times out"""

    def __init__(
        self,
        message: str = "Storage operation failed",
        operation: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 503
    ):
        details = {"operation": operation} if operation else {}
        super().__init__(message, error_code, details, status_code)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "InvalidDateRangeError",
    "NotFoundError",
    "HotelNotFoundError",
    "RoomNotFoundError",
    "OfferNotFoundError",
    "ReservationNotFoundError",
    "ConflictError",
    "RoomUnavailableError",
    "InsufficientCapacityError",
    "OfferNotApplicableError",
    "InvalidStateTransitionError",
    "LimitExceededError",
    "InfrastructureError",
]
