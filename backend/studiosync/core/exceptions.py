# backend/studiosync/core/exceptions.py
"""
Domain-specific exceptions for the StudioSync platform.

Every exception carries a stable ``ErrorCode`` and the HTTP status it maps
to. The mapping to the JSON envelope happens exactly once, in
``studiosync.errors.register_error_handlers``.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the response envelope."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_RANGE = "INVALID_RANGE"
    STUDIO_UNAVAILABLE = "STUDIO_UNAVAILABLE"
    STUDIO_CONFLICT = "STUDIO_CONFLICT"
    EQUIPMENT_CONFLICT = "EQUIPMENT_CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = ErrorCode.VALIDATION_ERROR


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = ErrorCode.NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT
    default_code = ErrorCode.DUPLICATE_ENTRY


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE
    default_code = ErrorCode.VALIDATION_ERROR


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = ErrorCode.UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = ErrorCode.FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""


class ServiceUnavailableException(DomainException):
    """Raised when the database cannot be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = ErrorCode.SERVICE_UNAVAILABLE


# Specific business exceptions


class InvalidRangeException(ValidationException):
    """Raised when a reservation ends at or before its start."""

    def __init__(self, start: str, end: str):
        super().__init__(
            message="End time must be after start time",
            code=ErrorCode.INVALID_RANGE,
            details={"start_time": start, "end_time": end},
        )


class StudioUnavailableException(BusinessRuleException):
    """Raised when the studio is closed for part of the requested interval."""

    def __init__(self, studio_id: str, day: str):
        super().__init__(
            message=f"Studio is not open for the whole requested interval on {day}",
            code=ErrorCode.STUDIO_UNAVAILABLE,
            details={"studio_id": studio_id, "date": day},
        )


class StudioConflictException(ConflictException):
    """Raised when a reservation overlaps an active reservation of the same studio."""

    def __init__(self, studio_id: str, conflicting_reservation_id: str):
        super().__init__(
            message="This time slot conflicts with an existing reservation",
            code=ErrorCode.STUDIO_CONFLICT,
            details={
                "studio_id": studio_id,
                "conflicting_reservation_id": conflicting_reservation_id,
            },
        )


class EquipmentConflictException(ConflictException):
    """Raised when an equipment item is already held for an overlapping interval."""

    def __init__(self, equipment_id: str, reason: Optional[str] = None):
        super().__init__(
            message=reason or "Equipment is already booked for an overlapping interval",
            code=ErrorCode.EQUIPMENT_CONFLICT,
            details={"equipment_id": equipment_id},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
