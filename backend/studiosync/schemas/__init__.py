# backend/studiosync/schemas/__init__.py
"""Pydantic request and response schemas."""

from .auth import (
    AuthResult,
    LoginRequest,
    ProfileUpdate,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UserResponse,
)
from .base_responses import ApiResponse, ErrorResponse, PaginatedData
from .equipment import EquipmentCreate, EquipmentResponse, EquipmentUpdate
from .notification import NotificationResponse
from .reservation import (
    EquipmentRequest,
    ParticipantRequest,
    PaymentCreate,
    PaymentResponse,
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
)
from .studio import (
    AvailabilityEntry,
    AvailabilityReplace,
    AvailabilityResponse,
    StudioCreate,
    StudioResponse,
    StudioUpdate,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "PaginatedData",
    "AuthResult",
    "LoginRequest",
    "ProfileUpdate",
    "RefreshRequest",
    "RegisterRequest",
    "TokenPair",
    "UserResponse",
    "StudioCreate",
    "StudioUpdate",
    "StudioResponse",
    "AvailabilityEntry",
    "AvailabilityReplace",
    "AvailabilityResponse",
    "EquipmentCreate",
    "EquipmentUpdate",
    "EquipmentResponse",
    "EquipmentRequest",
    "ParticipantRequest",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "PaymentCreate",
    "PaymentResponse",
    "NotificationResponse",
]
