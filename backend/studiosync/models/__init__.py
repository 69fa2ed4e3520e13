# backend/studiosync/models/__init__.py
"""
Database models for StudioSync.

Importing this package registers every table on ``Base.metadata``.
"""

from ..database import Base
from .equipment import Equipment, EquipmentStatus, EquipmentType
from .notification import Notification, NotificationType
from .payment import Payment, PaymentStatus
from .project import File, FileType, Project, ProjectStatus
from .reservation import (
    EquipmentBooking,
    EquipmentBookingStatus,
    ParticipantRole,
    Reservation,
    ReservationParticipant,
    ReservationStatus,
)
from .studio import Studio, StudioAvailability
from .user import User, UserRole

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Studio",
    "StudioAvailability",
    "Equipment",
    "EquipmentType",
    "EquipmentStatus",
    "Reservation",
    "ReservationStatus",
    "ReservationParticipant",
    "ParticipantRole",
    "EquipmentBooking",
    "EquipmentBookingStatus",
    "Payment",
    "PaymentStatus",
    "Project",
    "ProjectStatus",
    "File",
    "FileType",
    "Notification",
    "NotificationType",
]
