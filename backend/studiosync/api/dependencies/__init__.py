# backend/studiosync/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_current_active_user, get_current_user, require_roles
from .database import get_db
from .services import (
    get_auth_service,
    get_booking_service,
    get_equipment_service,
    get_notification_service,
    get_studio_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_active_user",
    "require_roles",
    # Database
    "get_db",
    # Services
    "get_auth_service",
    "get_booking_service",
    "get_equipment_service",
    "get_notification_service",
    "get_studio_service",
]
