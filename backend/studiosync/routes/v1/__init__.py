# backend/studiosync/routes/v1/__init__.py
"""
API v1 Routes

Resource endpoints mounted under /api/{API_VERSION} and again under /api.
"""

from . import auth, bookings, equipment, notifications, studios

__all__ = [
    "auth",
    "bookings",
    "equipment",
    "notifications",
    "studios",
]
