# backend/studiosync/routes/__init__.py
"""
Route registration.

``health`` is mounted once under ``/api``; the v1 resource routers are
mounted under both the versioned prefix and ``/api``.
"""

from fastapi import FastAPI

from ..core.config import settings
from . import health
from .v1 import auth, bookings, equipment, notifications, studios

RESOURCE_ROUTERS = (
    ("/auth", auth.router),
    ("/studios", studios.router),
    ("/bookings", bookings.router),
    ("/equipment", equipment.router),
    ("/notifications", notifications.router),
)


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router, prefix="/api")
    for prefix in (settings.api_prefix, "/api"):
        for resource, router in RESOURCE_ROUTERS:
            # Unversioned copies stay out of the OpenAPI schema
            app.include_router(
                router, prefix=f"{prefix}{resource}", include_in_schema=prefix != "/api"
            )
