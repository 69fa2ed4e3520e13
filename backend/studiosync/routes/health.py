# backend/studiosync/routes/health.py
"""
Health check and API index endpoints.

``/api/health`` never touches the database so it stays cheap for load
balancer probes. ``/api/health/db`` runs a trivial query plus row counts and
answers 503 when the store is unreachable.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import settings
from ..core.constants import API_VERSION, BRAND_NAME
from ..core.exceptions import ServiceUnavailableException
from ..database import Database
from ..models import Equipment, Reservation, Studio, User
from ..schemas.base_responses import ApiResponse
from ..schemas.health import DatabaseHealthResponse, DatabaseStatistics, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        status="healthy",
        service=f"{BRAND_NAME.lower()}-api",
        version=API_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/health/db", response_model=ApiResponse[DatabaseHealthResponse])
def database_health(request: Request) -> ApiResponse[DatabaseHealthResponse]:
    database: Database = request.app.state.db
    try:
        database.ping()
        with database.session_scope() as db:
            statistics = DatabaseStatistics(
                users=db.query(func.count(User.id)).scalar() or 0,
                studios=db.query(func.count(Studio.id)).scalar() or 0,
                equipment=db.query(func.count(Equipment.id)).scalar() or 0,
                reservations=db.query(func.count(Reservation.id)).scalar() or 0,
            )
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        raise ServiceUnavailableException("Database connection failed")

    return ApiResponse(
        data=DatabaseHealthResponse(
            status="healthy", database=database.dialect_name, statistics=statistics
        )
    )


@router.get("")
def api_index() -> Dict[str, Any]:
    """Static description of the available endpoints."""
    prefix = settings.api_prefix
    return {
        "success": True,
        "data": {
            "name": f"{BRAND_NAME} API",
            "version": API_VERSION,
            "api_version": settings.api_version,
            "endpoints": {
                "health": ["GET /api/health", "GET /api/health/db"],
                "auth": [
                    f"POST {prefix}/auth/register",
                    f"POST {prefix}/auth/login",
                    f"POST {prefix}/auth/refresh",
                    f"GET {prefix}/auth/profile",
                    f"PATCH {prefix}/auth/profile",
                    f"POST {prefix}/auth/logout",
                ],
                "studios": [
                    f"GET {prefix}/studios",
                    f"GET {prefix}/studios/:id",
                    f"POST {prefix}/studios",
                    f"PATCH {prefix}/studios/:id",
                    f"DELETE {prefix}/studios/:id",
                    f"GET {prefix}/studios/:id/availability",
                    f"PUT {prefix}/studios/:id/availability",
                ],
                "bookings": [
                    f"GET {prefix}/bookings",
                    f"GET {prefix}/bookings/:id",
                    f"POST {prefix}/bookings",
                    f"PATCH {prefix}/bookings/:id",
                    f"POST {prefix}/bookings/:id/payment",
                ],
                "equipment": [
                    f"GET {prefix}/equipment",
                    f"GET {prefix}/equipment/:id",
                    f"POST {prefix}/equipment",
                    f"PATCH {prefix}/equipment/:id",
                ],
                "notifications": [
                    f"GET {prefix}/notifications",
                    f"POST {prefix}/notifications/:id/read",
                ],
            },
            "documentation": "/docs",
        },
    }
