# backend/studiosync/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each factory builds a service bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.auth_service import AuthService
from ...services.booking_service import BookingService
from ...services.equipment_service import EquipmentService
from ...services.notification_service import NotificationService
from ...services.studio_service import StudioService
from .database import get_db


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_studio_service(db: Session = Depends(get_db)) -> StudioService:
    return StudioService(db)


def get_equipment_service(db: Session = Depends(get_db)) -> EquipmentService:
    return EquipmentService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)
