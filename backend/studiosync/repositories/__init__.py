# backend/studiosync/repositories/__init__.py
"""
Repository Pattern Implementation for StudioSync

This package provides the repository layer for data access, separating
business logic from database queries.

Usage:
    from studiosync.repositories import RepositoryFactory

    repository = RepositoryFactory.create_conflict_checker_repository(db)
    conflict = repository.find_studio_conflict(studio_id, start, end)
"""

from .base_repository import BaseRepository, IRepository
from .conflict_checker_repository import ConflictCheckerRepository
from .equipment_repository import EquipmentRepository
from .factory import RepositoryFactory
from .notification_repository import NotificationRepository
from .payment_repository import PaymentRepository
from .reservation_repository import ReservationRepository
from .studio_repository import StudioRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "IRepository",
    "RepositoryFactory",
    "UserRepository",
    "StudioRepository",
    "EquipmentRepository",
    "ReservationRepository",
    "ConflictCheckerRepository",
    "PaymentRepository",
    "NotificationRepository",
]
