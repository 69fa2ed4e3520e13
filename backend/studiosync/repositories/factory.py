# backend/studiosync/repositories/factory.py
"""
Repository Factory for StudioSync

Provides centralized creation of repository instances so services never
construct repositories directly.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from .base_repository import BaseRepository

# Avoid circular imports
if TYPE_CHECKING:
    from .conflict_checker_repository import ConflictCheckerRepository
    from .equipment_repository import EquipmentRepository
    from .notification_repository import NotificationRepository
    from .payment_repository import PaymentRepository
    from .reservation_repository import ReservationRepository
    from .studio_repository import StudioRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_base_repository(db: Session, model) -> BaseRepository:
        """Create a generic base repository for any model."""
        return BaseRepository(db, model)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_studio_repository(db: Session) -> "StudioRepository":
        from .studio_repository import StudioRepository

        return StudioRepository(db)

    @staticmethod
    def create_equipment_repository(db: Session) -> "EquipmentRepository":
        from .equipment_repository import EquipmentRepository

        return EquipmentRepository(db)

    @staticmethod
    def create_reservation_repository(db: Session) -> "ReservationRepository":
        from .reservation_repository import ReservationRepository

        return ReservationRepository(db)

    @staticmethod
    def create_conflict_checker_repository(db: Session) -> "ConflictCheckerRepository":
        """Create repository for conflict checking queries."""
        from .conflict_checker_repository import ConflictCheckerRepository

        return ConflictCheckerRepository(db)

    @staticmethod
    def create_payment_repository(db: Session) -> "PaymentRepository":
        from .payment_repository import PaymentRepository

        return PaymentRepository(db)

    @staticmethod
    def create_notification_repository(db: Session) -> "NotificationRepository":
        from .notification_repository import NotificationRepository

        return NotificationRepository(db)
