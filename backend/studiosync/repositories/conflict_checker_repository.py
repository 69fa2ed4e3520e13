# backend/studiosync/repositories/conflict_checker_repository.py
"""
ConflictChecker Repository for StudioSync

Data access for the reservation admission check. All interval queries use
half-open overlap: ``existing.start < requested.end AND requested.start <
existing.end``, so back-to-back reservations never collide.

Callers pass UTC datetimes; stored values are UTC as well.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..models.equipment import Equipment
from ..models.reservation import (
    ACTIVE_EQUIPMENT_BOOKING_STATUSES,
    ACTIVE_RESERVATION_STATUSES,
    EquipmentBooking,
    Reservation,
    ReservationStatus,
)
from ..models.studio import Studio, StudioAvailability
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConflictCheckerRepository(BaseRepository[Reservation]):
    """Repository for conflict checking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Reservation)
        self.logger = logging.getLogger(__name__)

    # Locks

    def lock_studio(self, studio_id: str) -> Optional[Studio]:
        """Fetch and lock the studio row for the rest of the transaction."""
        try:
            return self.studio_lock_query(studio_id).first()
        except Exception as e:
            self.logger.error(f"Error locking studio {studio_id}: {str(e)}")
            raise RepositoryException(f"Failed to lock studio: {str(e)}")

    def lock_equipment(self, equipment_ids: List[str]) -> List[Equipment]:
        """Fetch and lock equipment rows in id order."""
        if not equipment_ids:
            return []
        try:
            return self.equipment_lock_query(equipment_ids).all()
        except Exception as e:
            self.logger.error(f"Error locking equipment: {str(e)}")
            raise RepositoryException(f"Failed to lock equipment: {str(e)}")

    def studio_lock_query(self, studio_id: str) -> Query:
        return self.db.query(Studio).filter(Studio.id == studio_id).with_for_update()

    def equipment_lock_query(self, equipment_ids: List[str]) -> Query:
        # Consistent id order keeps concurrent admissions from deadlocking
        return (
            self.db.query(Equipment)
            .filter(Equipment.id.in_(equipment_ids))
            .order_by(Equipment.id)
            .with_for_update()
        )

    # Availability

    def get_availability_for_day(self, studio_id: str, day_of_week: int) -> Optional[StudioAvailability]:
        try:
            return (
                self.db.query(StudioAvailability)
                .filter(
                    StudioAvailability.studio_id == studio_id,
                    StudioAvailability.day_of_week == day_of_week,
                )
                .first()
            )
        except Exception as e:
            self.logger.error(f"Error getting availability: {str(e)}")
            raise RepositoryException(f"Failed to get availability: {str(e)}")

    # Overlap queries

    def find_studio_conflict(
        self,
        studio_id: str,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: Optional[str] = None,
    ) -> Optional[Reservation]:
        """First PENDING, CONFIRMED or PAID reservation on the studio overlapping the interval."""
        try:
            query = self.db.query(Reservation).filter(
                Reservation.studio_id == studio_id,
                Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
                Reservation.start_time < end_time,
                Reservation.end_time > start_time,
            )
            if exclude_reservation_id:
                query = query.filter(Reservation.id != exclude_reservation_id)
            return query.order_by(Reservation.start_time).first()
        except Exception as e:
            self.logger.error(f"Error checking studio conflicts: {str(e)}")
            raise RepositoryException(f"Failed to check studio conflicts: {str(e)}")

    def find_equipment_conflict(
        self,
        equipment_id: str,
        start_time: datetime,
        end_time: datetime,
        exclude_reservation_id: Optional[str] = None,
    ) -> Optional[EquipmentBooking]:
        """First active hold on the equipment overlapping the interval, ignoring cancelled reservations."""
        try:
            query = (
                self.db.query(EquipmentBooking)
                .join(Reservation, EquipmentBooking.reservation_id == Reservation.id)
                .filter(
                    EquipmentBooking.equipment_id == equipment_id,
                    EquipmentBooking.status.in_(ACTIVE_EQUIPMENT_BOOKING_STATUSES),
                    Reservation.status != ReservationStatus.CANCELLED,
                    EquipmentBooking.start_time < end_time,
                    EquipmentBooking.end_time > start_time,
                )
            )
            if exclude_reservation_id:
                query = query.filter(EquipmentBooking.reservation_id != exclude_reservation_id)
            return query.first()
        except Exception as e:
            self.logger.error(f"Error checking equipment conflicts: {str(e)}")
            raise RepositoryException(f"Failed to check equipment conflicts: {str(e)}")
