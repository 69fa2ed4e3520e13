# backend/studiosync/repositories/reservation_repository.py
"""
Reservation Repository for StudioSync

Handles reservation reads with their participants, equipment holds and
payment, plus the visibility rules used by the booking list.
"""

from datetime import datetime
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from ..core.exceptions import RepositoryException
from ..models.reservation import (
    EquipmentBooking,
    EquipmentBookingStatus,
    Reservation,
    ReservationParticipant,
    ReservationStatus,
)
from ..models.studio import Studio
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    def __init__(self, db: Session):
        super().__init__(db, Reservation)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Reservation.participants),
            selectinload(Reservation.equipment_bookings),
            selectinload(Reservation.payment),
            selectinload(Reservation.studio),
        )

    def list_reservations(
        self,
        *,
        visible_to_user_id: Optional[str] = None,
        studio_id: Optional[str] = None,
        status: Optional[ReservationStatus] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Dict[str, Any]:
        """
        List reservations, newest start first.

        With ``visible_to_user_id`` the result is limited to reservations the
        user created, takes part in, or that sit on a studio they own.
        """
        query = self._apply_eager_loading(self.db.query(Reservation))
        if visible_to_user_id:
            participant_ids = self.db.query(ReservationParticipant.reservation_id).filter(
                ReservationParticipant.user_id == visible_to_user_id
            )
            owned_studio_ids = self.db.query(Studio.id).filter(
                Studio.owner_id == visible_to_user_id
            )
            query = query.filter(
                or_(
                    Reservation.created_by == visible_to_user_id,
                    Reservation.id.in_(participant_ids),
                    Reservation.studio_id.in_(owned_studio_ids),
                )
            )
        if studio_id:
            query = query.filter(Reservation.studio_id == studio_id)
        if status is not None:
            query = query.filter(Reservation.status == status)
        return self.paginate(
            query.order_by(Reservation.start_time.desc(), Reservation.id), page, per_page
        )

    def add_participant(self, reservation_id: str, user_id: str, role: Any) -> ReservationParticipant:
        participant = ReservationParticipant(
            reservation_id=reservation_id, user_id=user_id, role=role
        )
        self.db.add(participant)
        return participant

    def add_equipment_booking(self, **kwargs) -> EquipmentBooking:
        booking = EquipmentBooking(**kwargs)
        self.db.add(booking)
        return booking

    def reschedule_equipment_bookings(
        self, reservation: Reservation, start_time: datetime, end_time: datetime
    ) -> int:
        """Move every active equipment hold of ``reservation`` to the new interval."""
        moved = 0
        for booking in reservation.equipment_bookings:
            if booking.status != EquipmentBookingStatus.RETURNED:
                booking.start_time = start_time
                booking.end_time = end_time
                moved += 1
        return moved

    def release_equipment_bookings(self, reservation: Reservation) -> List[EquipmentBooking]:
        """Mark the reservation's equipment holds RETURNED."""
        released = []
        try:
            for booking in reservation.equipment_bookings:
                if booking.status != EquipmentBookingStatus.RETURNED:
                    booking.status = EquipmentBookingStatus.RETURNED
                    released.append(booking)
            self.db.flush()
            return released
        except SQLAlchemyError as e:
            self.logger.error(f"Error releasing equipment for {reservation.id}: {str(e)}")
            raise RepositoryException(f"Failed to release equipment: {str(e)}")

    def is_participant(self, reservation_id: str, user_id: str) -> bool:
        return (
            self.db.query(ReservationParticipant.id)
            .filter(
                ReservationParticipant.reservation_id == reservation_id,
                ReservationParticipant.user_id == user_id,
            )
            .first()
            is not None
        )
