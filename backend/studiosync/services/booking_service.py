# backend/studiosync/services/booking_service.py
"""
Booking Service for StudioSync

Creates, reschedules, cancels and pays reservations. Every write that
depends on the admission check runs the check and the inserts inside the
same transaction, so a reservation is either stored with all of its
equipment holds and participants or not at all.

Visibility:
- admins see every reservation
- other users see reservations they created, take part in, or that are
  held on a studio they own
"""

from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidRangeException,
    NotFoundException,
    ValidationException,
)
from ..core.timezone_utils import ensure_utc, to_utc
from ..models.payment import PaymentStatus
from ..models.reservation import (
    ACTIVE_EQUIPMENT_BOOKING_STATUSES,
    ParticipantRole,
    Reservation,
    ReservationStatus,
    TERMINAL_RESERVATION_STATUSES,
)
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.reservation import ReservationCreate, ReservationUpdate
from .base import BaseService
from .conflict_checker import ConflictChecker
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    def __init__(
        self,
        db: Session,
        conflict_checker: Optional[ConflictChecker] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        super().__init__(db)
        self.repository = RepositoryFactory.create_reservation_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.payment_repository = RepositoryFactory.create_payment_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db)
        self.notification_service = notification_service or NotificationService(db)

    # Reads

    def get_reservation(self, user: User, reservation_id: str) -> Reservation:
        reservation = self._get_or_404(reservation_id)
        if not self._can_view(user, reservation):
            raise ForbiddenException("You do not have access to this reservation")
        return reservation

    def list_reservations(
        self,
        user: User,
        *,
        studio_id: Optional[str] = None,
        status: Optional[ReservationStatus] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> Dict[str, Any]:
        return self.repository.list_reservations(
            visible_to_user_id=None if user.is_admin else user.id,
            studio_id=studio_id,
            status=status,
            page=page,
            per_page=per_page,
        )

    # Writes

    @BaseService.measure_operation("create_reservation")
    def create_reservation(self, user: User, data: ReservationCreate) -> Reservation:
        """
        Admit and store a new PENDING reservation.

        Raises:
            InvalidRangeException, NotFoundException, StudioUnavailableException,
            StudioConflictException, EquipmentConflictException
        """
        start_time = to_utc(data.start_time)
        end_time = to_utc(data.end_time)

        with self.transaction():
            admission = self.conflict_checker.check_reservation(
                data.studio_id,
                start_time,
                end_time,
                equipment=[(item.equipment_id, item.quantity) for item in data.equipment],
            )
            reservation = self.repository.create(
                title=data.title,
                description=data.description,
                start_time=start_time,
                end_time=end_time,
                status=ReservationStatus.PENDING,
                total_price=admission.total_price,
                currency=admission.studio.currency,
                studio_id=admission.studio.id,
                created_by=user.id,
            )
            self._add_participants(reservation, user, data)
            for item, quantity in admission.equipment:
                self.repository.add_equipment_booking(
                    reservation_id=reservation.id,
                    equipment_id=item.id,
                    user_id=user.id,
                    quantity=quantity,
                    start_time=start_time,
                    end_time=end_time,
                )
            self.db.flush()

        self.log_operation(
            "create_reservation",
            reservation_id=reservation.id,
            studio_id=reservation.studio_id,
            user_id=user.id,
        )
        return self._reload(reservation.id)

    @BaseService.measure_operation("update_reservation")
    def update_reservation(
        self, user: User, reservation_id: str, data: ReservationUpdate
    ) -> Reservation:
        reservation = self._get_or_404(reservation_id)
        if not self._can_manage(user, reservation):
            raise ForbiddenException("Only the creator, studio owner or an admin can modify this")

        changes = data.model_dump(exclude_unset=True)
        new_start = to_utc(data.start_time) if data.start_time else ensure_utc(reservation.start_time)
        new_end = to_utc(data.end_time) if data.end_time else ensure_utc(reservation.end_time)
        times_changed = new_start != ensure_utc(reservation.start_time) or new_end != ensure_utc(
            reservation.end_time
        )
        new_status = data.status if data.status is not None else reservation.status
        status_changed = new_status != reservation.status
        fields = {
            key: changes[key]
            for key in ("title", "description")
            if key in changes and changes[key] != getattr(reservation, key)
        }
        if fields.get("title", "") is None:
            raise ValidationException("title cannot be null")

        if not (times_changed or status_changed or fields):
            return reservation
        if reservation.is_terminal:
            raise ValidationException(
                f"Reservation is {reservation.status.value} and can no longer be changed"
            )
        if status_changed and new_status == ReservationStatus.PAID:
            raise ValidationException("Use the payment endpoint to mark a reservation as paid")
        if (
            status_changed
            and reservation.status == ReservationStatus.PAID
            and new_status not in TERMINAL_RESERVATION_STATUSES
        ):
            raise ValidationException("A paid reservation can only be completed or cancelled")

        with self.transaction():
            if times_changed:
                if new_status in TERMINAL_RESERVATION_STATUSES:
                    if new_end <= new_start:
                        raise InvalidRangeException(new_start.isoformat(), new_end.isoformat())
                else:
                    held = [
                        (booking.equipment_id, booking.quantity)
                        for booking in reservation.equipment_bookings
                        if booking.status in ACTIVE_EQUIPMENT_BOOKING_STATUSES
                    ]
                    admission = self.conflict_checker.check_reservation(
                        reservation.studio_id,
                        new_start,
                        new_end,
                        equipment=held,
                        exclude_reservation_id=reservation.id,
                    )
                    reservation.total_price = admission.total_price
                reservation.start_time = new_start
                reservation.end_time = new_end
                self.repository.reschedule_equipment_bookings(reservation, new_start, new_end)

            for key, value in fields.items():
                setattr(reservation, key, value)

            if status_changed:
                reservation.status = new_status
                if new_status in TERMINAL_RESERVATION_STATUSES:
                    self.repository.release_equipment_bookings(reservation)
                elif new_status == ReservationStatus.CONFIRMED:
                    self.notification_service.notify_reservation_confirmed(reservation)
            self.db.flush()

        self.log_operation(
            "update_reservation",
            reservation_id=reservation.id,
            status=reservation.status.value,
            rescheduled=times_changed,
        )
        return self._reload(reservation.id)

    @BaseService.measure_operation("pay_reservation")
    def pay_reservation(
        self, user: User, reservation_id: str, payment_method: Optional[str] = None
    ) -> Reservation:
        reservation = self._get_or_404(reservation_id)
        if not (user.is_admin or reservation.created_by == user.id):
            raise ForbiddenException("Only the creator or an admin can pay for this reservation")
        if reservation.status == ReservationStatus.CANCELLED:
            raise ValidationException("A cancelled reservation cannot be paid")
        if reservation.payment is not None or reservation.status == ReservationStatus.PAID:
            raise ConflictException(
                "Reservation has already been paid", details={"reservation_id": reservation.id}
            )

        with self.transaction():
            self.payment_repository.create(
                reservation_id=reservation.id,
                amount=reservation.total_price,
                currency=reservation.currency,
                status=PaymentStatus.SUCCEEDED,
                payment_method=payment_method,
                paid_at=datetime.now(timezone.utc),
            )
            reservation.status = ReservationStatus.PAID
            self.notification_service.notify_payment_received(reservation)
            self.db.flush()

        self.log_operation("pay_reservation", reservation_id=reservation.id, user_id=user.id)
        return self._reload(reservation.id)

    # Helpers

    def _add_participants(self, reservation: Reservation, creator: User, data: ReservationCreate) -> None:
        roles = {creator.id: ParticipantRole.MUSICIAN}
        for participant in data.participants:
            roles[participant.user_id] = participant.role
        missing = self._missing_users([uid for uid in roles if uid != creator.id])
        if missing:
            raise NotFoundException("Participant not found", details={"user_ids": missing})
        for user_id, role in roles.items():
            self.repository.add_participant(reservation.id, user_id, role)

    def _missing_users(self, user_ids: List[str]) -> List[str]:
        return [uid for uid in user_ids if self.user_repository.get_by_id(uid) is None]

    def _get_or_404(self, reservation_id: str) -> Reservation:
        reservation = self.repository.get_by_id(reservation_id)
        if reservation is None:
            raise NotFoundException(
                "Reservation not found", details={"reservation_id": reservation_id}
            )
        return reservation

    def _reload(self, reservation_id: str) -> Reservation:
        reservation = self._get_or_404(reservation_id)
        self.db.refresh(reservation)
        return reservation

    def _can_manage(self, user: User, reservation: Reservation) -> bool:
        return (
            user.is_admin
            or reservation.created_by == user.id
            or reservation.studio.owner_id == user.id
        )

    def _can_view(self, user: User, reservation: Reservation) -> bool:
        return self._can_manage(user, reservation) or self.repository.is_participant(
            reservation.id, user.id
        )
