# backend/studiosync/services/notification_service.py
"""In-app notifications for reservation events."""

from typing import Any, Dict

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException
from ..models.notification import Notification, NotificationType
from ..models.reservation import Reservation
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from .base import BaseService


class NotificationService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_notification_repository(db)

    def notify_reservation_confirmed(self, reservation: Reservation) -> Notification:
        """Queue a confirmation notice; committed with the caller's transaction."""
        return self.repository.create(
            user_id=reservation.created_by,
            type=NotificationType.RESERVATION_CONFIRMED,
            title="Reservation confirmed",
            message=f'Your reservation "{reservation.title}" has been confirmed.',
        )

    def notify_payment_received(self, reservation: Reservation) -> Notification:
        return self.repository.create(
            user_id=reservation.created_by,
            type=NotificationType.PAYMENT_RECEIVED,
            title="Payment received",
            message=(
                f'Payment of {reservation.total_price} {reservation.currency} '
                f'for "{reservation.title}" has been received.'
            ),
        )

    def list_notifications(
        self, user: User, *, unread_only: bool = False, page: int = 1, per_page: int = 20
    ) -> Dict[str, Any]:
        return self.repository.list_for_user(
            user.id, unread_only=unread_only, page=page, per_page=per_page
        )

    def mark_read(self, user: User, notification_id: str) -> Notification:
        notification = self.repository.get_for_user(notification_id, user.id)
        if notification is None:
            raise NotFoundException("Notification not found")
        if not notification.is_read:
            with self.transaction():
                notification.is_read = True
        return notification
