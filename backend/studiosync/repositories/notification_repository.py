# backend/studiosync/repositories/notification_repository.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..models.notification import Notification
from .base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: Session):
        super().__init__(db, Notification)

    def list_for_user(
        self, user_id: str, *, unread_only: bool = False, page: int = 1, per_page: int = 20
    ) -> Dict[str, Any]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return self.paginate(
            query.order_by(Notification.created_at.desc(), Notification.id.desc()), page, per_page
        )

    def get_for_user(self, notification_id: str, user_id: str) -> Optional[Notification]:
        return self.find_one_by(id=notification_id, user_id=user_id)
