from datetime import datetime
from typing import Optional

from ..models.notification import NotificationType
from ._strict_base import StrictModel


class NotificationResponse(StrictModel):
    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None
