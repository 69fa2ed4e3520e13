# backend/studiosync/models/notification.py
"""In-app notifications delivered to a single user."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base
from .base_enum import create_safe_enum


class NotificationType(str, Enum):
    RESERVATION_CONFIRMED = "RESERVATION_CONFIRMED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(create_safe_enum(NotificationType, "notification_type"), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="notifications")

    __table_args__ = (Index("notifications_user_read_idx", "user_id", "is_read"),)

    def __repr__(self) -> str:
        return f"<Notification {self.id} user={self.user_id} type={self.type} read={self.is_read}>"
