# backend/studiosync/models/user.py
"""
User model for the StudioSync platform.

A single ``users`` table holds every account. The ``role`` column decides
what the account may do: studio owners publish studios and equipment,
artists and technicians book them, admins manage everything.
"""

from enum import Enum
import logging

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base
from .base_enum import create_safe_enum

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    STUDIO_OWNER = "STUDIO_OWNER"
    ARTIST = "ARTIST"
    TECHNICIAN = "TECHNICIAN"
    USER = "USER"


class User(Base):
    """
    Account used for authentication and ownership.

    Relationships cascade so deleting a user removes the studios they own,
    the reservations they authored and their participations.
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    avatar = Column(String(500), nullable=True)
    role = Column(create_safe_enum(UserRole, "user_role"), nullable=False, default=UserRole.ARTIST)
    is_active = Column(Boolean, nullable=False, default=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    # Bumped on logout; tokens carrying an older version are rejected
    token_version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    studios = relationship(
        "Studio", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    reservations = relationship(
        "Reservation",
        back_populates="creator",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    participations = relationship(
        "ReservationParticipant",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    notifications = relationship(
        "Notification", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.email} role={self.role}>"
