# backend/studiosync/models/studio.py
"""
Studio and weekly availability models.

A studio is owned by exactly one user. Its opening hours are stored as one
``StudioAvailability`` row per day of week (0 = Sunday), unique per studio.
"""

import logging

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base

logger = logging.getLogger(__name__)


class Studio(Base):
    """Bookable room. ``capacity`` is informational; a studio holds one reservation at a time."""

    __tablename__ = "studios"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    is_active = Column(Boolean, nullable=False, default=True)
    owner_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="studios")
    availabilities = relationship(
        "StudioAvailability",
        back_populates="studio",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="StudioAvailability.day_of_week",
    )
    equipment = relationship(
        "Equipment", back_populates="studio", cascade="all, delete-orphan", passive_deletes=True
    )
    reservations = relationship(
        "Reservation", back_populates="studio", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_studios_capacity_positive"),
        CheckConstraint("hourly_rate >= 0", name="ck_studios_rate_non_negative"),
        Index("studios_city_country_idx", "city", "country"),
        Index("studios_owner_id_idx", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Studio {self.id}: {self.name} ({self.city})>"


class StudioAvailability(Base):
    """
    Opening hours for one day of the week.

    ``closing_time`` of 00:00 means the studio stays open until midnight.
    """

    __tablename__ = "studio_availabilities"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    studio_id = Column(String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)
    opening_time = Column(Time, nullable=False)
    closing_time = Column(Time, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    studio = relationship("Studio", back_populates="availabilities")

    __table_args__ = (
        UniqueConstraint(
            "studio_id", "day_of_week", name="studio_availabilities_studio_id_day_of_week_key"
        ),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_studio_availabilities_day"),
    )

    def covers(self, start, end) -> bool:
        """True if ``[start, end)`` wall-clock times fall inside opening hours."""
        if not self.is_available:
            return False
        closes_at_midnight = self.closing_time.hour == 0 and self.closing_time.minute == 0
        if start < self.opening_time:
            return False
        if end.hour == 0 and end.minute == 0:
            return closes_at_midnight
        return closes_at_midnight or end <= self.closing_time

    def __repr__(self) -> str:
        return (
            f"<StudioAvailability studio={self.studio_id} day={self.day_of_week} "
            f"{self.opening_time}-{self.closing_time}>"
        )
