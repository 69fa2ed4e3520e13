# backend/studiosync/models/reservation.py
"""
Reservation models for StudioSync.

A ``Reservation`` holds a studio for a half-open interval ``[start_time,
end_time)``. Equipment is held through ``EquipmentBooking`` rows that copy
the reservation's interval, and the people attending are recorded as
``ReservationParticipant`` rows.
"""

from enum import Enum
import logging

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base
from .base_enum import create_safe_enum

logger = logging.getLogger(__name__)


class ReservationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    PAID = "PAID"


# Statuses that hold the studio
ACTIVE_RESERVATION_STATUSES = (
    ReservationStatus.PENDING,
    ReservationStatus.CONFIRMED,
    ReservationStatus.PAID,
)
TERMINAL_RESERVATION_STATUSES = (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED)


class ParticipantRole(str, Enum):
    PRODUCER = "PRODUCER"
    ENGINEER = "ENGINEER"
    MUSICIAN = "MUSICIAN"


class EquipmentBookingStatus(str, Enum):
    RESERVED = "RESERVED"
    IN_USE = "IN_USE"
    RETURNED = "RETURNED"


# Statuses that hold the equipment item
ACTIVE_EQUIPMENT_BOOKING_STATUSES = (EquipmentBookingStatus.RESERVED, EquipmentBookingStatus.IN_USE)


class Reservation(Base):
    """
    A studio session.

    Only PENDING, CONFIRMED and PAID reservations block the studio. CANCELLED
    and COMPLETED are terminal.
    """

    __tablename__ = "reservations"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(
        create_safe_enum(ReservationStatus, "reservation_status"),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    total_price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    studio_id = Column(String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=False)
    created_by = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    studio = relationship("Studio", back_populates="reservations")
    creator = relationship("User", back_populates="reservations")
    participants = relationship(
        "ReservationParticipant",
        back_populates="reservation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    equipment_bookings = relationship(
        "EquipmentBooking",
        back_populates="reservation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    payment = relationship(
        "Payment",
        back_populates="reservation",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_reservations_time_order"),
        Index("reservations_studio_time_idx", "studio_id", "start_time", "end_time"),
        Index("reservations_created_by_idx", "created_by"),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RESERVATION_STATUSES

    def __repr__(self) -> str:
        return (
            f"<Reservation {self.id} studio={self.studio_id} "
            f"{self.start_time}-{self.end_time} status={self.status}>"
        )


class ReservationParticipant(Base):
    __tablename__ = "reservation_participants"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    reservation_id = Column(
        String(26), ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role = Column(
        create_safe_enum(ParticipantRole, "participant_role"),
        nullable=False,
        default=ParticipantRole.MUSICIAN,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    reservation = relationship("Reservation", back_populates="participants")
    user = relationship("User", back_populates="participations")

    __table_args__ = (
        UniqueConstraint(
            "reservation_id", "user_id", name="reservation_participants_reservation_user_key"
        ),
    )


class EquipmentBooking(Base):
    """Hold on one equipment item for the interval of its reservation."""

    __tablename__ = "equipment_bookings"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    reservation_id = Column(
        String(26), ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False
    )
    equipment_id = Column(String(26), ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    status = Column(
        create_safe_enum(EquipmentBookingStatus, "equipment_booking_status"),
        nullable=False,
        default=EquipmentBookingStatus.RESERVED,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    reservation = relationship("Reservation", back_populates="equipment_bookings")
    equipment = relationship("Equipment", back_populates="bookings")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint(
            "reservation_id", "equipment_id", name="equipment_bookings_reservation_equipment_key"
        ),
        CheckConstraint("quantity >= 1", name="ck_equipment_bookings_quantity"),
        Index("equipment_bookings_equipment_time_idx", "equipment_id", "start_time", "end_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<EquipmentBooking {self.id} equipment={self.equipment_id} "
            f"reservation={self.reservation_id} status={self.status}>"
        )
