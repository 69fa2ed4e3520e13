# backend/studiosync/models/equipment.py
"""Equipment inventory attached to a studio."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base
from .base_enum import create_safe_enum


class EquipmentType(str, Enum):
    MICROPHONE = "MICROPHONE"
    MIXING_CONSOLE = "MIXING_CONSOLE"
    AUDIO_INTERFACE = "AUDIO_INTERFACE"
    INSTRUMENT = "INSTRUMENT"
    AMPLIFIER = "AMPLIFIER"
    SPEAKER = "SPEAKER"
    HEADPHONES = "HEADPHONES"
    SOFTWARE = "SOFTWARE"
    ACCESSORY = "ACCESSORY"
    OTHER = "OTHER"


class EquipmentStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_ORDER = "OUT_OF_ORDER"


# Statuses under which an item can still be reserved
BOOKABLE_EQUIPMENT_STATUSES = (EquipmentStatus.AVAILABLE, EquipmentStatus.IN_USE)


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    brand = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    serial_number = Column(String(100), nullable=True)
    type = Column(create_safe_enum(EquipmentType, "equipment_type"), nullable=False)
    status = Column(
        create_safe_enum(EquipmentStatus, "equipment_status"),
        nullable=False,
        default=EquipmentStatus.AVAILABLE,
    )
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    daily_rate = Column(Numeric(10, 2), nullable=True)
    studio_id = Column(
        String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    studio = relationship("Studio", back_populates="equipment")
    bookings = relationship(
        "EquipmentBooking",
        back_populates="equipment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_bookable(self) -> bool:
        return self.status in BOOKABLE_EQUIPMENT_STATUSES

    def __repr__(self) -> str:
        return f"<Equipment {self.id}: {self.name} [{self.type}] status={self.status}>"
