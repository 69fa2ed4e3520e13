"""
Reservation schemas.

Request datetimes may carry an offset; naive values are read in the studio
timezone by the service layer. Responses always carry UTC.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_serializer, field_validator

from ..core.timezone_utils import ensure_utc
from ..models.payment import PaymentStatus
from ..models.reservation import EquipmentBookingStatus, ParticipantRole, ReservationStatus
from ._strict_base import StrictModel, StrictRequestModel


class EquipmentRequest(StrictRequestModel):
    equipment_id: str = Field(min_length=1, max_length=26)
    quantity: int = Field(default=1, ge=1)


class ParticipantRequest(StrictRequestModel):
    user_id: str = Field(min_length=1, max_length=26)
    role: ParticipantRole = ParticipantRole.MUSICIAN


class ReservationCreate(StrictRequestModel):
    studio_id: str = Field(min_length=1, max_length=26)
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    equipment: List[EquipmentRequest] = Field(default_factory=list)
    participants: List[ParticipantRequest] = Field(default_factory=list)

    @field_validator("equipment")
    @classmethod
    def _unique_equipment(cls, v: List[EquipmentRequest]) -> List[EquipmentRequest]:
        ids = [item.equipment_id for item in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Each equipment_id may appear only once")
        return v


class ReservationUpdate(StrictRequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[ReservationStatus] = None


class PaymentCreate(StrictRequestModel):
    payment_method: Optional[str] = Field(default=None, max_length=50)


class _UtcTimes(StrictModel):
    @field_serializer("start_time", "end_time", check_fields=False)
    def _serialize_utc(self, value: datetime) -> str:
        return ensure_utc(value).isoformat()


class EquipmentBookingResponse(_UtcTimes):
    id: str
    equipment_id: str
    quantity: int
    status: EquipmentBookingStatus
    start_time: datetime
    end_time: datetime


class ParticipantResponse(StrictModel):
    user_id: str
    role: ParticipantRole


class PaymentResponse(StrictModel):
    id: str
    reservation_id: str
    amount: Decimal
    currency: str
    status: PaymentStatus
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None


class ReservationResponse(_UtcTimes):
    id: str
    title: str
    description: Optional[str] = None
    studio_id: str
    created_by: str
    start_time: datetime
    end_time: datetime
    status: ReservationStatus
    total_price: Decimal
    currency: str
    participants: List[ParticipantResponse] = Field(default_factory=list)
    equipment_bookings: List[EquipmentBookingResponse] = Field(default_factory=list)
    payment: Optional[PaymentResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
