from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from ..models.equipment import EquipmentStatus, EquipmentType
from ._strict_base import StrictModel, StrictRequestModel


class EquipmentCreate(StrictRequestModel):
    studio_id: str = Field(min_length=26, max_length=26)
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    brand: Optional[str] = Field(default=None, max_length=100)
    model: Optional[str] = Field(default=None, max_length=100)
    serial_number: Optional[str] = Field(default=None, max_length=100)
    type: EquipmentType
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    daily_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class EquipmentUpdate(StrictRequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    brand: Optional[str] = Field(default=None, max_length=100)
    model: Optional[str] = Field(default=None, max_length=100)
    serial_number: Optional[str] = Field(default=None, max_length=100)
    type: Optional[EquipmentType] = None
    status: Optional[EquipmentStatus] = None
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    daily_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class EquipmentResponse(StrictModel):
    id: str
    studio_id: str
    name: str
    description: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    type: EquipmentType
    status: EquipmentStatus
    hourly_rate: Optional[Decimal] = None
    daily_rate: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
