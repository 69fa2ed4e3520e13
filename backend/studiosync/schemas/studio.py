"""Studio and weekly availability schemas."""

from datetime import datetime, time
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from ._strict_base import StrictModel, StrictRequestModel


class AvailabilityEntry(StrictRequestModel):
    """Opening hours for one weekday; 0 is Sunday, a 00:00 close means midnight."""

    day_of_week: int = Field(ge=0, le=6)
    opening_time: time
    closing_time: time
    is_available: bool = True

    @model_validator(mode="after")
    def _check_window(self) -> "AvailabilityEntry":
        if self.closing_time != time(0) and self.closing_time <= self.opening_time:
            raise ValueError("closing_time must be after opening_time")
        return self


def _reject_duplicate_days(entries: List[AvailabilityEntry]) -> List[AvailabilityEntry]:
    if entries:
        days = [entry.day_of_week for entry in entries]
        if len(days) != len(set(days)):
            raise ValueError("Each day_of_week may appear only once")
    return entries


class AvailabilityReplace(StrictRequestModel):
    availability: List[AvailabilityEntry]

    @field_validator("availability")
    @classmethod
    def _unique_days(cls, v: List[AvailabilityEntry]) -> List[AvailabilityEntry]:
        return _reject_duplicate_days(v)


class StudioCreate(StrictRequestModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    address: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)
    capacity: int = Field(gt=0)
    hourly_rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    availability: List[AvailabilityEntry] = Field(default_factory=list)

    @field_validator("availability")
    @classmethod
    def _unique_days(cls, v: List[AvailabilityEntry]) -> List[AvailabilityEntry]:
        return _reject_duplicate_days(v)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        return v.upper()


class StudioUpdate(StrictRequestModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=1, max_length=255)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    postal_code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    country: Optional[str] = Field(default=None, min_length=1, max_length=100)
    capacity: Optional[int] = Field(default=None, gt=0)
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    is_active: Optional[bool] = None


class AvailabilityResponse(StrictModel):
    day_of_week: int
    opening_time: time
    closing_time: time
    is_available: bool


class StudioResponse(StrictModel):
    id: str
    name: str
    description: Optional[str] = None
    address: str
    city: str
    postal_code: str
    country: str
    capacity: int
    hourly_rate: Decimal
    currency: str
    is_active: bool
    owner_id: str
    availability: List[AvailabilityResponse] = Field(
        default_factory=list, validation_alias=AliasChoices("availability", "availabilities")
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
