"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base for response DTOs built from ORM rows."""

    model_config = ConfigDict(extra="forbid", from_attributes=True)


class StrictRequestModel(BaseModel):
    """Request DTO base; unknown fields are a validation error."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)
