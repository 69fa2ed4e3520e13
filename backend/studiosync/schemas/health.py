# backend/studiosync/schemas/health.py
"""Health check response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness payload; produced without touching the database."""

    status: str = Field(description="Service health status")
    service: str = Field(description="Service name")
    version: str = Field(description="API version")
    environment: str = Field(description="Current environment")
    timestamp: datetime = Field(description="Current server timestamp")


class DatabaseStatistics(BaseModel):
    users: int
    studios: int
    equipment: int
    reservations: int


class DatabaseHealthResponse(BaseModel):
    status: str = Field(description="Database health status")
    database: str = Field(description="Database dialect in use")
    statistics: DatabaseStatistics
