"""
Base response schemas for the standard response envelope.

Every endpoint answers with ``{"success": bool, "data"?, "message"?}`` on
success. Error envelopes are produced by ``studiosync.errors`` and add
``error``, ``code`` and ``details``.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope wrapping a single payload."""

    success: bool = Field(default=True, description="Operation success status")
    data: Optional[T] = Field(default=None, description="Response payload")
    message: Optional[str] = Field(default=None, description="Human-readable message")


class PaginatedData(BaseModel, Generic[T]):
    """Page of items plus the counters clients need to paginate."""

    items: List[T] = Field(description="List of items")
    total: int = Field(description="Total number of items")
    page: int = Field(default=1, ge=1, description="Current page number")
    per_page: int = Field(default=20, ge=1, le=100, description="Items per page")
    has_next: bool = Field(description="Whether there's a next page")
    has_prev: bool = Field(description="Whether there's a previous page")

    @classmethod
    def build(cls, items: List[Any], total: int, page: int, per_page: int) -> "PaginatedData":
        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            has_next=page * per_page < total,
            has_prev=page > 1,
        )


class ErrorResponse(BaseModel):
    """Shape of every error envelope (documentation only)."""

    success: bool = False
    error: str
    code: str
    details: Optional[Dict[str, Any]] = None
