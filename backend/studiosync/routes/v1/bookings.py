# backend/studiosync/routes/v1/bookings.py
"""
Booking routes - API v1

Every route requires authentication. Creating a booking runs the admission
check; a refused booking comes back as INVALID_RANGE, NOT_FOUND,
STUDIO_UNAVAILABLE, STUDIO_CONFLICT or EQUIPMENT_CONFLICT.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...api.dependencies import get_booking_service, get_current_active_user
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...models.reservation import ReservationStatus
from ...models.user import User
from ...schemas.base_responses import ApiResponse, PaginatedData
from ...schemas.reservation import (
    PaymentCreate,
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
)
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


@router.get("", response_model=ApiResponse[PaginatedData[ReservationResponse]])
def list_bookings(
    studio_id: Optional[str] = Query(None),
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[PaginatedData[ReservationResponse]]:
    result = booking_service.list_reservations(
        current_user, studio_id=studio_id, status=status_filter, page=page, per_page=per_page
    )
    items = [ReservationResponse.model_validate(r) for r in result["items"]]
    return ApiResponse(data=PaginatedData.build(items, result["total"], page, per_page))


@router.post(
    "",
    response_model=ApiResponse[ReservationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    payload: ReservationCreate,
    current_user: User = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[ReservationResponse]:
    reservation = booking_service.create_reservation(current_user, payload)
    return ApiResponse(
        data=ReservationResponse.model_validate(reservation), message="Reservation created"
    )


@router.get("/{reservation_id}", response_model=ApiResponse[ReservationResponse])
def get_booking(
    reservation_id: str,
    current_user: User = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[ReservationResponse]:
    reservation = booking_service.get_reservation(current_user, reservation_id)
    return ApiResponse(data=ReservationResponse.model_validate(reservation))


@router.patch("/{reservation_id}", response_model=ApiResponse[ReservationResponse])
def update_booking(
    reservation_id: str,
    payload: ReservationUpdate,
    current_user: User = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[ReservationResponse]:
    """Reschedule, rename or change the status of a reservation."""
    reservation = booking_service.update_reservation(current_user, reservation_id, payload)
    return ApiResponse(
        data=ReservationResponse.model_validate(reservation), message="Reservation updated"
    )


@router.post("/{reservation_id}/payment", response_model=ApiResponse[ReservationResponse])
def pay_booking(
    reservation_id: str,
    payload: Optional[PaymentCreate] = Body(None),
    current_user: User = Depends(get_current_active_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[ReservationResponse]:
    reservation = booking_service.pay_reservation(
        current_user,
        reservation_id,
        payment_method=payload.payment_method if payload else None,
    )
    return ApiResponse(
        data=ReservationResponse.model_validate(reservation), message="Payment recorded"
    )
