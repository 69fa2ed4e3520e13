# backend/studiosync/routes/v1/studios.py
"""
Studio routes - API v1

Listing and reading studios is public. Creating requires the STUDIO_OWNER
or ADMIN role; changing or deleting requires owning the studio or ADMIN.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_current_active_user, get_studio_service, require_roles
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...models.user import User, UserRole
from ...schemas.base_responses import ApiResponse, PaginatedData
from ...schemas.studio import (
    AvailabilityReplace,
    AvailabilityResponse,
    StudioCreate,
    StudioResponse,
    StudioUpdate,
)
from ...services.studio_service import StudioService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["studios-v1"])


@router.get("", response_model=ApiResponse[PaginatedData[StudioResponse]])
def list_studios(
    city: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    owner_id: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[PaginatedData[StudioResponse]]:
    result = studio_service.list_studios(
        city=city,
        country=country,
        owner_id=owner_id,
        is_active=is_active,
        page=page,
        per_page=per_page,
    )
    items = [StudioResponse.model_validate(studio) for studio in result["items"]]
    return ApiResponse(data=PaginatedData.build(items, result["total"], page, per_page))


@router.post(
    "",
    response_model=ApiResponse[StudioResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_studio(
    payload: StudioCreate,
    current_user: User = Depends(require_roles(UserRole.STUDIO_OWNER, UserRole.ADMIN)),
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[StudioResponse]:
    studio = studio_service.create_studio(current_user, payload)
    return ApiResponse(data=StudioResponse.model_validate(studio), message="Studio created")


@router.get("/{studio_id}", response_model=ApiResponse[StudioResponse])
def get_studio(
    studio_id: str,
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[StudioResponse]:
    return ApiResponse(data=StudioResponse.model_validate(studio_service.get_studio(studio_id)))


@router.patch("/{studio_id}", response_model=ApiResponse[StudioResponse])
def update_studio(
    studio_id: str,
    payload: StudioUpdate,
    current_user: User = Depends(get_current_active_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[StudioResponse]:
    studio = studio_service.update_studio(current_user, studio_id, payload)
    return ApiResponse(data=StudioResponse.model_validate(studio), message="Studio updated")


@router.delete("/{studio_id}", response_model=ApiResponse[None])
def delete_studio(
    studio_id: str,
    current_user: User = Depends(get_current_active_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[None]:
    """Delete a studio together with its equipment, schedule and reservations."""
    studio_service.delete_studio(current_user, studio_id)
    return ApiResponse(message="Studio deleted")


@router.get("/{studio_id}/availability", response_model=ApiResponse[List[AvailabilityResponse]])
def get_availability(
    studio_id: str,
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[List[AvailabilityResponse]]:
    rows = studio_service.get_availability(studio_id)
    return ApiResponse(data=[AvailabilityResponse.model_validate(row) for row in rows])


@router.put("/{studio_id}/availability", response_model=ApiResponse[List[AvailabilityResponse]])
def replace_availability(
    studio_id: str,
    payload: AvailabilityReplace,
    current_user: User = Depends(get_current_active_user),
    studio_service: StudioService = Depends(get_studio_service),
) -> ApiResponse[List[AvailabilityResponse]]:
    """Replace the whole weekly schedule; days left out become closed."""
    rows = studio_service.replace_availability(current_user, studio_id, payload.availability)
    return ApiResponse(
        data=[AvailabilityResponse.model_validate(row) for row in rows],
        message="Availability updated",
    )
