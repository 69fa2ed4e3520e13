# backend/studiosync/routes/v1/equipment.py
"""
Equipment routes - API v1
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_current_active_user, get_equipment_service
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...models.equipment import EquipmentStatus, EquipmentType
from ...models.user import User
from ...schemas.base_responses import ApiResponse, PaginatedData
from ...schemas.equipment import EquipmentCreate, EquipmentResponse, EquipmentUpdate
from ...services.equipment_service import EquipmentService

router = APIRouter(tags=["equipment-v1"])


@router.get("", response_model=ApiResponse[PaginatedData[EquipmentResponse]])
def list_equipment(
    studio_id: Optional[str] = Query(None),
    type: Optional[EquipmentType] = Query(None),
    status_filter: Optional[EquipmentStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    equipment_service: EquipmentService = Depends(get_equipment_service),
) -> ApiResponse[PaginatedData[EquipmentResponse]]:
    result = equipment_service.list_equipment(
        studio_id=studio_id, type=type, status=status_filter, page=page, per_page=per_page
    )
    items = [EquipmentResponse.model_validate(item) for item in result["items"]]
    return ApiResponse(data=PaginatedData.build(items, result["total"], page, per_page))


@router.post(
    "",
    response_model=ApiResponse[EquipmentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_equipment(
    payload: EquipmentCreate,
    current_user: User = Depends(get_current_active_user),
    equipment_service: EquipmentService = Depends(get_equipment_service),
) -> ApiResponse[EquipmentResponse]:
    """Add equipment to a studio; only its owner or an admin may."""
    item = equipment_service.create_equipment(current_user, payload)
    return ApiResponse(data=EquipmentResponse.model_validate(item), message="Equipment created")


@router.get("/{equipment_id}", response_model=ApiResponse[EquipmentResponse])
def get_equipment(
    equipment_id: str,
    equipment_service: EquipmentService = Depends(get_equipment_service),
) -> ApiResponse[EquipmentResponse]:
    item = equipment_service.get_equipment(equipment_id)
    return ApiResponse(data=EquipmentResponse.model_validate(item))


@router.patch("/{equipment_id}", response_model=ApiResponse[EquipmentResponse])
def update_equipment(
    equipment_id: str,
    payload: EquipmentUpdate,
    current_user: User = Depends(get_current_active_user),
    equipment_service: EquipmentService = Depends(get_equipment_service),
) -> ApiResponse[EquipmentResponse]:
    item = equipment_service.update_equipment(current_user, equipment_id, payload)
    return ApiResponse(data=EquipmentResponse.model_validate(item), message="Equipment updated")
