# backend/studiosync/routes/v1/notifications.py
from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_active_user, get_notification_service
from ...core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ...models.user import User
from ...schemas.base_responses import ApiResponse, PaginatedData
from ...schemas.notification import NotificationResponse
from ...services.notification_service import NotificationService

router = APIRouter(tags=["notifications-v1"])


@router.get("", response_model=ApiResponse[PaginatedData[NotificationResponse]])
def list_notifications(
    unread_only: bool = Query(False),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_active_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> ApiResponse[PaginatedData[NotificationResponse]]:
    result = notification_service.list_notifications(
        current_user, unread_only=unread_only, page=page, per_page=per_page
    )
    items = [NotificationResponse.model_validate(n) for n in result["items"]]
    return ApiResponse(data=PaginatedData.build(items, result["total"], page, per_page))


@router.post("/{notification_id}/read", response_model=ApiResponse[NotificationResponse])
def mark_notification_read(
    notification_id: str,
    current_user: User = Depends(get_current_active_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> ApiResponse[NotificationResponse]:
    notification = notification_service.mark_read(current_user, notification_id)
    return ApiResponse(data=NotificationResponse.model_validate(notification))
