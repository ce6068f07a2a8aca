"""History and notification endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import get_current_user_id
from core.dependencies import get_storage
from core.logging import logger
from database.entities import Notification, UserHistory
from database.repository import StorageRepository
from api.dependencies import HistoryRequest, MessageResponse, NotificationRequest, parse_payload


router = APIRouter()


# ========== History ==========
@router.get("/history", response_model=List[UserHistory])
async def list_history(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[UserHistory]:
    return storage.get_user_history(user_id)


@router.post("/history", response_model=UserHistory)
async def add_history(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> UserHistory:
    data = await parse_payload(request, HistoryRequest, "Invalid history data")

    try:
        return storage.add_to_history(user_id, data)
    except Exception as e:
        logger.error(f"❌ History save failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


# ========== Notifications ==========
@router.get("/notifications", response_model=List[Notification])
async def list_notifications(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[Notification]:
    return storage.get_user_notifications(user_id)


@router.post("/notifications", response_model=Notification)
async def create_notification(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Notification:
    data = await parse_payload(request, NotificationRequest, "Invalid notification data")

    try:
        return storage.create_notification(user_id, data)
    except Exception as e:
        logger.error(f"❌ Notification save failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.patch("/notifications/{notification_id}/read", response_model=MessageResponse)
async def mark_notification_read(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> MessageResponse:
    """
    Mark one of the caller's notifications as read

    Raises:
        HTTPException: 404 if the notification does not exist or belongs to another user
    """
    notification = storage.get_notification(notification_id)
    if not notification or notification.user_id != user_id:
        raise HTTPException(status_code=404, detail="Notification not found")

    try:
        storage.mark_notification_as_read(notification_id)
    except Exception as e:
        logger.error(f"❌ Notification update failed ({notification_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    return MessageResponse(message="Notification marked as read")
