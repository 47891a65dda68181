from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from community_hub.notifications import schemas
from community_hub.notifications.services import NotificationService


router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", summary="Уведомления пользователя или число непрочитанных")
async def list_notifications(
    user_email: str = Query(..., alias="userEmail", min_length=1),
    count_only: bool = Query(False, alias="countOnly"),
    service: NotificationService = Depends(),
):
    if count_only:
        return schemas.CountOut(count=await service.unread_count(user_email))
    items = await service.list_for_user(user_email)
    return [schemas.NotificationOut.model_validate(n) for n in items]


@router.post("", response_model=schemas.NotificationOut, status_code=status.HTTP_201_CREATED)
async def create_notification(payload: schemas.NotificationCreate, service: NotificationService = Depends()):
    return await service.create(payload)


@router.patch("", summary="Отметить прочитанным одно или все")
async def mark_notifications(payload: schemas.NotificationMarkIn, service: NotificationService = Depends()):
    if payload.mark_all:
        count = await service.mark_all_read(payload.user_email)
        return {"success": True, "count": count, "message": f"Marked {count} notifications as read"}

    if not payload.notification_id:
        raise HTTPException(status_code=400, detail="notificationId is required when markAll is false")

    notification = await service.mark_read(payload.notification_id, payload.user_email)
    return {"success": True, "notification": schemas.NotificationOut.model_validate(notification)}


@router.delete("", summary="Удалить одно или все уведомления")
async def delete_notifications(
    user_email: str = Query(..., alias="userEmail", min_length=1),
    notification_id: Optional[str] = Query(None, alias="notificationId"),
    delete_all: bool = Query(False, alias="deleteAll"),
    service: NotificationService = Depends(),
):
    if delete_all:
        count = await service.delete_all(user_email)
        return {"success": True, "count": count, "message": f"Deleted {count} notifications"}

    if not notification_id:
        raise HTTPException(status_code=400, detail="notificationId is required when deleteAll is false")

    await service.delete(notification_id, user_email)
    return {"success": True}
