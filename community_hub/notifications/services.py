import logging
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.common.db import get_async_session, AsyncSessionLocal
from community_hub.notifications import crud, schemas
from community_hub.notifications.models import Notification, NotificationType
from community_hub.submissions.models import VALIDATED_STATUSES, REJECTED_STATUSES, SubmissionStatus

logger = logging.getLogger(__name__)


def build_status_notification(
    user_email: str,
    submission_id: str,
    file_name: str,
    status: str,
    reason: Optional[str] = None,
) -> dict:
    """Стандартное уведомление владельцу о смене статуса заявки."""
    if status in VALIDATED_STATUSES:
        kind = NotificationType.SUCCESS
        title = "Submission Validated"
        message = f'Your submission "{file_name}" has been successfully validated and approved.'
    elif status in REJECTED_STATUSES:
        kind = NotificationType.ERROR
        title = "Submission Rejected"
        if reason:
            message = f'Your submission "{file_name}" was rejected: {reason}'
        else:
            message = f'Your submission "{file_name}" was rejected. Please review and resubmit.'
    elif status == SubmissionStatus.PENDING.value:
        kind = NotificationType.WARNING
        title = "Validation Pending"
        message = f'Your submission "{file_name}" is pending validation.'
    else:
        kind = NotificationType.INFO
        title = "Submission Updated"
        message = f'Your submission "{file_name}" status has been updated to {status}.'

    return {
        "user_email": user_email,
        "type": kind.value,
        "title": title,
        "message": message,
        "action_url": f"/dashboard/submissions?submissionId={submission_id}",
    }


async def notify_safely(payload: dict) -> Optional[Notification]:
    """Creates a notification in its own session. Failures are logged, never raised."""
    try:
        async with AsyncSessionLocal() as session:
            notification = await crud.create_notification(session, **payload)
            await session.commit()
            return notification
    except Exception as e:
        logger.warning("Failed to create notification for %s: %s", payload.get("user_email"), e)
        return None


class NotificationService:
    def __init__(self, session: AsyncSession = Depends(get_async_session)):
        self.session = session

    async def create(self, data: schemas.NotificationCreate) -> Notification:
        notification = await crud.create_notification(
            self.session,
            user_email=data.user_email,
            type=data.type.value,
            title=data.title,
            message=data.message,
            action_url=data.action_url,
        )
        await self.session.commit()
        await self.session.refresh(notification)
        return notification

    async def list_for_user(self, user_email: str) -> list[Notification]:
        return list(await crud.list_for_user(self.session, user_email))

    async def unread_count(self, user_email: str) -> int:
        return await crud.unread_count(self.session, user_email)

    async def mark_read(self, notification_id: str, user_email: str) -> Notification:
        notification = await crud.mark_read(self.session, notification_id, user_email)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found or access denied")
        await self.session.commit()
        await self.session.refresh(notification)
        return notification

    async def mark_all_read(self, user_email: str) -> int:
        count = await crud.mark_all_read(self.session, user_email)
        await self.session.commit()
        return count

    async def delete(self, notification_id: str, user_email: str) -> None:
        deleted = await crud.delete_one(self.session, notification_id, user_email)
        if not deleted:
            raise HTTPException(status_code=404, detail="Notification not found or access denied")
        await self.session.commit()

    async def delete_all(self, user_email: str) -> int:
        count = await crud.delete_all(self.session, user_email)
        await self.session.commit()
        return count
