import time
import uuid
from typing import Optional, Sequence

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.notifications.models import Notification


def new_notification_id() -> str:
    return f"notif_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


async def create_notification(
    session: AsyncSession,
    *,
    user_email: str,
    type: str,
    title: str,
    message: str,
    action_url: Optional[str] = None,
) -> Notification:
    notification = Notification(
        id=new_notification_id(),
        user_email=user_email,
        type=type,
        title=title,
        message=message,
        action_url=action_url,
        read=False,
    )
    session.add(notification)
    await session.flush()
    return notification


async def list_for_user(session: AsyncSession, user_email: str) -> Sequence[Notification]:
    res = await session.execute(
        select(Notification)
        .where(Notification.user_email == user_email)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return res.scalars().all()


async def unread_count(session: AsyncSession, user_email: str) -> int:
    res = await session.execute(
        select(func.count(Notification.id))
        .where(Notification.user_email == user_email, Notification.read.is_(False))
    )
    return res.scalar_one()


async def mark_read(session: AsyncSession, notification_id: str, user_email: str) -> Optional[Notification]:
    res = await session.execute(
        select(Notification).where(Notification.id == notification_id, Notification.user_email == user_email)
    )
    notification = res.scalar_one_or_none()
    if notification:
        notification.read = True
        await session.flush()
    return notification


async def mark_all_read(session: AsyncSession, user_email: str) -> int:
    res = await session.execute(
        update(Notification)
        .where(Notification.user_email == user_email, Notification.read.is_(False))
        .values(read=True, updated_at=func.now())
    )
    return res.rowcount or 0


async def delete_one(session: AsyncSession, notification_id: str, user_email: str) -> bool:
    res = await session.execute(
        delete(Notification).where(Notification.id == notification_id, Notification.user_email == user_email)
    )
    return (res.rowcount or 0) > 0


async def delete_all(session: AsyncSession, user_email: str) -> int:
    res = await session.execute(delete(Notification).where(Notification.user_email == user_email))
    return res.rowcount or 0
