from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins.models import Admin, AdminAction


async def get_admin_by_email(session: AsyncSession, email: str) -> Optional[Admin]:
    res = await session.execute(select(Admin).where(Admin.email == email))
    return res.scalar_one_or_none()


async def get_admin(session: AsyncSession, admin_id: int) -> Optional[Admin]:
    res = await session.execute(select(Admin).where(Admin.id == admin_id))
    return res.scalar_one_or_none()


async def list_admins(session: AsyncSession) -> Sequence[Admin]:
    res = await session.execute(select(Admin).order_by(Admin.created_at.desc(), Admin.id.desc()))
    return res.scalars().all()


async def add_action(
    session: AsyncSession,
    *,
    admin_id: int,
    action_type: str,
    target_type: Optional[str] = None,
    target_id: Optional[str] = None,
    description: Optional[str] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AdminAction:
    action = AdminAction(
        admin_id=admin_id,
        action_type=action_type,
        target_type=target_type,
        target_id=target_id,
        description=description,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(action)
    await session.flush()
    return action


async def list_actions(session: AsyncSession, admin_id: Optional[int] = None, limit: int = 100) -> Sequence[AdminAction]:
    q = select(AdminAction)
    if admin_id is not None:
        q = q.where(AdminAction.admin_id == admin_id)
    res = await session.execute(q.order_by(AdminAction.created_at.desc(), AdminAction.id.desc()).limit(limit))
    return res.scalars().all()
