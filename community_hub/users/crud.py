from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.users.models import User


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    res = await session.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def list_users(session: AsyncSession) -> Sequence[User]:
    res = await session.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return res.scalars().all()
