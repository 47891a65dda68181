import logging
from typing import Optional

import bcrypt
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins.models import Admin, AdminRole, AccountStatus
from community_hub.common.db import get_async_session

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # в базе лежит не bcrypt-хеш
        return False


def client_meta(request: Request) -> dict:
    """IP и user agent запроса для журнала действий."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    else:
        ip = request.headers.get("x-real-ip") or (request.client.host if request.client else None)
    return {"ip_address": ip, "user_agent": request.headers.get("user-agent")}


class CurrentAdmin:
    """Resolves the calling admin from the `x-admin-email` header."""

    def __init__(self, require_super: bool = False, optional: bool = False):
        self.require_super = require_super
        self.optional = optional

    async def __call__(
        self,
        session: AsyncSession = Depends(get_async_session),
        x_admin_email: Optional[str] = Header(None, alias="x-admin-email"),
    ) -> Optional[Admin]:
        # если email не передан
        if not x_admin_email:
            if self.optional:
                return None
            raise HTTPException(status_code=401, detail="Admin email header is required")

        res = await session.execute(select(Admin).where(Admin.email == x_admin_email.strip()))
        admin = res.scalar_one_or_none()
        if not admin or not admin.is_active:
            if self.optional:
                return None
            raise HTTPException(status_code=403, detail="Admin rights required")

        # проверка прав
        if self.require_super and admin.admin_role != AdminRole.SUPER_ADMIN.value:
            raise HTTPException(status_code=403, detail="Super admin rights required")

        return admin


async def init_admin(session: AsyncSession, email: str, name: str, password: str) -> Admin:
    result = await session.execute(select(Admin).where(Admin.email == email))
    admin = result.scalar_one_or_none()
    if admin:
        logger.info("Super admin %s already exists", email)
        return admin
    new_admin = Admin(
        email=email,
        name=name,
        password=hash_password(password),
        admin_role=AdminRole.SUPER_ADMIN.value,
        account_status=AccountStatus.ACTIVE.value,
    )
    session.add(new_admin)
    await session.commit()
    await session.refresh(new_admin)
    logger.info("Super admin %s created", email)
    return new_admin
