import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins import crud, schemas
from community_hub.admins.models import Admin, AdminAction, AdminRole, AccountStatus
from community_hub.common.common import CurrentAdmin, hash_password, check_password
from community_hub.common.db import get_async_session, AsyncSessionLocal

logger = logging.getLogger(__name__)


async def log_action_safely(
    admin_email: Optional[str],
    action_type: str,
    *,
    target_type: Optional[str] = None,
    target_id: Optional[str] = None,
    description: Optional[str] = None,
    meta: Optional[dict] = None,
) -> Optional[AdminAction]:
    """Пишет запись в журнал в отдельной сессии. Ошибки только логируются."""
    if not admin_email:
        return None
    meta = meta or {}
    try:
        async with AsyncSessionLocal() as session:
            admin = await crud.get_admin_by_email(session, admin_email)
            if not admin:
                logger.info("Skipping audit entry %s: %s is not an admin", action_type, admin_email)
                return None
            action = await crud.add_action(
                session,
                admin_id=admin.id,
                action_type=action_type,
                target_type=target_type,
                target_id=target_id,
                description=description,
                ip_address=meta.get("ip_address"),
                user_agent=meta.get("user_agent"),
            )
            await session.commit()
            return action
    except Exception as e:
        logger.warning("Failed to log admin action %s for %s: %s", action_type, admin_email, e)
        return None


class AdminService:
    def __init__(
        self,
        session: AsyncSession = Depends(get_async_session),
        current_admin: Annotated[Optional[Admin], Depends(CurrentAdmin(optional=True))] = None,
    ):
        self.session = session
        self.current_admin = current_admin

    # ===== Helpers =====
    def _require_admin(self) -> Admin:
        if not self.current_admin:
            raise HTTPException(status_code=403, detail="Admin rights required")
        return self.current_admin

    def _require_super(self) -> Admin:
        admin = self._require_admin()
        if admin.admin_role != AdminRole.SUPER_ADMIN.value:
            raise HTTPException(status_code=403, detail="Super admin rights required")
        return admin

    async def _get_or_404(self, admin_id: int) -> Admin:
        admin = await crud.get_admin(self.session, admin_id)
        if not admin:
            raise HTTPException(status_code=404, detail="Admin not found")
        return admin

    # ===== Public API =====
    async def register(self, data: schemas.AdminRegisterIn) -> Admin:
        email = data.email.strip()
        if await crud.get_admin_by_email(self.session, email):
            raise HTTPException(status_code=409, detail="Admin with this email already exists")

        admin = Admin(
            email=email,
            name=data.name.strip(),
            password=hash_password(data.password),
            admin_role=data.admin_role.value,
            country=data.country,
            account_status=(data.account_status or AccountStatus.ACTIVE).value,
        )
        self.session.add(admin)
        await self.session.commit()
        await self.session.refresh(admin)
        logger.info("Admin %s registered as %s", admin.email, admin.admin_role)
        return admin

    async def login(self, data: schemas.AdminLoginIn) -> Admin:
        admin = await crud.get_admin_by_email(self.session, data.email.strip())
        if not admin:
            raise HTTPException(status_code=404, detail="Admin not found")
        if admin.account_status == AccountStatus.PENDING.value:
            raise HTTPException(status_code=403, detail="Account is pending approval")
        if admin.account_status == AccountStatus.SUSPENDED.value:
            raise HTTPException(status_code=403, detail="Account is suspended")
        if not check_password(data.password, admin.password):
            raise HTTPException(status_code=401, detail="Invalid password")
        return admin

    async def list_admins(self) -> list[Admin]:
        self._require_admin()
        return list(await crud.list_admins(self.session))

    async def update_admin(self, admin_id: int, data: schemas.AdminUpdate, meta: dict) -> Admin:
        actor = self._require_super()
        target = await self._get_or_404(admin_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(target, field, getattr(value, "value", value))
        await self.session.commit()
        await self.session.refresh(target)

        await log_action_safely(
            actor.email,
            "update_admin",
            target_type="admin",
            target_id=str(target.id),
            description=f"Updated {', '.join(sorted(changes)) or 'nothing'} for {target.email}",
            meta=meta,
        )
        return target

    async def suspend_admin(self, admin_id: int, meta: dict) -> Admin:
        actor = self._require_super()
        target = await self._get_or_404(admin_id)
        if target.id == actor.id:
            raise HTTPException(status_code=400, detail="You cannot suspend yourself")

        target.account_status = AccountStatus.SUSPENDED.value
        await self.session.commit()
        await self.session.refresh(target)
        logger.info("Admin %s suspended by %s", target.email, actor.email)

        await log_action_safely(
            actor.email,
            "suspend_admin",
            target_type="admin",
            target_id=str(target.id),
            description=f"Suspended {target.email}",
            meta=meta,
        )
        return target

    async def list_actions(self, admin_id: Optional[int], limit: int) -> list[AdminAction]:
        self._require_admin()
        return list(await crud.list_actions(self.session, admin_id=admin_id, limit=limit))
