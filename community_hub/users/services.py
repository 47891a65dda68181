import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins.models import Admin
from community_hub.common.common import CurrentAdmin, hash_password, check_password
from community_hub.common.db import get_async_session
from community_hub.users import crud, schemas
from community_hub.users.models import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        session: AsyncSession = Depends(get_async_session),
        current_admin: Annotated[Optional[Admin], Depends(CurrentAdmin(optional=True))] = None,
    ):
        self.session = session
        self.current_admin = current_admin

    async def register(self, data: schemas.UserRegisterIn) -> User:
        email = data.email.strip()
        user = await crud.get_user_by_email(self.session, email)

        # 1) Строка уже есть и с паролем, email занят
        if user and user.password:
            raise HTTPException(status_code=409, detail="User with this email already exists")

        # 2) Строку создала загрузка файла, дозаполняем
        if user:
            user.name = data.name or user.name
            user.password = hash_password(data.password)
        else:
            # 3) Создаём
            user = User(email=email, name=data.name, password=hash_password(data.password))
            self.session.add(user)

        await self.session.commit()
        await self.session.refresh(user)
        logger.info("User %s registered", user.email)
        return user

    async def login(self, data: schemas.UserLoginIn) -> User:
        user = await crud.get_user_by_email(self.session, data.email.strip())
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        if not check_password(data.password, user.password):
            raise HTTPException(status_code=401, detail="Invalid password")
        return user

    async def list_users(self) -> list[User]:
        """Список волонтёров (только для админов)."""
        if not self.current_admin:
            raise HTTPException(status_code=403, detail="Admin rights required")
        return list(await crud.list_users(self.session))
