from fastapi import APIRouter, Depends
from starlette import status

from community_hub.users import schemas
from community_hub.users.services import UserService


router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=schemas.UserAuthOut, status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.UserRegisterIn, service: UserService = Depends()):
    user = await service.register(payload)
    return {"success": True, "user": user}


@router.post("/login", response_model=schemas.UserAuthOut)
async def login(payload: schemas.UserLoginIn, service: UserService = Depends()):
    user = await service.login(payload)
    return {"success": True, "user": user}


admin_router = APIRouter(prefix="/admin", tags=["admins"])


@admin_router.get("/users", response_model=list[schemas.UserOut], summary="Список волонтёров")
async def list_users(service: UserService = Depends()):
    return await service.list_users()
