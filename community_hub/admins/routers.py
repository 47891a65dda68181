from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette import status

from community_hub.admins import schemas
from community_hub.admins.services import AdminService
from community_hub.common.common import client_meta


router = APIRouter(prefix="/admin", tags=["admins"])


@router.post("/register", response_model=schemas.AdminAuthOut, status_code=status.HTTP_201_CREATED)
async def register_admin(payload: schemas.AdminRegisterIn, service: AdminService = Depends()):
    admin = await service.register(payload)
    return {"success": True, "message": "Admin registered successfully", "admin": admin}


@router.post("/login", response_model=schemas.AdminAuthOut)
async def login_admin(payload: schemas.AdminLoginIn, service: AdminService = Depends()):
    admin = await service.login(payload)
    return {"success": True, "admin": admin}


@router.get("/admins", response_model=list[schemas.AdminOut], summary="Список администраторов")
async def list_admins(service: AdminService = Depends()):
    return await service.list_admins()


@router.patch("/admins/{admin_id}", response_model=schemas.AdminOut, summary="Изменить администратора (super_admin)")
async def update_admin(
    admin_id: int,
    payload: schemas.AdminUpdate,
    request: Request,
    service: AdminService = Depends(),
):
    return await service.update_admin(admin_id, payload, client_meta(request))


@router.delete("/admins/{admin_id}", response_model=schemas.AdminAuthOut, summary="Заблокировать администратора")
async def suspend_admin(admin_id: int, request: Request, service: AdminService = Depends()):
    admin = await service.suspend_admin(admin_id, client_meta(request))
    return {"success": True, "message": "Admin suspended", "admin": admin}


@router.get("/actions", response_model=list[schemas.AdminActionOut], summary="Журнал действий")
async def list_actions(
    admin_id: Optional[int] = Query(None, alias="adminId"),
    limit: int = Query(100, ge=1, le=1000),
    service: AdminService = Depends(),
):
    return await service.list_actions(admin_id, limit)
