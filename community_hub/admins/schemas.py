from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from community_hub.admins.models import AdminRole, AccountStatus


class AdminRegisterIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=72)
    admin_role: AdminRole
    country: Optional[str] = Field(None, max_length=100)
    account_status: Optional[AccountStatus] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AdminLoginIn(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=72)


class AdminUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    admin_role: Optional[AdminRole] = None
    country: Optional[str] = Field(None, max_length=100)
    account_status: Optional[AccountStatus] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AdminOut(BaseModel):
    id: int
    email: str
    name: str
    admin_role: str
    country: Optional[str] = None
    account_status: str

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class AdminAuthOut(BaseModel):
    success: bool = True
    message: Optional[str] = None
    admin: AdminOut


class AdminActionOut(BaseModel):
    id: int
    admin_id: int
    action_type: str
    target_type: Optional[str] = None
    target_id: Optional[str] = None
    description: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
