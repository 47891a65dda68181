from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class UserRegisterIn(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    name: Optional[str] = Field(None, max_length=255)
    password: str = Field(min_length=1, max_length=72)


class UserLoginIn(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=72)


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class UserAuthOut(BaseModel):
    success: bool = True
    user: UserOut
