from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from community_hub.notifications.models import NotificationType


class NotificationCreate(BaseModel):
    user_email: str = Field(min_length=1, max_length=255)
    type: NotificationType
    title: str = Field(min_length=1, max_length=500)
    message: str = Field(min_length=1)
    action_url: Optional[str] = Field(None, max_length=500)


class NotificationOut(BaseModel):
    id: str
    user_email: str
    type: str
    title: str
    message: str
    read: bool
    action_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationMarkIn(BaseModel):
    user_email: str = Field(alias="userEmail", min_length=1)
    notification_id: Optional[str] = Field(None, alias="notificationId")
    mark_all: bool = Field(False, alias="markAll")

    class Config:
        populate_by_name = True


class CountOut(BaseModel):
    count: int
