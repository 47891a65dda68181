from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from community_hub.submissions.models import FileType, SubmissionStatus


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SubmissionCreate(CamelModel):
    id: str = Field(min_length=1, max_length=255)
    user_email: str = Field(min_length=1, max_length=255)
    file_name: str = Field(min_length=1, max_length=500)
    file_type: FileType
    file_size: int = Field(ge=0)
    status: Optional[SubmissionStatus] = None
    preview: Optional[str] = None


class SubmissionSummary(CamelModel):
    """Строка списка модерации, без превью."""
    id: str
    user_email: str
    file_name: str
    file_type: str
    file_size: int
    status: str
    rejection_reason: Optional[str] = None
    rejection_feedback: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class SubmissionOut(SubmissionSummary):
    preview: Optional[str] = None


class SubmitIn(CamelModel):
    # data for the create-on-submit path; ignored when the submission exists
    user_email: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[FileType] = None
    file_size: Optional[int] = Field(None, ge=0)
    preview: Optional[str] = None


class ValidateIn(CamelModel):
    admin_email: Optional[str] = None


class RejectIn(CamelModel):
    rejection_reason: Optional[str] = Field(None, max_length=255)
    rejection_feedback: Optional[str] = None
    admin_email: Optional[str] = None


class StatusChangeOut(BaseModel):
    success: bool = True
    message: Optional[str] = None
    submission: SubmissionOut


class UserStatsOut(CamelModel):
    total: int
    by_type: dict[str, int]
