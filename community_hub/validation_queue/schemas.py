from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from community_hub.submissions.schemas import SubmissionSummary
from community_hub.validation_queue.models import QueueStatus


class QueueAddIn(BaseModel):
    admin_email: str = Field(alias="adminEmail", min_length=1)
    submission_id: Optional[str] = Field(None, alias="submissionId")
    submission_ids: Optional[list[str]] = Field(None, alias="submissionIds")

    class Config:
        populate_by_name = True


class QueueRemoveIn(BaseModel):
    submission_ids: Optional[list[str]] = Field(None, alias="submissionIds")

    class Config:
        populate_by_name = True


class QueueStatusIn(BaseModel):
    admin_email: str = Field(alias="adminEmail", min_length=1)
    submission_id: str = Field(alias="submissionId", min_length=1)
    status: QueueStatus

    class Config:
        populate_by_name = True


class QueueEntryOut(BaseModel):
    id: int
    submission_id: str
    admin_email: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    submission: Optional[SubmissionSummary] = None

    class Config:
        from_attributes = True


class QueueItemResult(BaseModel):
    submission_id: str
    outcome: str
    item: Optional[QueueEntryOut] = None


class QueueRemoveResult(BaseModel):
    submission_id: str
    removed: bool
