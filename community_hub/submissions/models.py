import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, BigInteger, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from community_hub.common.db import Base


class FileType(str, enum.Enum):
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"


class SubmissionStatus(str, enum.Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    PROCESSING = "processing"
    VALIDATED = "validated"
    REJECTED = "rejected"
    SUCCESSFUL = "successful"
    FAILED = "failed"


# статусы, которые попадают в списки модерации
PENDING_STATUSES = (SubmissionStatus.PENDING.value, SubmissionStatus.PROCESSING.value, SubmissionStatus.SUBMITTED.value)
VALIDATED_STATUSES = (SubmissionStatus.VALIDATED.value, SubmissionStatus.SUCCESSFUL.value)
REJECTED_STATUSES = (SubmissionStatus.REJECTED.value, SubmissionStatus.FAILED.value)


class Submission(Base):
    __tablename__ = "submissions"

    # assigned by the uploading client, not by the database
    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    file_type: Mapped[str] = mapped_column(String(50), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(String(50), default=SubmissionStatus.PENDING.value, nullable=False, index=True)
    preview: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rejection_feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
