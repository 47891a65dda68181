import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from community_hub.common.db import Base


class AuthorType(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class SubmissionComment(Base):
    __tablename__ = "submission_comments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    submission_id: Mapped[str] = mapped_column(
        ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author_type: Mapped[str] = mapped_column(String(50), nullable=False)
    comment_text: Mapped[str] = mapped_column(Text, nullable=False)
    # replies go away together with their parent
    parent_comment_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("submission_comments.id", ondelete="CASCADE"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
