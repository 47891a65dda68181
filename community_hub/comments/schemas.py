from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CommentCreate(BaseModel):
    # required-ness is checked in CommentService to keep the messages readable
    comment_text: Optional[str] = None
    author_email: Optional[str] = None
    author_type: Optional[str] = None
    parent_comment_id: Optional[int] = None


class CommentUpdate(BaseModel):
    comment_id: Optional[int] = None
    comment_text: Optional[str] = None
    author_email: Optional[str] = None


class CommentOut(BaseModel):
    id: int
    submission_id: str
    author_email: str
    author_type: str
    comment_text: str
    parent_comment_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
