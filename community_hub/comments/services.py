import logging

from fastapi import Depends, HTTPException
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins.models import Admin, AccountStatus
from community_hub.comments import schemas
from community_hub.comments.models import SubmissionComment, AuthorType
from community_hub.common.db import get_async_session
from community_hub.submissions.models import Submission

logger = logging.getLogger(__name__)

NOT_FOUND_OR_UNAUTHORIZED = "Comment not found or unauthorized"


class CommentService:
    def __init__(self, session: AsyncSession = Depends(get_async_session)):
        self.session = session

    async def _require_submission(self, submission_id: str) -> None:
        res = await self.session.execute(select(Submission.id).where(Submission.id == submission_id))
        if res.scalar_one_or_none() is None:
            raise HTTPException(status_code=404, detail="Submission not found")

    async def _is_active_admin(self, email: str) -> bool:
        res = await self.session.execute(
            select(Admin.id).where(Admin.email == email, Admin.account_status == AccountStatus.ACTIVE.value)
        )
        return res.scalar_one_or_none() is not None

    async def list_thread(self, submission_id: str) -> list[SubmissionComment]:
        res = await self.session.execute(
            select(SubmissionComment)
            .where(SubmissionComment.submission_id == submission_id)
            .order_by(SubmissionComment.created_at.asc(), SubmissionComment.id.asc())
        )
        return list(res.scalars().all())

    async def count(self, submission_id: str) -> int:
        res = await self.session.execute(
            select(func.count(SubmissionComment.id)).where(SubmissionComment.submission_id == submission_id)
        )
        return res.scalar_one()

    async def create(self, submission_id: str, data: schemas.CommentCreate) -> SubmissionComment:
        text = (data.comment_text or "").strip()
        if not text:
            raise HTTPException(status_code=400, detail="Comment text is required")
        if not data.author_email or not data.author_email.strip():
            raise HTTPException(status_code=400, detail="Author email is required")
        if data.author_type not in {t.value for t in AuthorType}:
            raise HTTPException(status_code=400, detail='Author type must be either "user" or "admin"')

        await self._require_submission(submission_id)

        if data.parent_comment_id is not None:
            parent = await self.session.get(SubmissionComment, data.parent_comment_id)
            if not parent:
                raise HTTPException(status_code=404, detail="Parent comment not found")
            if parent.submission_id != submission_id:
                raise HTTPException(status_code=400, detail="Parent comment belongs to another submission")

        comment = SubmissionComment(
            submission_id=submission_id,
            author_email=data.author_email.strip(),
            author_type=data.author_type,
            comment_text=text,
            parent_comment_id=data.parent_comment_id,
        )
        self.session.add(comment)
        await self.session.commit()
        await self.session.refresh(comment)
        logger.info("Comment %s added to %s by %s", comment.id, submission_id, comment.author_email)
        return comment

    async def update(self, submission_id: str, data: schemas.CommentUpdate) -> SubmissionComment:
        text = (data.comment_text or "").strip()
        if data.comment_id is None or not text:
            raise HTTPException(status_code=400, detail="Comment ID and text are required")
        if not data.author_email:
            raise HTTPException(status_code=400, detail="Author email is required")

        res = await self.session.execute(
            select(SubmissionComment).where(
                SubmissionComment.id == data.comment_id,
                SubmissionComment.submission_id == submission_id,
                SubmissionComment.author_email == data.author_email.strip(),
            )
        )
        comment = res.scalar_one_or_none()
        # чужой и несуществующий комментарий неотличимы
        if not comment:
            raise HTTPException(status_code=404, detail=NOT_FOUND_OR_UNAUTHORIZED)

        comment.comment_text = text
        await self.session.commit()
        await self.session.refresh(comment)
        return comment

    async def delete(self, submission_id: str, comment_id: int, actor_email: str, is_admin: bool) -> None:
        conditions = [
            SubmissionComment.id == comment_id,
            SubmissionComment.submission_id == submission_id,
        ]
        if not (is_admin and await self._is_active_admin(actor_email)):
            conditions.append(SubmissionComment.author_email == actor_email)

        # ответы удаляются каскадом
        res = await self.session.execute(delete(SubmissionComment).where(*conditions))
        if not res.rowcount:
            await self.session.rollback()
            raise HTTPException(status_code=404, detail=NOT_FOUND_OR_UNAUTHORIZED)
        await self.session.commit()
        logger.info("Comment %s on %s deleted by %s", comment_id, submission_id, actor_email)
