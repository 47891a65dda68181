from typing import Optional, Sequence

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from community_hub.common.db import upsert
from community_hub.media.crud import build_media_row
from community_hub.submissions.models import Submission, SubmissionStatus
from community_hub.users.models import User


async def ensure_user(session: AsyncSession, email: str) -> None:
    # ON CONFLICT DO NOTHING: параллельные первые загрузки одного владельца
    stmt = upsert(session, User).values(email=email).on_conflict_do_nothing(index_elements=[User.email])
    await session.execute(stmt)


async def create_submission(
    session: AsyncSession,
    *,
    id: str,
    user_email: str,
    file_name: str,
    file_type: str,
    file_size: int,
    status: str,
    preview: Optional[str],
    max_document_preview: int,
) -> Submission:
    await ensure_user(session, user_email)

    submission = Submission(
        id=id,
        user_email=user_email,
        file_name=file_name,
        file_type=file_type,
        file_size=file_size,
        status=status,
        preview=preview,
    )
    session.add(submission)
    # дубликат id падает здесь с IntegrityError
    await session.flush()

    media = build_media_row(
        submission_id=id,
        user_email=user_email,
        file_name=file_name,
        file_type=file_type,
        file_size=file_size,
        preview=preview,
        max_document_preview=max_document_preview,
    )
    if media is not None:
        session.add(media)
        await session.flush()
    return submission


async def get_submission(session: AsyncSession, submission_id: str) -> Optional[Submission]:
    res = await session.execute(
        select(Submission)
        .where(Submission.id == submission_id)
        .execution_options(populate_existing=True)
    )
    return res.scalar_one_or_none()


async def list_for_user(session: AsyncSession, user_email: str, limit: int) -> Sequence[Submission]:
    res = await session.execute(
        select(Submission)
        .options(defer(Submission.preview))
        .where(Submission.user_email == user_email)
        .order_by(Submission.created_at.desc())
        .limit(limit)
    )
    return res.scalars().all()


async def list_by_statuses(
    session: AsyncSession, statuses: Sequence[str], *, oldest_first: bool, limit: int
) -> Sequence[Submission]:
    order = Submission.created_at.asc() if oldest_first else Submission.created_at.desc()
    res = await session.execute(
        select(Submission)
        .options(defer(Submission.preview))
        .where(Submission.status.in_(statuses))
        .order_by(order)
        .limit(limit)
    )
    return res.scalars().all()


async def update_status(
    session: AsyncSession,
    submission_id: str,
    status: str,
    rejection_reason: Optional[str] = None,
    rejection_feedback: Optional[str] = None,
) -> Optional[str]:
    """Overwrites the status. Returns the id when a row was touched."""
    values = {"status": status, "updated_at": func.now()}
    if status == SubmissionStatus.REJECTED.value:
        values["rejection_reason"] = rejection_reason
        values["rejection_feedback"] = rejection_feedback
    else:
        values["rejection_reason"] = None
        values["rejection_feedback"] = None

    res = await session.execute(
        update(Submission)
        .where(Submission.id == submission_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return submission_id if (res.rowcount or 0) > 0 else None


async def delete_for_owner(session: AsyncSession, submission_id: str, user_email: str) -> bool:
    # media, comments and queue rows go with it (ON DELETE CASCADE)
    res = await session.execute(
        delete(Submission).where(Submission.id == submission_id, Submission.user_email == user_email)
    )
    return (res.rowcount or 0) > 0


async def count_by_type(session: AsyncSession, user_email: str) -> dict[str, int]:
    res = await session.execute(
        select(Submission.file_type, func.count(Submission.id))
        .where(Submission.user_email == user_email)
        .group_by(Submission.file_type)
    )
    return {file_type: count for file_type, count in res.all()}
