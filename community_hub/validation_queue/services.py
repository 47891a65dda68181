import logging
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.common.db import get_async_session, upsert
from community_hub.submissions.models import Submission
from community_hub.validation_queue.models import ValidationQueueEntry, QueueStatus, OPEN_QUEUE_STATUSES

logger = logging.getLogger(__name__)

QUEUED = "queued"
ALREADY_QUEUED = "already_queued"
NOT_FOUND = "not_found"


class ValidationQueueService:
    """
    Очередь проверки: какие заявки закреплены за каким админом.

    Bulk operations commit item by item, so a failing id never discards the
    items processed before it.
    """

    def __init__(self, session: AsyncSession = Depends(get_async_session)):
        self.session = session

    async def _get_entry(self, submission_id: str, admin_email: str) -> Optional[ValidationQueueEntry]:
        res = await self.session.execute(
            select(ValidationQueueEntry)
            .where(
                ValidationQueueEntry.submission_id == submission_id,
                ValidationQueueEntry.admin_email == admin_email,
            )
            .execution_options(populate_existing=True)
        )
        return res.scalar_one_or_none()

    async def _submission_exists(self, submission_id: str) -> bool:
        res = await self.session.execute(select(Submission.id).where(Submission.id == submission_id))
        return res.scalar_one_or_none() is not None

    async def add(self, submission_id: str, admin_email: str) -> tuple[str, Optional[ValidationQueueEntry]]:
        if not await self._submission_exists(submission_id):
            return NOT_FOUND, None

        existed = await self._get_entry(submission_id, admin_email) is not None

        # ON CONFLICT: пара уже в очереди, возвращаем её в pending
        stmt = upsert(self.session, ValidationQueueEntry).values(
            submission_id=submission_id,
            admin_email=admin_email,
            status=QueueStatus.PENDING.value,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ValidationQueueEntry.submission_id, ValidationQueueEntry.admin_email],
            set_={"status": QueueStatus.PENDING.value, "updated_at": func.now()},
        )
        await self.session.execute(stmt)
        await self.session.commit()
        outcome = ALREADY_QUEUED if existed else QUEUED

        logger.info("Queue %s: %s -> %s", outcome, submission_id, admin_email)
        return outcome, await self._get_entry(submission_id, admin_email)

    async def add_bulk(self, submission_ids: list[str], admin_email: str) -> list[dict]:
        results = []
        for submission_id in dict.fromkeys(submission_ids):
            outcome, entry = await self.add(submission_id, admin_email)
            results.append({"submission_id": submission_id, "outcome": outcome, "item": entry})
        return results

    async def remove(self, submission_id: str, admin_email: str) -> bool:
        res = await self.session.execute(
            delete(ValidationQueueEntry).where(
                ValidationQueueEntry.submission_id == submission_id,
                ValidationQueueEntry.admin_email == admin_email,
            )
        )
        await self.session.commit()
        return (res.rowcount or 0) > 0

    async def remove_bulk(self, submission_ids: list[str], admin_email: str) -> list[dict]:
        return [
            {"submission_id": submission_id, "removed": await self.remove(submission_id, admin_email)}
            for submission_id in dict.fromkeys(submission_ids)
        ]

    async def get(self, admin_email: str) -> list[ValidationQueueEntry]:
        res = await self.session.execute(
            select(ValidationQueueEntry)
            .where(
                ValidationQueueEntry.admin_email == admin_email,
                ValidationQueueEntry.status.in_(OPEN_QUEUE_STATUSES),
            )
            .order_by(ValidationQueueEntry.created_at.asc(), ValidationQueueEntry.id.asc())
        )
        return list(res.scalars().all())

    async def update_status(self, submission_id: str, admin_email: str, status: QueueStatus) -> ValidationQueueEntry:
        res = await self.session.execute(
            update(ValidationQueueEntry)
            .where(
                ValidationQueueEntry.submission_id == submission_id,
                ValidationQueueEntry.admin_email == admin_email,
            )
            .values(status=status.value, updated_at=func.now())
        )
        if not res.rowcount:
            await self.session.rollback()
            raise HTTPException(status_code=404, detail="Queue entry not found")
        await self.session.commit()
        return await self._get_entry(submission_id, admin_email)
