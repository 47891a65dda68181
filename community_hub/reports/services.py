import logging
from datetime import datetime, timedelta, timezone
from io import BytesIO
from typing import Optional

import pandas as pd
from fastapi import Depends
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from community_hub.common.db import get_async_session
from community_hub.submissions.models import (
    Submission,
    PENDING_STATUSES,
    VALIDATED_STATUSES,
    REJECTED_STATUSES,
)
from community_hub.submissions.schemas import SubmissionSummary
from community_hub.users.models import User
from community_hub.validation_queue.models import ValidationQueueEntry, OPEN_QUEUE_STATUSES

logger = logging.getLogger(__name__)

STATUS_GROUPS = {
    "pending": PENDING_STATUSES,
    "validated": VALIDATED_STATUSES,
    "rejected": REJECTED_STATUSES,
}

EXPORT_COLUMNS = [
    "id", "user_email", "file_name", "file_type", "file_size", "status",
    "rejection_reason", "rejection_feedback", "created_at", "updated_at",
]

TREND_DAYS = 7


def daily_counts(created: list, today, days: int = TREND_DAYS) -> list[dict]:
    """Число заявок по дням (UTC) за последние `days` дней, включая сегодня."""
    index = pd.date_range(end=pd.Timestamp(today), periods=days, freq="D").date
    if created:
        dates = pd.to_datetime(pd.Series(created), utc=True).dt.date
        counts = dates.value_counts().reindex(index, fill_value=0)
    else:
        counts = pd.Series(0, index=index)
    return [{"date": d.isoformat(), "count": int(c)} for d, c in counts.items()]


class ReportService:
    def __init__(self, session: AsyncSession = Depends(get_async_session)):
        self.session = session

    async def _count(self, *where) -> int:
        res = await self.session.execute(select(func.count(Submission.id)).where(*where))
        return res.scalar_one()

    async def stats(self) -> dict:
        now = datetime.now(timezone.utc)
        today = now.date()
        since = datetime.combine(today - timedelta(days=TREND_DAYS - 1), datetime.min.time(), tzinfo=timezone.utc)

        total = await self._count()
        pending = await self._count(Submission.status.in_(PENDING_STATUSES))
        validated = await self._count(Submission.status.in_(VALIDATED_STATUSES))
        rejected = await self._count(Submission.status.in_(REJECTED_STATUSES))

        volunteers = (await self.session.execute(select(func.count(User.id)))).scalar_one()
        queue = (await self.session.execute(
            select(func.count(ValidationQueueEntry.id)).where(ValidationQueueEntry.status.in_(OPEN_QUEUE_STATUSES))
        )).scalar_one()

        res = await self.session.execute(
            select(Submission.file_type, func.count(Submission.id))
            .group_by(Submission.file_type)
            .order_by(func.count(Submission.id).desc())
        )
        file_type_stats = [{"type": t, "count": c} for t, c in res.all()]

        res = await self.session.execute(
            select(Submission.created_at).where(Submission.created_at >= since)
        )
        created = [r for r in res.scalars().all() if r is not None]
        trend = daily_counts(created, today)

        res = await self.session.execute(
            select(Submission)
            .options(defer(Submission.preview))
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .limit(10)
        )
        recent = [SubmissionSummary.model_validate(s) for s in res.scalars().all()]

        return {
            "totalSubmissions": total,
            "pendingSubmissions": pending,
            "validatedSubmissions": validated,
            "rejectedSubmissions": rejected,
            "totalVolunteers": volunteers,
            "todaySubmissions": trend[-1]["count"],
            "validationQueue": queue,
            "recentSubmissions": recent,
            "fileTypeStats": file_type_stats,
            "weeklyTrend": trend,
        }


class SubmissionExportService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def export_submissions_xlsx(
        self,
        *,
        status: Optional[str] = None,
        file_type: Optional[str] = None,
    ) -> tuple[bytes, str]:
        """
        Возвращает кортеж: (байты xlsx, имя_файла)
        `status` is either a list name (pending/validated/rejected) or an exact status.
        """
        columns = [getattr(Submission, c) for c in EXPORT_COLUMNS]
        stmt = select(*columns).order_by(Submission.created_at.asc(), Submission.id.asc())

        if status:
            stmt = stmt.where(Submission.status.in_(STATUS_GROUPS.get(status, (status,))))
        if file_type:
            stmt = stmt.where(Submission.file_type == file_type)

        rows = (await self.session.execute(stmt)).all()
        df = pd.DataFrame([dict(r._mapping) for r in rows], columns=EXPORT_COLUMNS)

        # Excel не принимает datetime с таймзоной
        for col in ("created_at", "updated_at"):
            if not df.empty:
                df[col] = pd.to_datetime(df[col], utc=True).dt.tz_localize(None)

        buf = BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as xw:
            df.to_excel(xw, index=False, sheet_name="Submissions")

        suffix = "_".join(p for p in (status, file_type) if p) or "all"
        filename = f"submissions_{suffix}{'_empty' if df.empty else ''}.xlsx"
        logger.info("Exported %d submissions (%s)", len(df), suffix)
        return buf.getvalue(), filename
