import logging
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins.services import log_action_safely
from community_hub.common.db import get_async_session
from community_hub.core.config import get_settings
from community_hub.notifications.services import build_status_notification, notify_safely
from community_hub.submissions import crud, schemas
from community_hub.submissions.models import (
    Submission,
    SubmissionStatus,
    PENDING_STATUSES,
    VALIDATED_STATUSES,
    REJECTED_STATUSES,
)

logger = logging.getLogger(__name__)

STATUS_VALUES = {s.value for s in SubmissionStatus}


class SubmissionService:
    def __init__(self, session: AsyncSession = Depends(get_async_session)):
        self.session = session
        self.settings = get_settings()

    # ===== Helpers =====
    async def _get_or_404(self, submission_id: str) -> Submission:
        submission = await crud.get_submission(self.session, submission_id)
        if not submission:
            raise HTTPException(status_code=404, detail="Submission not found")
        return submission

    async def _after_review(
        self,
        submission: Submission,
        action_type: str,
        admin_email: Optional[str],
        meta: dict,
        description: str,
    ) -> None:
        # журнал и уведомление не влияют на основной ответ
        await log_action_safely(
            admin_email,
            action_type,
            target_type="submission",
            target_id=submission.id,
            description=description,
            meta=meta,
        )
        await notify_safely(
            build_status_notification(
                submission.user_email,
                submission.id,
                submission.file_name,
                submission.status,
                submission.rejection_reason,
            )
        )

    # ===== Public API =====
    async def create(self, data: schemas.SubmissionCreate, status: Optional[str] = None) -> Submission:
        submission = await crud.create_submission(
            self.session,
            id=data.id,
            user_email=data.user_email,
            file_name=data.file_name,
            file_type=data.file_type.value,
            file_size=data.file_size,
            status=status or (data.status.value if data.status else SubmissionStatus.PENDING.value),
            preview=data.preview or None,
            max_document_preview=self.settings.MAX_INLINE_DOCUMENT_PREVIEW,
        )
        await self.session.commit()
        await self.session.refresh(submission)
        logger.info("Submission %s created for %s (%s)", submission.id, submission.user_email, submission.file_type)
        return submission

    async def get(self, submission_id: str) -> Submission:
        return await self._get_or_404(submission_id)

    async def delete(self, submission_id: str, user_email: str) -> None:
        deleted = await crud.delete_for_owner(self.session, submission_id, user_email)
        if not deleted:
            raise HTTPException(status_code=404, detail="Submission not found or unauthorized")
        await self.session.commit()
        logger.info("Submission %s deleted by %s", submission_id, user_email)

    async def update_status(
        self,
        submission_id: str,
        status: str,
        rejection_reason: Optional[str] = None,
        rejection_feedback: Optional[str] = None,
    ) -> Optional[Submission]:
        """Перезаписывает статус без проверки переходов. None, если заявки нет."""
        if status not in STATUS_VALUES:
            raise HTTPException(status_code=400, detail=f"Unknown submission status: {status}")

        touched = await crud.update_status(
            self.session, submission_id, status, rejection_reason, rejection_feedback
        )
        if not touched:
            await self.session.rollback()
            return None
        await self.session.commit()
        logger.info("Submission %s status -> %s", submission_id, status)
        return await crud.get_submission(self.session, submission_id)

    async def _create_for_submit(self, submission_id: str, body: schemas.SubmitIn) -> None:
        if not (body.user_email and body.file_name and body.file_type):
            return
        try:
            await self.create(
                schemas.SubmissionCreate(
                    id=submission_id,
                    user_email=body.user_email,
                    file_name=body.file_name,
                    file_type=body.file_type,
                    file_size=body.file_size or 0,
                    preview=body.preview,
                ),
                status=SubmissionStatus.SUBMITTED.value,
            )
        except SQLAlchemyError as e:
            # например, параллельный create успел раньше
            await self.session.rollback()
            logger.warning("Create-on-submit for %s failed: %s", submission_id, e)

    async def submit(self, submission_id: str, body: Optional[schemas.SubmitIn] = None) -> Submission:
        existing = await crud.get_submission(self.session, submission_id)
        if not existing and body is not None and self.settings.SUBMIT_CREATES_MISSING:
            await self._create_for_submit(submission_id, body)

        submission = await self.update_status(submission_id, SubmissionStatus.SUBMITTED.value)
        if not submission:
            raise HTTPException(
                status_code=404,
                detail={
                    "error": "Submission not found",
                    "message": "Please ensure the submission exists in the database. You may need to upload it first.",
                },
            )
        return submission

    async def validate(self, submission_id: str, admin_email: Optional[str], meta: dict) -> Submission:
        submission = await self.update_status(submission_id, SubmissionStatus.VALIDATED.value)
        if not submission:
            raise HTTPException(status_code=404, detail="Submission not found")

        await self._after_review(
            submission, "validate_submission", admin_email, meta,
            description=f'Validated submission "{submission.file_name}"',
        )
        return submission

    async def reject(
        self,
        submission_id: str,
        data: schemas.RejectIn,
        admin_email: Optional[str],
        meta: dict,
    ) -> Submission:
        submission = await self.update_status(
            submission_id,
            SubmissionStatus.REJECTED.value,
            data.rejection_reason,
            data.rejection_feedback,
        )
        if not submission:
            raise HTTPException(status_code=404, detail="Submission not found")

        reason = f": {data.rejection_reason}" if data.rejection_reason else ""
        await self._after_review(
            submission, "reject_submission", admin_email, meta,
            description=f'Rejected submission "{submission.file_name}"{reason}',
        )
        return submission

    # ===== Queries =====
    async def list_for_user(self, user_email: str) -> list[Submission]:
        return list(await crud.list_for_user(self.session, user_email, self.settings.LIST_LIMIT))

    async def list_pending(self) -> list[Submission]:
        return list(await crud.list_by_statuses(
            self.session, PENDING_STATUSES, oldest_first=True, limit=self.settings.LIST_LIMIT
        ))

    async def list_validated(self) -> list[Submission]:
        return list(await crud.list_by_statuses(
            self.session, VALIDATED_STATUSES, oldest_first=False, limit=self.settings.LIST_LIMIT
        ))

    async def list_rejected(self) -> list[Submission]:
        return list(await crud.list_by_statuses(
            self.session, REJECTED_STATUSES, oldest_first=False, limit=self.settings.LIST_LIMIT
        ))

    async def stats_for_user(self, user_email: str) -> dict:
        by_type = await crud.count_by_type(self.session, user_email)
        return {"total": sum(by_type.values()), "by_type": by_type}
