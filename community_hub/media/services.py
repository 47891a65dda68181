import asyncio
import logging

from fastapi import Depends, HTTPException
from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.common.db import get_async_session
from community_hub.core.config import get_settings
from community_hub.media import crud
from community_hub.media.models import MEDIA_TABLES
from community_hub.media.previews import to_data_url
from community_hub.submissions.models import Submission, FileType

logger = logging.getLogger(__name__)

# SQLSTATE query_canceled (PostgreSQL statement_timeout)
QUERY_CANCELED = "57014"


def _not_found(submission_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "preview": None,
            "mime_type": None,
            "error": "No preview data available",
            "message": f"Preview data not found in database for submission {submission_id}. "
                       "The file may have been uploaded without a preview.",
        },
    )


class PreviewService:
    def __init__(self, session: AsyncSession = Depends(get_async_session)):
        self.session = session
        self.settings = get_settings()

    async def _set_statement_timeout(self) -> None:
        if self.session.bind.dialect.name == "postgresql":
            ms = int(self.settings.PREVIEW_QUERY_TIMEOUT_SECONDS * 1000)
            await self.session.execute(text(f"SET LOCAL statement_timeout = {ms}"))

    async def _lookup(self, submission_id: str, documents_only: bool) -> dict:
        await self._set_statement_timeout()

        res = await self.session.execute(
            select(Submission.file_type, Submission.file_name).where(Submission.id == submission_id)
        )
        row = res.first()
        if not row:
            raise HTTPException(status_code=404, detail="Submission not found")
        file_type, file_name = row

        if documents_only and file_type != FileType.DOCUMENT.value:
            raise HTTPException(status_code=400, detail="This endpoint is only for document/web data files")

        stored = await crud.get_media_preview(self.session, submission_id, file_type)
        if stored and stored[0]:
            preview, mime = to_data_url(stored[0], stored[1], file_type, file_name)
            model, _ = MEDIA_TABLES[file_type]
            return {"preview": preview, "mime_type": mime, "source": model.__tablename__}

        # fallback: превью в самой заявке
        res = await self.session.execute(select(Submission.preview).where(Submission.id == submission_id))
        raw = res.scalar_one_or_none()
        if raw:
            preview, mime = to_data_url(raw, None, file_type, file_name)
            return {"preview": preview, "mime_type": mime, "source": "submissions"}

        raise _not_found(submission_id)

    async def resolve(self, submission_id: str, documents_only: bool = False) -> dict:
        try:
            return await asyncio.wait_for(
                self._lookup(submission_id, documents_only),
                timeout=self.settings.PREVIEW_QUERY_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.warning("Preview lookup for %s timed out", submission_id)
            raise HTTPException(status_code=504, detail="Preview lookup timed out")
        except DBAPIError as exc:
            # statement_timeout сработал раньше wait_for
            if getattr(exc.orig, "sqlstate", None) != QUERY_CANCELED:
                raise
            logger.warning("Preview query for %s cancelled by statement_timeout", submission_id)
            raise HTTPException(status_code=504, detail="Preview lookup timed out")
