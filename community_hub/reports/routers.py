from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.admins.models import Admin
from community_hub.common.common import CurrentAdmin
from community_hub.common.db import get_async_session
from community_hub.reports.services import ReportService, SubmissionExportService


router = APIRouter(prefix="/admin", tags=["reports"])


@router.get("/stats", summary="Сводка для админ-дашборда")
async def admin_stats(service: ReportService = Depends()):
    return await service.stats()


@router.get(
    "/reports/submissions/export",
    summary="Экспорт заявок в Excel",
    response_description="Excel-файл (.xlsx) с заявками",
)
async def export_submissions_xlsx(
    session: AsyncSession = Depends(get_async_session),
    _: Admin = Depends(CurrentAdmin()),
    status: Optional[str] = Query(None, description="Статус или группа: pending, validated, rejected"),
    file_type: Optional[str] = Query(None, alias="fileType"),
):
    svc = SubmissionExportService(session)
    file_bytes, filename = await svc.export_submissions_xlsx(status=status, file_type=file_type)

    return StreamingResponse(
        BytesIO(file_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
