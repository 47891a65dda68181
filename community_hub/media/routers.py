from fastapi import APIRouter, Depends

from community_hub.media.services import PreviewService


router = APIRouter(tags=["previews"])


@router.get("/submissions/{submission_id}/preview", summary="Превью заявки в виде data URL")
async def get_submission_preview(submission_id: str, service: PreviewService = Depends()):
    return await service.resolve(submission_id)


@router.get("/web-data/{submission_id}/preview", summary="Превью документа")
async def get_web_data_preview(submission_id: str, service: PreviewService = Depends()):
    return await service.resolve(submission_id, documents_only=True)
