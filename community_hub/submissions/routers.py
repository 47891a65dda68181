from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, Query, Request
from starlette import status

from community_hub.common.common import client_meta
from community_hub.submissions import schemas
from community_hub.submissions.services import SubmissionService


router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.get("", response_model=list[schemas.SubmissionSummary], summary="Заявки пользователя")
async def list_user_submissions(
    user_email: str = Query(..., alias="userEmail", min_length=1),
    service: SubmissionService = Depends(),
):
    return await service.list_for_user(user_email)


@router.post("", response_model=schemas.SubmissionOut, status_code=status.HTTP_201_CREATED)
async def create_submission(payload: schemas.SubmissionCreate, service: SubmissionService = Depends()):
    return await service.create(payload)


@router.get("/stats", response_model=schemas.UserStatsOut, summary="Статистика пользователя по типам файлов")
async def user_stats(
    user_email: str = Query(..., alias="userEmail", min_length=1),
    service: SubmissionService = Depends(),
):
    return await service.stats_for_user(user_email)


# статические пути раньше /{submission_id}
@router.get("/pending", response_model=list[schemas.SubmissionSummary])
async def list_pending(service: SubmissionService = Depends()):
    return await service.list_pending()


@router.get("/validated", response_model=list[schemas.SubmissionSummary])
async def list_validated(service: SubmissionService = Depends()):
    return await service.list_validated()


@router.get("/rejected", response_model=list[schemas.SubmissionSummary])
async def list_rejected(service: SubmissionService = Depends()):
    return await service.list_rejected()


@router.get("/{submission_id}", response_model=schemas.SubmissionOut)
async def get_submission(submission_id: str, service: SubmissionService = Depends()):
    return await service.get(submission_id)


@router.delete("/{submission_id}", summary="Удалить свою заявку")
async def delete_submission(
    submission_id: str,
    user_email: str = Query(..., alias="userEmail", min_length=1),
    service: SubmissionService = Depends(),
):
    await service.delete(submission_id, user_email)
    return {"success": True, "message": "Submission deleted successfully"}


@router.post("/{submission_id}/submit", response_model=schemas.StatusChangeOut)
async def submit_submission(
    submission_id: str,
    payload: Optional[schemas.SubmitIn] = Body(None),
    service: SubmissionService = Depends(),
):
    submission = await service.submit(submission_id, payload)
    return {"success": True, "message": "Successfully submitted for validation", "submission": submission}


@router.post("/{submission_id}/validate", response_model=schemas.StatusChangeOut)
async def validate_submission(
    submission_id: str,
    request: Request,
    payload: Optional[schemas.ValidateIn] = Body(None),
    x_admin_email: Optional[str] = Header(None, alias="x-admin-email"),
    service: SubmissionService = Depends(),
):
    admin_email = x_admin_email or (payload.admin_email if payload else None)
    submission = await service.validate(submission_id, admin_email, client_meta(request))
    return {"success": True, "submission": submission}


@router.post("/{submission_id}/reject", response_model=schemas.StatusChangeOut)
async def reject_submission(
    submission_id: str,
    request: Request,
    payload: Optional[schemas.RejectIn] = Body(None),
    x_admin_email: Optional[str] = Header(None, alias="x-admin-email"),
    service: SubmissionService = Depends(),
):
    payload = payload or schemas.RejectIn()
    admin_email = x_admin_email or payload.admin_email
    submission = await service.reject(submission_id, payload, admin_email, client_meta(request))
    return {"success": True, "submission": submission}
