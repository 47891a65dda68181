from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from community_hub.validation_queue import schemas
from community_hub.validation_queue.services import ValidationQueueService, NOT_FOUND, QUEUED, ALREADY_QUEUED


router = APIRouter(prefix="/validation-queue", tags=["validation-queue"])


@router.get("", response_model=list[schemas.QueueEntryOut], summary="Очередь проверки админа")
async def get_queue(
    admin_email: str = Query(..., alias="adminEmail", min_length=1),
    service: ValidationQueueService = Depends(),
):
    return await service.get(admin_email)


@router.post("", summary="Добавить одну или несколько заявок в очередь")
async def add_to_queue(payload: schemas.QueueAddIn, service: ValidationQueueService = Depends()):
    if payload.submission_ids is not None:
        results = await service.add_bulk(payload.submission_ids, payload.admin_email)
        items = [schemas.QueueItemResult.model_validate(r, from_attributes=True) for r in results]
        return {
            "success": True,
            "items": items,
            "count": sum(1 for r in results if r["outcome"] in (QUEUED, ALREADY_QUEUED)),
        }

    if not payload.submission_id:
        raise HTTPException(status_code=400, detail="submissionId or submissionIds is required")

    outcome, entry = await service.add(payload.submission_id, payload.admin_email)
    if outcome == NOT_FOUND:
        raise HTTPException(status_code=404, detail="Submission not found")
    return {"success": True, "outcome": outcome, "item": schemas.QueueEntryOut.model_validate(entry)}


@router.patch("", response_model=schemas.QueueEntryOut, summary="Сменить статус записи очереди")
async def update_queue_status(payload: schemas.QueueStatusIn, service: ValidationQueueService = Depends()):
    return await service.update_status(payload.submission_id, payload.admin_email, payload.status)


@router.delete("", summary="Убрать одну или несколько заявок из очереди")
async def remove_from_queue(
    admin_email: str = Query(..., alias="adminEmail", min_length=1),
    submission_id: Optional[str] = Query(None, alias="submissionId"),
    payload: Optional[schemas.QueueRemoveIn] = Body(None),
    service: ValidationQueueService = Depends(),
):
    if payload is not None and payload.submission_ids is not None:
        results = await service.remove_bulk(payload.submission_ids, admin_email)
        return {
            "success": True,
            "items": [schemas.QueueRemoveResult(**r) for r in results],
            "count": sum(1 for r in results if r["removed"]),
        }

    if not submission_id:
        raise HTTPException(status_code=400, detail="submissionId or submissionIds is required")

    removed = await service.remove(submission_id, admin_email)
    return {"success": removed}
