from fastapi import APIRouter, Depends, Query
from starlette import status

from community_hub.comments import schemas
from community_hub.comments.services import CommentService


router = APIRouter(prefix="/submissions/{submission_id}/comments", tags=["comments"])


@router.get("", response_model=list[schemas.CommentOut], summary="Ветка комментариев")
async def list_comments(submission_id: str, service: CommentService = Depends()):
    return await service.list_thread(submission_id)


@router.get("/count", summary="Количество комментариев")
async def count_comments(submission_id: str, service: CommentService = Depends()):
    return {"count": await service.count(submission_id)}


@router.post("", response_model=schemas.CommentOut, status_code=status.HTTP_201_CREATED)
async def create_comment(
    submission_id: str,
    payload: schemas.CommentCreate,
    service: CommentService = Depends(),
):
    return await service.create(submission_id, payload)


@router.put("", response_model=schemas.CommentOut)
async def update_comment(
    submission_id: str,
    payload: schemas.CommentUpdate,
    service: CommentService = Depends(),
):
    return await service.update(submission_id, payload)


@router.delete("", summary="Удалить комментарий (автор или админ)")
async def delete_comment(
    submission_id: str,
    comment_id: int = Query(..., alias="commentId"),
    author_email: str = Query(..., alias="authorEmail", min_length=1),
    is_admin: bool = Query(False, alias="isAdmin"),
    service: CommentService = Depends(),
):
    await service.delete(submission_id, comment_id, author_email, is_admin)
    return {"success": True}
