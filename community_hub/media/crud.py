from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.media.models import MEDIA_TABLES, WebData
from community_hub.media.previews import file_extension, mime_from_data_url


def build_media_row(
    *,
    submission_id: str,
    user_email: str,
    file_name: str,
    file_type: str,
    file_size: int,
    preview: Optional[str],
    max_document_preview: int,
):
    """Metadata row for a new submission, or None when the type has no table or there is no preview."""
    if not preview or file_type not in MEDIA_TABLES:
        return None
    model, prefix = MEDIA_TABLES[file_type]
    fields = dict(
        id=f"{prefix}_{submission_id}",
        submission_id=submission_id,
        user_email=user_email,
        file_name=file_name,
        file_size=file_size,
        mime_type=mime_from_data_url(preview),
    )
    if model is WebData:
        # большие документы остаются только в submissions.preview
        fields["preview_data"] = preview if len(preview) < max_document_preview else None
        fields["file_extension"] = file_extension(file_name)
    else:
        fields["preview_data"] = preview
    return model(**fields)


async def get_media_preview(session: AsyncSession, submission_id: str, file_type: str) -> Optional[tuple]:
    """(preview_data, mime_type) from the type's metadata table."""
    if file_type not in MEDIA_TABLES:
        return None
    model, _ = MEDIA_TABLES[file_type]
    res = await session.execute(
        select(model.preview_data, model.mime_type)
        .where(model.submission_id == submission_id, model.preview_data.is_not(None), model.preview_data != "")
        .order_by(model.created_at.desc())
        .limit(1)
    )
    row = res.first()
    return (row[0], row[1]) if row else None
