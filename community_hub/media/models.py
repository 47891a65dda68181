from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, Integer, BigInteger, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from community_hub.common.db import Base


class MediaColumns:
    """Columns shared by every per-type metadata table. One row per submission."""

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    submission_id: Mapped[str] = mapped_column(
        ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Image(MediaColumns, Base):
    __tablename__ = "images"

    preview_data: Mapped[str] = mapped_column(Text, nullable=False)
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class Video(MediaColumns, Base):
    __tablename__ = "videos"

    preview_data: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class AudioFile(MediaColumns, Base):
    __tablename__ = "audio_files"

    preview_data: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class WebData(MediaColumns, Base):
    __tablename__ = "web_data"

    # oversized document previews are left on the submission row only
    preview_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    file_extension: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)


# file_type -> (model, id prefix)
MEDIA_TABLES = {
    "image": (Image, "img"),
    "video": (Video, "vid"),
    "audio": (AudioFile, "aud"),
    "document": (WebData, "web"),
}
