import mimetypes
import re
from typing import Optional, Tuple

_DATA_URL_MIME = re.compile(r"^data:([^;,]+)")
_WHITESPACE = re.compile(r"\s+")

DEFAULT_MIME_BY_TYPE = {
    "image": "image/jpeg",
    "video": "video/mp4",
    "audio": "audio/mpeg",
    "document": "application/pdf",
}
FALLBACK_MIME = "application/octet-stream"

_DOCUMENT_MIME_BY_EXT = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/msword",
    "txt": "text/plain",
}


def file_extension(file_name: Optional[str]) -> Optional[str]:
    if not file_name or "." not in file_name:
        return None
    ext = file_name.rsplit(".", 1)[-1].strip().lower()
    return ext or None


def mime_from_data_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    m = _DATA_URL_MIME.match(value)
    return m.group(1) if m else None


def document_mime(file_name: Optional[str]) -> str:
    ext = file_extension(file_name)
    if ext in _DOCUMENT_MIME_BY_EXT:
        return _DOCUMENT_MIME_BY_EXT[ext]
    if ext:
        guessed, _ = mimetypes.guess_type(f"file.{ext}")
        if guessed:
            return guessed
    return DEFAULT_MIME_BY_TYPE["document"]


def is_reference(value: str) -> bool:
    return value.startswith(("http://", "https://", "blob:"))


def to_data_url(
    raw: Optional[str],
    mime_type: Optional[str],
    file_type: Optional[str],
    file_name: Optional[str] = None,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Приводит сохранённое превью к self-describing виду.

    Returns (preview, mime_type). `data:` URLs and remote references are
    returned unchanged; a bare base64 payload is wrapped with the stored mime,
    else a mime implied by the document extension, else the file type default.
    """
    if not raw:
        return None, None

    if raw.startswith("data:"):
        return raw, mime_from_data_url(raw) or mime_type

    if is_reference(raw):
        return raw, mime_type

    if mime_type:
        mime = mime_type
    elif file_type == "document":
        mime = document_mime(file_name)
    else:
        mime = DEFAULT_MIME_BY_TYPE.get(file_type or "", FALLBACK_MIME)

    payload = _WHITESPACE.sub("", raw)
    return f"data:{mime};base64,{payload}", mime
