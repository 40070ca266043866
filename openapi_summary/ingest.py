import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from openapi_summary.config import Settings
from openapi_summary.errors import Outcome, PipelineError

logger = logging.getLogger("app")


def normalize_media_type(content_type: Optional[str]) -> str:
    """'Application/JSON; charset=utf-8' -> 'application/json'"""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


@dataclass
class UploadedFile:
    original_name: str
    declared_extension: str
    declared_media_type: str
    scratch_location: Optional[Path] = None
    source: Optional[UploadFile] = field(default=None, repr=False)

    @classmethod
    def from_upload(cls, upload: UploadFile) -> "UploadedFile":
        name = upload.filename or ""
        return cls(
            original_name=name,
            declared_extension=Path(name).suffix.lower(),
            declared_media_type=normalize_media_type(upload.content_type),
            source=upload,
        )

    async def read_bytes(self) -> bytes:
        if self.source is None:
            return b""
        return await self.source.read()


def is_allowed(extension: str, media_type: str, settings: Settings) -> bool:
    return (
        extension.lower() in settings.ALLOWED_EXTENSIONS
        and normalize_media_type(media_type) in settings.ALLOWED_MEDIA_TYPES
    )


def admit_upload(upload: Optional[UploadFile], settings: Settings) -> UploadedFile:
    """
    Gate an incoming multipart file before anything touches the scratch store.

    Raises PipelineError with NO_FILE_PROVIDED when nothing was uploaded and
    INVALID_FILE_TYPE when the extension or declared media type is not allowed.
    """
    if upload is None or not upload.filename:
        logger.warning("upload_missing")
        raise PipelineError(Outcome.NO_FILE_PROVIDED)

    uploaded = UploadedFile.from_upload(upload)
    if not is_allowed(uploaded.declared_extension, uploaded.declared_media_type, settings):
        logger.warning(
            "upload_rejected",
            extra={
                "upload_name": uploaded.original_name,
                "extension": uploaded.declared_extension,
                "media_type": uploaded.declared_media_type,
            }
        )
        raise PipelineError(Outcome.INVALID_FILE_TYPE)

    return uploaded
