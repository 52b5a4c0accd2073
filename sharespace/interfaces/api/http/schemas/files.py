"""
===============================================================================
TARJETA CRC — schemas/files.py
===============================================================================

Módulo:
    Schemas HTTP para archivos y share links

Responsabilidades:
    - DTOs de response de archivos (metadata, listados, share).
    - DTO de request para rename/move.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from .....crosscutting.config import get_settings
from .....domain.entities import FileState

_settings = get_settings()


class UpdateFileReq(BaseModel):
    """Rename y/o move; al menos uno de los dos campos."""

    name: str | None = Field(
        default=None, min_length=1, max_length=_settings.max_name_chars
    )
    folder: str | None = Field(default=None, max_length=1024)


class FileRes(BaseModel):
    id: UUID
    name: str
    content_type: str | None = None
    size: int
    folder: str
    workspace_id: UUID | None = None
    uploader_id: UUID | None = None
    state: FileState
    uploaded_at: datetime
    deleted_at: datetime | None = None
    expires_at: datetime | None = None
    version_count: int = 0


class UploadFileRes(FileRes):
    versioned: bool = False
    share_id: str | None = None
    share_url: str | None = None


class FilesListRes(BaseModel):
    files: list[FileRes]


class ShareRes(BaseModel):
    file_id: UUID
    share_id: str
    share_url: str


class SharedFileInfoRes(BaseModel):
    """Metadata pública de un share link (sin ids internos)."""

    name: str
    content_type: str | None = None
    size: int
    uploaded_at: datetime
    expires_at: datetime | None = None


class PurgeFileRes(BaseModel):
    file_id: UUID
    purged: bool
    storage_cleaned: bool
