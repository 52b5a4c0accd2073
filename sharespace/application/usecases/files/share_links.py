"""
===============================================================================
SHARE LINK ISSUER
===============================================================================

Business Goal:
    Emitir share_id opacos e inadivinables (longitud fija) y resolverlos a
    archivos respetando papelera y expiración.

Reglas:
    - El share_id se genera UNA vez al crear el archivo y no cambia con
      soft-delete/restore. Desaparece con el purge.
    - Un archivo en papelera no se resuelve por share (NOT_FOUND).
    - Un anónimo vencido se resuelve a EXPIRED (el registro sigue existiendo).

Collaborators:
    - FileRepository.get_file_by_share_id
    - BlobStorePort.get
===============================================================================
"""

from __future__ import annotations

import secrets
from datetime import datetime
from typing import Callable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import StoredFile, utcnow
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from ....domain.services import BlobStorePort
from ....infrastructure.storage.errors import StorageError
from .file_access import (
    expired_error,
    load_file_for,
    not_found_error,
    storage_error,
)
from .file_results import FileContentResult, FileResult, ShareResult

DEFAULT_SHARE_ID_BYTES = 24


def new_share_id(nbytes: int = DEFAULT_SHARE_ID_BYTES) -> str:
    """token_urlsafe: base64url sin padding, largo fijo para un nbytes dado."""
    return secrets.token_urlsafe(nbytes)


class GetShareUseCase:
    """Devuelve el share_id existente luego del access_check de lectura."""

    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository
        self._clock = clock

    def execute(self, file_id: UUID, actor_id: UUID | None) -> ShareResult:
        stored_file, error = load_file_for(
            file_id=file_id,
            actor_id=actor_id,
            action=Action.VIEW,
            file_repository=self._files,
            workspace_repository=self._workspaces,
            include_deleted=False,
        )
        if error is not None:
            return ShareResult(error=error)
        if stored_file.is_expired(self._clock()):
            return ShareResult(error=expired_error())
        return ShareResult(share_id=stored_file.share_id, file=stored_file)


class ResolveSharedFileUseCase:
    """share_id -> metadata (sin autenticación)."""

    def __init__(
        self,
        file_repository: FileRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._files = file_repository
        self._clock = clock

    def execute(self, share_id: str) -> FileResult:
        stored_file = self._files.get_file_by_share_id((share_id or "").strip())
        if stored_file is None or stored_file.is_deleted:
            return FileResult(error=not_found_error("Shared file not found."))
        if stored_file.is_expired(self._clock()):
            return FileResult(error=expired_error())
        return FileResult(file=stored_file)


class DownloadSharedFileUseCase:
    """share_id -> bytes (sin autenticación)."""

    def __init__(
        self,
        file_repository: FileRepository,
        blob_store: BlobStorePort,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._resolve = ResolveSharedFileUseCase(file_repository, clock=clock)
        self._blobs = blob_store

    def execute(self, share_id: str) -> FileContentResult:
        resolved = self._resolve.execute(share_id)
        if resolved.error is not None:
            return FileContentResult(error=resolved.error)
        return read_content(resolved.file, self._blobs)


def read_content(stored_file: StoredFile, blob_store: BlobStorePort) -> FileContentResult:
    try:
        content = blob_store.get(stored_file.blob_ref)
    except StorageError as exc:
        logger.error(
            "file.content_unavailable",
            extra={
                "file_id": str(stored_file.id),
                "blob_ref": stored_file.blob_ref,
                "error": exc.message,
            },
        )
        return FileContentResult(error=storage_error())
    return FileContentResult(file=stored_file, content=content)
