"""
===============================================================================
USE CASE: Download File (por id)
===============================================================================

Business Goal:
    Devolver metadata + bytes de un archivo activo si el actor pasa el
    access_check de lectura.

Error Mapping:
    - NOT_FOUND: inexistente o en papelera
    - FORBIDDEN: sin acceso de lectura
    - EXPIRED: anónimo vencido
    - STORAGE_ERROR: los bytes no están disponibles
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable
from uuid import UUID

from ....domain.entities import utcnow
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from ....domain.services import BlobStorePort
from .file_access import expired_error, load_file_for
from .file_results import FileContentResult
from .share_links import read_content


class DownloadFileUseCase:
    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
        blob_store: BlobStorePort,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository
        self._blobs = blob_store
        self._clock = clock

    def execute(self, file_id: UUID, actor_id: UUID | None) -> FileContentResult:
        stored_file, error = load_file_for(
            file_id=file_id,
            actor_id=actor_id,
            action=Action.VIEW,
            file_repository=self._files,
            workspace_repository=self._workspaces,
            include_deleted=False,
        )
        if error is not None:
            return FileContentResult(error=error)
        if stored_file.is_expired(self._clock()):
            return FileContentResult(error=expired_error())
        return read_content(stored_file, self._blobs)
