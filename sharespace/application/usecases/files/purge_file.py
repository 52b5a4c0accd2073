"""
===============================================================================
USE CASE: Purge File (Active|SoftDeleted -> Purged)
===============================================================================

Name:
    Purge File Use Case

Business Goal:
    Eliminar definitivamente un archivo: owner del workspace, o el uploader
    para archivos personales.

Orden de efectos:
    1) Borrado del registro (autoritativo): desde acá el archivo y su share_id
       no existen para nadie.
    2) Borrado de blobs (actual + versiones) best-effort: una falla de storage
       se loguea con el blob_ref y NO revierte el purge.

Error Mapping:
    - NOT_FOUND: inexistente (o purgado en paralelo)
    - FORBIDDEN: sin PURGE
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import FileState
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from ....domain.services import BlobStorePort
from ....infrastructure.storage.errors import StorageError
from .file_access import load_file_for, not_found_error
from .file_results import PurgeResult


class PurgeFileUseCase:
    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
        blob_store: BlobStorePort,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository
        self._blobs = blob_store

    def execute(self, file_id: UUID, actor_id: UUID | None) -> PurgeResult:
        _, error = load_file_for(
            file_id=file_id,
            actor_id=actor_id,
            action=Action.PURGE,
            file_repository=self._files,
            workspace_repository=self._workspaces,
        )
        if error is not None:
            return PurgeResult(error=error)

        removed, _ = self._files.delete_file(file_id)
        if removed is None:
            return PurgeResult(error=not_found_error())

        storage_cleaned = True
        for blob_ref in removed.blob_refs():
            try:
                self._blobs.delete(blob_ref)
            except StorageError as exc:
                storage_cleaned = False
                logger.warning(
                    "file.purge.blob_cleanup_failed",
                    extra={
                        "file_id": str(file_id),
                        "blob_ref": blob_ref,
                        "error": exc.message,
                    },
                )

        logger.info(
            "file.purged",
            extra={
                "file_id": str(file_id),
                "previous_state": removed.state.value,
                "state": FileState.PURGED.value,
                "storage_cleaned": storage_cleaned,
            },
        )
        return PurgeResult(purged=True, storage_cleaned=storage_cleaned)
