"""
===============================================================================
USE CASE: Delete Workspace
===============================================================================

Business Goal:
    El owner elimina el workspace junto con todos sus archivos.

Orden de efectos:
    1) Borrado del workspace bajo su lock (guard: DELETE_WORKSPACE). A partir
       de acá ninguna operación nueva puede resolver el workspace.
    2) Borrado de los registros de archivos (autoritativo).
    3) Borrado de blobs (best-effort: las fallas se loguean y no bloquean).

Collaborators:
    - WorkspaceRepository.delete_workspace
    - FileRepository.delete_workspace_files
    - BlobStorePort.delete
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from ....domain.services import BlobStorePort
from ....infrastructure.storage.errors import StorageError
from .workspace_access import authorize, forbidden_error, not_found_error
from .workspace_results import DeleteWorkspaceResult


class DeleteWorkspaceUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        file_repository: FileRepository,
        blob_store: BlobStorePort,
    ) -> None:
        self._workspaces = workspace_repository
        self._files = file_repository
        self._blobs = blob_store

    def execute(self, workspace_id: UUID, actor_id: UUID | None) -> DeleteWorkspaceResult:
        if actor_id is None:
            return DeleteWorkspaceResult(error=forbidden_error())

        removed, rejection = self._workspaces.delete_workspace(
            workspace_id,
            lambda current: authorize(current, actor_id, Action.DELETE_WORKSPACE),
        )
        if rejection is not None:
            return DeleteWorkspaceResult(error=rejection)
        if removed is None:
            return DeleteWorkspaceResult(error=not_found_error())

        removed_files = self._files.delete_workspace_files(workspace_id)

        storage_cleaned = True
        for stored_file in removed_files:
            for blob_ref in stored_file.blob_refs():
                try:
                    self._blobs.delete(blob_ref)
                except StorageError as exc:
                    storage_cleaned = False
                    logger.warning(
                        "workspace.delete.blob_cleanup_failed",
                        extra={
                            "workspace_id": str(workspace_id),
                            "file_id": str(stored_file.id),
                            "blob_ref": blob_ref,
                            "error": exc.message,
                        },
                    )

        logger.info(
            "workspace.deleted",
            extra={
                "workspace_id": str(workspace_id),
                "files_removed": len(removed_files),
                "storage_cleaned": storage_cleaned,
            },
        )
        return DeleteWorkspaceResult(
            deleted=True,
            files_removed=len(removed_files),
            storage_cleaned=storage_cleaned,
        )
