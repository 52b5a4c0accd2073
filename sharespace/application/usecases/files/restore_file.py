"""
===============================================================================
USE CASE: Restore File (SoftDeleted -> Active)
===============================================================================

Business Goal:
    Sacar un archivo de la papelera. Limpia deleted_at; el share_id original
    vuelve a resolver.

Error Mapping:
    - NOT_FOUND: inexistente
    - FORBIDDEN: sin RESTORE
    - CONFLICT: el archivo ya estaba activo
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import FileState, StoredFile
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from .file_access import conflict_error, load_file_for, not_found_error
from .file_results import FileError, FileResult


class RestoreFileUseCase:
    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository

    def execute(self, file_id: UUID, actor_id: UUID | None) -> FileResult:
        _, error = load_file_for(
            file_id=file_id,
            actor_id=actor_id,
            action=Action.RESTORE,
            file_repository=self._files,
            workspace_repository=self._workspaces,
        )
        if error is not None:
            return FileResult(error=error)

        def mutation(draft: StoredFile) -> FileError | None:
            if draft.state is FileState.ACTIVE:
                return conflict_error("File is not deleted.")
            draft.restore()
            return None

        updated, rejection = self._files.mutate_file(file_id, mutation)
        if rejection is not None:
            return FileResult(error=rejection)
        if updated is None:
            return FileResult(error=not_found_error())

        logger.info("file.restored", extra={"file_id": str(file_id)})
        return FileResult(file=updated)
