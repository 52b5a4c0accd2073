"""
===============================================================================
USE CASE: Soft Delete File (Active -> SoftDeleted)
===============================================================================

Business Goal:
    Mover un archivo a la papelera del workspace. Setea deleted_at y conserva
    bytes, versiones y share_id (el link deja de resolver hasta restaurar).

Error Mapping:
    - NOT_FOUND: inexistente
    - FORBIDDEN: sin SOFT_DELETE
    - CONFLICT: ya estaba en la papelera
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import FileState, StoredFile, utcnow
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from .file_access import conflict_error, load_file_for, not_found_error
from .file_results import FileError, FileResult


class SoftDeleteFileUseCase:
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

    def execute(self, file_id: UUID, actor_id: UUID | None) -> FileResult:
        _, error = load_file_for(
            file_id=file_id,
            actor_id=actor_id,
            action=Action.SOFT_DELETE,
            file_repository=self._files,
            workspace_repository=self._workspaces,
        )
        if error is not None:
            return FileResult(error=error)

        def mutation(draft: StoredFile) -> FileError | None:
            if draft.state is FileState.SOFT_DELETED:
                return conflict_error("File is already deleted.")
            draft.mark_deleted(at=self._clock())
            return None

        updated, rejection = self._files.mutate_file(file_id, mutation)
        if rejection is not None:
            return FileResult(error=rejection)
        if updated is None:
            return FileResult(error=not_found_error())

        logger.info("file.soft_deleted", extra={"file_id": str(file_id)})
        return FileResult(file=updated)
