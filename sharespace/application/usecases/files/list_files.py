"""
===============================================================================
USE CASE: List Workspace Files (activos o papelera)
===============================================================================

Business Goal:
    Listar archivos de un workspace para miembros (o cualquiera si es
    público), opcionalmente filtrando por carpeta exacta.
    deleted=True devuelve la papelera (soft-deleted).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from ..workspace.workspace_access import resolve_workspace_for
from .file_results import FileListResult, from_workspace_error
from .upload_file import normalize_folder


class ListFilesUseCase:
    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository

    def execute(
        self,
        workspace_id: UUID,
        actor_id: UUID | None,
        *,
        deleted: bool = False,
        folder: str | None = None,
    ) -> FileListResult:
        _, ws_error = resolve_workspace_for(
            workspace_id=workspace_id,
            actor_id=actor_id,
            action=Action.VIEW,
            workspace_repository=self._workspaces,
        )
        if ws_error is not None:
            return FileListResult(error=from_workspace_error(ws_error))

        folder_filter = None
        if folder is not None:
            folder_filter, error = normalize_folder(folder)
            if error is not None:
                return FileListResult(error=error)

        return FileListResult(
            files=self._files.list_workspace_files(
                workspace_id, deleted=deleted, folder=folder_filter
            )
        )
