"""
===============================================================================
USE CASE: Rename / Move File
===============================================================================

Business Goal:
    Cambiar nombre y/o carpeta de un archivo activo (sólo metadata; los
    bytes no se tocan). Requiere RENAME_MOVE (editor u owner; el uploader en
    archivos personales).

Error Mapping:
    - VALIDATION_ERROR: sin cambios pedidos, nombre vacío/largo, carpeta inválida
    - NOT_FOUND: inexistente o en papelera
    - FORBIDDEN: rol insuficiente
    - CONFLICT: ya hay un archivo activo con ese nombre en la carpeta destino
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import StoredFile
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from .file_access import (
    conflict_error,
    load_file_for,
    not_found_error,
    validation_error,
)
from .file_results import FileError, FileResult
from .upload_file import normalize_folder


@dataclass(frozen=True)
class UpdateFileInput:
    file_id: UUID
    actor_id: UUID | None
    name: str | None = None
    folder: str | None = None


class UpdateFileUseCase:
    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
        *,
        max_name_chars: int = 255,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository
        self._max_name_chars = max_name_chars

    def execute(self, input_data: UpdateFileInput) -> FileResult:
        # ---------------------------------------------------------------------
        # 1) Validar cambios pedidos.
        # ---------------------------------------------------------------------
        if input_data.name is None and input_data.folder is None:
            return FileResult(error=validation_error("Nothing to update."))

        new_name = None
        if input_data.name is not None:
            new_name = input_data.name.strip()
            if not new_name:
                return FileResult(error=validation_error("File name is required."))
            if len(new_name) > self._max_name_chars:
                return FileResult(
                    error=validation_error(
                        f"File name must be at most {self._max_name_chars} characters."
                    )
                )

        new_folder = None
        if input_data.folder is not None:
            new_folder, error = normalize_folder(input_data.folder)
            if error is not None:
                return FileResult(error=error)

        # ---------------------------------------------------------------------
        # 2) Cargar + autorizar.
        # ---------------------------------------------------------------------
        stored_file, error = load_file_for(
            file_id=input_data.file_id,
            actor_id=input_data.actor_id,
            action=Action.RENAME_MOVE,
            file_repository=self._files,
            workspace_repository=self._workspaces,
            include_deleted=False,
        )
        if error is not None:
            return FileResult(error=error)

        target_name = new_name or stored_file.name
        target_folder = new_folder or stored_file.folder

        # ---------------------------------------------------------------------
        # 3) Mutación atómica (incluye el chequeo de ruta libre).
        # ---------------------------------------------------------------------
        def mutation(draft: StoredFile) -> FileError | None:
            if draft.is_deleted:
                return not_found_error()
            draft.name = target_name
            draft.folder = target_folder
            return None

        def path_taken(_occupant: StoredFile) -> FileError:
            return conflict_error(
                "A file with that name already exists in the target folder."
            )

        updated, rejection = self._files.mutate_file(
            input_data.file_id, mutation, on_path_taken=path_taken
        )
        if rejection is not None:
            return FileResult(error=rejection)
        if updated is None:
            return FileResult(error=not_found_error())

        logger.info(
            "file.updated",
            extra={"file_id": str(updated.id), "folder": updated.folder},
        )
        return FileResult(file=updated)
