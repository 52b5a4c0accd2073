"""
===============================================================================
FILE ACCESS HELPERS (access_check)
===============================================================================

Business Goal:
    Decidir si un actor puede ejecutar una acción sobre un archivo:
      - archivo de workspace: miembro según la tabla de capacidades, o
        lectura si el workspace es público
      - archivo personal (sin workspace, con uploader): sólo el uploader
      - archivo anónimo sin uploader: sólo lectura, para quien tenga el id

Collaborators:
    - domain.permissions.workspace_allows
    - WorkspaceRepository.get_workspace
    - FileRepository.get_file
===============================================================================
"""

from __future__ import annotations

from typing import Final, Tuple
from uuid import UUID

from ....domain.entities import StoredFile
from ....domain.permissions import PUBLIC_ACTIONS, Action, workspace_allows
from ....domain.repositories import FileRepository, WorkspaceRepository
from .file_results import FileError, FileErrorCode

_RESOURCE: Final[str] = "File"


def authorize_file_action(
    stored_file: StoredFile,
    actor_id: UUID | None,
    action: Action,
    workspace_repository: WorkspaceRepository,
) -> FileError | None:
    if stored_file.workspace_id is not None:
        workspace = workspace_repository.get_workspace(stored_file.workspace_id)
        if workspace is None:
            return FileError(
                code=FileErrorCode.NOT_FOUND,
                message="Workspace not found.",
                resource="Workspace",
            )
        if workspace_allows(workspace, actor_id, action):
            return None
        return forbidden_error()

    if stored_file.uploader_id is None:
        return None if action in PUBLIC_ACTIONS else forbidden_error()

    if actor_id is not None and actor_id == stored_file.uploader_id:
        return None
    return forbidden_error()


def load_file_for(
    *,
    file_id: UUID,
    actor_id: UUID | None,
    action: Action,
    file_repository: FileRepository,
    workspace_repository: WorkspaceRepository,
    include_deleted: bool = True,
) -> Tuple[StoredFile | None, FileError | None]:
    """
    Carga + autoriza.

    include_deleted=False trata a los archivos en papelera como inexistentes
    (descarga, share, rename).
    """
    stored_file = file_repository.get_file(file_id)
    if stored_file is None or (stored_file.is_deleted and not include_deleted):
        return None, not_found_error()

    error = authorize_file_action(stored_file, actor_id, action, workspace_repository)
    if error is not None:
        return None, error
    return stored_file, None


def not_found_error(message: str = "File not found.") -> FileError:
    return FileError(code=FileErrorCode.NOT_FOUND, message=message, resource=_RESOURCE)


def forbidden_error(message: str = "Access denied.") -> FileError:
    return FileError(code=FileErrorCode.FORBIDDEN, message=message, resource=_RESOURCE)


def conflict_error(message: str) -> FileError:
    return FileError(code=FileErrorCode.CONFLICT, message=message, resource=_RESOURCE)


def validation_error(message: str) -> FileError:
    return FileError(code=FileErrorCode.VALIDATION_ERROR, message=message)


def expired_error() -> FileError:
    return FileError(
        code=FileErrorCode.EXPIRED,
        message="This link has expired.",
        resource=_RESOURCE,
    )


def storage_error(message: str = "File content is unavailable.") -> FileError:
    return FileError(
        code=FileErrorCode.STORAGE_ERROR, message=message, resource=_RESOURCE
    )
