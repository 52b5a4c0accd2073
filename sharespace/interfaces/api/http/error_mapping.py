"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message [+ resource]).
  - La API traduce a RFC7807 (crosscutting.error_responses).

Colaboradores:
  - application.usecases (WorkspaceError, FileError)
  - crosscutting.error_responses (validation_error, forbidden, etc.)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn
from uuid import UUID

from ....application.usecases.files import FileError, FileErrorCode
from ....application.usecases.workspace import WorkspaceError, WorkspaceErrorCode
from ....crosscutting.error_responses import (
    conflict,
    forbidden,
    gone,
    internal_error,
    not_found,
    storage_unavailable,
    validation_error,
)


def raise_workspace_error(
    error: WorkspaceError,
    *,
    workspace_id: UUID | None = None,
    target_id: UUID | str | None = None,
) -> NoReturn:
    """
    Traduce WorkspaceError -> HTTP.

    Convención NOT_FOUND:
      - resource None / "Workspace" => usa workspace_id
      - otro resource ("Member", "User", "AccessCode") => usa target_id
    """
    if error.code == WorkspaceErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == WorkspaceErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == WorkspaceErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == WorkspaceErrorCode.NOT_FOUND:
        resource = error.resource or "Workspace"
        identifier = workspace_id if resource == "Workspace" else target_id
        raise not_found(resource, str(identifier or "-"))

    raise internal_error(error.message)


def raise_file_error(
    error: FileError,
    *,
    file_id: UUID | str | None = None,
    workspace_id: UUID | None = None,
) -> NoReturn:
    """
    Traduce FileError -> HTTP.

    - EXPIRED => 410
    - STORAGE_ERROR => 503
    - NOT_FOUND con resource "Workspace" => usa workspace_id
    """
    if error.code == FileErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == FileErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == FileErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == FileErrorCode.EXPIRED:
        raise gone(error.message)
    if error.code == FileErrorCode.STORAGE_ERROR:
        raise storage_unavailable(error.message)
    if error.code == FileErrorCode.NOT_FOUND:
        resource = error.resource or "File"
        identifier = workspace_id if resource == "Workspace" else file_id
        raise not_found(resource, str(identifier or "-"))

    raise internal_error(error.message)
