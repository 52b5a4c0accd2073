"""
===============================================================================
FILE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    File Use Case Results

Business Goal:
    Tipos consistentes de resultados y errores para el ciclo de vida de
    archivos (upload, listados, descarga, papelera, purge, share links).

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - Definir FileErrorCode como conjunto estable de categorías de error.
    - Definir FileError (code + message + resource).
    - Definir DTOs de resultados por forma de respuesta.
    - Traducir WorkspaceError -> FileError (los archivos reusan el acceso a
      workspaces).

Collaborators:
    - domain.entities.StoredFile
    - workspace.workspace_results.WorkspaceError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import StoredFile
from ..workspace.workspace_results import WorkspaceError


class FileErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input inválido (nombre vacío, carpeta inválida, ...)
      - FORBIDDEN: actor no autorizado
      - NOT_FOUND: archivo/workspace inexistente o archivo en papelera
      - CONFLICT: transición inválida (ya borrado / ya activo)
      - EXPIRED: archivo anónimo vencido
      - STORAGE_ERROR: el Blob Store falló o perdió los bytes
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    EXPIRED = "EXPIRED"
    STORAGE_ERROR = "STORAGE_ERROR"


@dataclass(frozen=True)
class FileError:
    """
    Campos:
      - code: FileErrorCode
      - message: mensaje humano (UI/logs)
      - resource: "File" por defecto; "Workspace" cuando falla el contenedor
    """

    code: FileErrorCode
    message: str
    resource: str | None = None


def from_workspace_error(error: WorkspaceError) -> FileError:
    return FileError(
        code=FileErrorCode(error.code.value),
        message=error.message,
        resource=error.resource or "Workspace",
    )


@dataclass
class FileResult:
    """
    Resultado de un único archivo.

    Campos:
      - file: snapshot del archivo
      - versioned: True si el upload reemplazó un archivo existente
    """

    file: StoredFile | None = None
    versioned: bool = False
    error: FileError | None = None


@dataclass
class FileListResult:
    files: List[StoredFile] = field(default_factory=list)
    error: FileError | None = None


@dataclass
class FileContentResult:
    """Metadata + bytes para descargas."""

    file: StoredFile | None = None
    content: bytes | None = None
    error: FileError | None = None


@dataclass
class ShareResult:
    share_id: str | None = None
    file: StoredFile | None = None
    error: FileError | None = None


@dataclass
class PurgeResult:
    """
    Campos:
      - purged: el registro ya no existe (autoritativo)
      - storage_cleaned: False si algún blob no pudo borrarse (best-effort)
    """

    purged: bool = False
    storage_cleaned: bool = True
    error: FileError | None = None
