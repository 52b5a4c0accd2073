"""
===============================================================================
WORKSPACE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Workspace Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de Workspaces y membresía, con un contrato estable para:
      - validaciones
      - autorización
      - recursos no encontrados
      - conflictos de negocio (miembro duplicado, remover al owner, ...)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    workspace_results models (module)

Responsibilities:
    - Definir WorkspaceErrorCode (categorías estables).
    - Representar WorkspaceError (code + message + resource).
    - Representar resultados por forma de respuesta:
        * WorkspaceResult / WorkspaceListResult
        * MembershipResult / MemberListResult
        * DeleteWorkspaceResult

Collaborators:
    - domain.entities.Workspace, Membership, Role
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List
from uuid import UUID

from ....domain.entities import Membership, Role, Workspace


class WorkspaceErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - FORBIDDEN: actor no autorizado para la operación.
      - NOT_FOUND: workspace / miembro / usuario inexistente.
      - CONFLICT: regla de negocio (ya es miembro, remover al owner, ...).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class WorkspaceError:
    """
    Error de caso de uso.

    Campos:
      - code: categoría estable
      - message: descripción humana, útil para UI/logs
      - resource: recurso afectado cuando no es el workspace ("Member", "User")
    """

    code: WorkspaceErrorCode
    message: str
    resource: str | None = None


@dataclass
class WorkspaceResult:
    """
    Contrato:
      - Si error is None => workspace presente (éxito)
      - Si error != None => workspace None (fallo)
    """

    workspace: Workspace | None = None
    error: WorkspaceError | None = None


@dataclass
class WorkspaceListResult:
    workspaces: List[Workspace] = field(default_factory=list)
    error: WorkspaceError | None = None


@dataclass
class MembershipResult:
    """Resultado de join/invite/set_role: snapshot del workspace + membresía afectada."""

    workspace: Workspace | None = None
    membership: Membership | None = None
    error: WorkspaceError | None = None


@dataclass(frozen=True)
class MemberView:
    """Miembro enriquecido con datos de identidad (para listados)."""

    user_id: UUID
    role: Role
    joined_at: datetime
    email: str | None = None
    name: str | None = None


@dataclass
class MemberListResult:
    members: List[MemberView] = field(default_factory=list)
    error: WorkspaceError | None = None


@dataclass
class DeleteWorkspaceResult:
    """
    Campos:
      - deleted: True si el workspace dejó de existir
      - files_removed: cantidad de registros de archivos eliminados
      - storage_cleaned: False si algún blob no pudo borrarse (best-effort)
    """

    deleted: bool = False
    files_removed: int = 0
    storage_cleaned: bool = True
    error: WorkspaceError | None = None
