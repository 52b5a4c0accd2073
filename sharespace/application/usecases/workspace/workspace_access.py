"""
===============================================================================
WORKSPACE ACCESS HELPERS (Load + Authorize)
===============================================================================

Name:
    Workspace Access Helpers

Business Goal:
    Centralizar "cargar workspace + evaluar acción" para que todos los casos
    de uso (workspaces, membresía y archivos) apliquen la misma política.

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - resolve_workspace_for(action): (Workspace | None, WorkspaceError | None)
    - authorize(workspace, actor, action): WorkspaceError | None, usable
      dentro de una mutación (re-chequeo bajo el lock del agregado).
    - Construir errores NOT_FOUND / FORBIDDEN consistentes.

Collaborators:
    - WorkspaceRepository.get_workspace
    - domain.permissions.workspace_allows
===============================================================================
"""

from __future__ import annotations

from typing import Final, Tuple
from uuid import UUID

from ....domain.entities import Workspace
from ....domain.permissions import Action, workspace_allows
from ....domain.repositories import WorkspaceRepository
from .workspace_results import WorkspaceError, WorkspaceErrorCode

_MSG_NOT_FOUND: Final[str] = "Workspace not found."
_MSG_FORBIDDEN: Final[str] = "Access denied."


def resolve_workspace_for(
    *,
    workspace_id: UUID,
    actor_id: UUID | None,
    action: Action,
    workspace_repository: WorkspaceRepository,
) -> Tuple[Workspace | None, WorkspaceError | None]:
    """
    Retorna:
      - (workspace, None) si existe y el actor puede ejecutar `action`
      - (None, WorkspaceError) si no existe / forbidden
    """
    workspace = workspace_repository.get_workspace(workspace_id)
    if workspace is None:
        return None, not_found_error()

    error = authorize(workspace, actor_id, action)
    if error is not None:
        return None, error
    return workspace, None


def authorize(
    workspace: Workspace, actor_id: UUID | None, action: Action
) -> WorkspaceError | None:
    if workspace_allows(workspace, actor_id, action):
        return None
    return forbidden_error()


def not_found_error(
    message: str = _MSG_NOT_FOUND, resource: str | None = None
) -> WorkspaceError:
    return WorkspaceError(
        code=WorkspaceErrorCode.NOT_FOUND, message=message, resource=resource
    )


def forbidden_error(message: str = _MSG_FORBIDDEN) -> WorkspaceError:
    return WorkspaceError(code=WorkspaceErrorCode.FORBIDDEN, message=message)


def conflict_error(message: str) -> WorkspaceError:
    return WorkspaceError(code=WorkspaceErrorCode.CONFLICT, message=message)


def validation_error(message: str) -> WorkspaceError:
    return WorkspaceError(code=WorkspaceErrorCode.VALIDATION_ERROR, message=message)
