"""
===============================================================================
USE CASE: Get Workspace
===============================================================================

Business Goal:
    Obtener un workspace si el actor es miembro o si el workspace es público.

Error Mapping:
    - NOT_FOUND: no existe
    - FORBIDDEN: privado y el actor no es miembro (o es anónimo)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.permissions import Action
from ....domain.repositories import WorkspaceRepository
from .workspace_access import resolve_workspace_for
from .workspace_results import WorkspaceResult


class GetWorkspaceUseCase:
    def __init__(self, repository: WorkspaceRepository) -> None:
        self._workspaces = repository

    def execute(self, workspace_id: UUID, actor_id: UUID | None) -> WorkspaceResult:
        workspace, error = resolve_workspace_for(
            workspace_id=workspace_id,
            actor_id=actor_id,
            action=Action.VIEW,
            workspace_repository=self._workspaces,
        )
        if error is not None:
            return WorkspaceResult(error=error)
        return WorkspaceResult(workspace=workspace)
