"""
===============================================================================
USE CASE: List My Workspaces
===============================================================================

Business Goal:
    Listar los workspaces donde el actor es miembro (cualquier rol), en el
    orden en que se unió a cada uno.

Collaborators:
    - WorkspaceRepository.list_workspaces_for_member
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import WorkspaceRepository
from .workspace_access import forbidden_error
from .workspace_results import WorkspaceListResult


class ListWorkspacesUseCase:
    def __init__(self, repository: WorkspaceRepository) -> None:
        self._workspaces = repository

    def execute(self, actor_id: UUID | None) -> WorkspaceListResult:
        if actor_id is None:
            return WorkspaceListResult(
                error=forbidden_error("Actor is required to list workspaces.")
            )
        return WorkspaceListResult(
            workspaces=self._workspaces.list_workspaces_for_member(actor_id)
        )
