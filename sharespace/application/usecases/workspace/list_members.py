"""
===============================================================================
USE CASE: List Members
===============================================================================

Business Goal:
    Listar miembros en orden de ingreso, enriquecidos con email/nombre.
    Visible para miembros o para cualquiera si el workspace es público.

Collaborators:
    - WorkspaceRepository.get_workspace
    - UserRepository.get_user (datos de perfil; ausentes => None)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.permissions import Action
from ....domain.repositories import UserRepository, WorkspaceRepository
from .workspace_access import resolve_workspace_for
from .workspace_results import MemberListResult, MemberView


class ListMembersUseCase:
    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        user_repository: UserRepository,
    ) -> None:
        self._workspaces = workspace_repository
        self._users = user_repository

    def execute(self, workspace_id: UUID, actor_id: UUID | None) -> MemberListResult:
        workspace, error = resolve_workspace_for(
            workspace_id=workspace_id,
            actor_id=actor_id,
            action=Action.VIEW,
            workspace_repository=self._workspaces,
        )
        if error is not None:
            return MemberListResult(error=error)

        members = []
        for membership in workspace.list_members():
            user = self._users.get_user(membership.user_id)
            members.append(
                MemberView(
                    user_id=membership.user_id,
                    role=membership.role,
                    joined_at=membership.joined_at,
                    email=user.email if user else None,
                    name=user.name if user else None,
                )
            )
        return MemberListResult(members=members)
