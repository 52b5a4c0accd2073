"""
===============================================================================
USE CASE: Remove Member / Leave Workspace
===============================================================================

Business Goal:
    - El owner remueve a cualquier miembro que no sea él mismo.
    - Cualquier miembro puede irse (self-leave), excepto el owner, que primero
      debe transferir el ownership.

Error Mapping:
    - NOT_FOUND: workspace inexistente o target no es miembro
    - FORBIDDEN: no es self-leave y el actor no tiene MANAGE_MEMBERS
    - CONFLICT: el target es el owner actual
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Workspace
from ....domain.permissions import Action
from ....domain.repositories import WorkspaceRepository
from .workspace_access import (
    authorize,
    conflict_error,
    forbidden_error,
    not_found_error,
)
from .workspace_results import WorkspaceError, WorkspaceResult


@dataclass(frozen=True)
class RemoveMemberInput:
    workspace_id: UUID
    actor_id: UUID | None
    target_user_id: UUID


class RemoveMemberUseCase:
    def __init__(self, repository: WorkspaceRepository) -> None:
        self._workspaces = repository

    def execute(self, input_data: RemoveMemberInput) -> WorkspaceResult:
        actor_id = input_data.actor_id
        target_id = input_data.target_user_id
        if actor_id is None:
            return WorkspaceResult(error=forbidden_error())

        is_self_leave = actor_id == target_id

        def mutation(draft: Workspace) -> WorkspaceError | None:
            if not is_self_leave:
                denied = authorize(draft, actor_id, Action.MANAGE_MEMBERS)
                if denied is not None:
                    return denied
            if not draft.is_member(target_id):
                return not_found_error("Member not found.", resource="Member")
            if target_id == draft.owner_id:
                return conflict_error(
                    "The owner cannot leave or be removed; transfer ownership first."
                )
            draft.remove_member(target_id)
            return None

        updated, rejection = self._workspaces.mutate_workspace(
            input_data.workspace_id, mutation
        )
        if rejection is not None:
            return WorkspaceResult(error=rejection)
        if updated is None:
            return WorkspaceResult(error=not_found_error())

        logger.info(
            "workspace.member_left" if is_self_leave else "workspace.member_removed",
            extra={"workspace_id": str(updated.id), "member_id": str(target_id)},
        )
        return WorkspaceResult(workspace=updated)
