"""
===============================================================================
USE CASE: Join Workspace By Code
===============================================================================

Business Goal:
    Un usuario autenticado se une a un workspace con su access_code y queda
    como viewer al final de la lista de miembros.

Error Mapping:
    - NOT_FOUND: no hay workspace con ese código
    - CONFLICT: el usuario ya es miembro (chequeado bajo el lock del workspace)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Membership, Role, Workspace, utcnow
from ....domain.repositories import WorkspaceRepository
from .workspace_access import conflict_error, forbidden_error, not_found_error
from .workspace_results import MembershipResult, WorkspaceError


class JoinWorkspaceUseCase:
    def __init__(
        self,
        repository: WorkspaceRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._workspaces = repository
        self._clock = clock

    def execute(self, actor_id: UUID | None, access_code: str) -> MembershipResult:
        if actor_id is None:
            return MembershipResult(error=forbidden_error())

        code = (access_code or "").strip()
        workspace = self._workspaces.get_workspace_by_access_code(code) if code else None
        if workspace is None:
            return MembershipResult(
                error=not_found_error("Invalid access code.", resource="AccessCode")
            )

        joined: list[Membership] = []

        def mutation(draft: Workspace) -> WorkspaceError | None:
            if draft.is_member(actor_id):
                return conflict_error("Already a member of this workspace.")
            joined.append(draft.add_member(actor_id, Role.VIEWER, at=self._clock()))
            return None

        updated, rejection = self._workspaces.mutate_workspace(workspace.id, mutation)
        if rejection is not None:
            return MembershipResult(error=rejection)
        if updated is None:
            return MembershipResult(
                error=not_found_error("Invalid access code.", resource="AccessCode")
            )

        logger.info(
            "workspace.member_joined",
            extra={"workspace_id": str(updated.id), "member_id": str(actor_id)},
        )
        return MembershipResult(workspace=updated, membership=joined[-1])
