"""
===============================================================================
USE CASE: Set Member Role (incluye transferencia de ownership)
===============================================================================

Name:
    Set Member Role Use Case

Business Goal:
    El owner cambia el rol de un miembro. Asignar `owner` es una
    transferencia: el owner anterior pasa a editor y owner_id se reasigna,
    todo en la misma mutación (nunca se observa 0 ni 2 owners).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    SetMemberRoleUseCase

Responsibilities:
    - Parsear el rol pedido (VALIDATION_ERROR si no existe).
    - Dentro de la mutación: MANAGE_MEMBERS, existencia del target, regla de
      owner único.

Collaborators:
    - WorkspaceRepository.mutate_workspace
    - domain.entities.Workspace.transfer_ownership / change_role

Error Mapping:
    - NOT_FOUND: workspace inexistente o target no es miembro (resource="Member")
    - FORBIDDEN: el actor no es owner
    - VALIDATION_ERROR: rol inválido
    - CONFLICT: degradar al owner sin transferir
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Membership, Role, Workspace
from ....domain.permissions import Action
from ....domain.repositories import WorkspaceRepository
from .workspace_access import (
    authorize,
    conflict_error,
    forbidden_error,
    not_found_error,
    validation_error,
)
from .workspace_results import MembershipResult, WorkspaceError


@dataclass(frozen=True)
class SetMemberRoleInput:
    workspace_id: UUID
    actor_id: UUID | None
    target_user_id: UUID
    role: Role | str


def parse_role(value: Role | str | None) -> Role | None:
    if isinstance(value, Role):
        return value
    try:
        return Role((value or "").strip().lower())
    except ValueError:
        return None


class SetMemberRoleUseCase:
    def __init__(self, repository: WorkspaceRepository) -> None:
        self._workspaces = repository

    def execute(self, input_data: SetMemberRoleInput) -> MembershipResult:
        if input_data.actor_id is None:
            return MembershipResult(error=forbidden_error())

        new_role = parse_role(input_data.role)
        target_id = input_data.target_user_id
        changed: list[Membership] = []
        transferred: list[UUID] = []

        def mutation(draft: Workspace) -> WorkspaceError | None:
            # -----------------------------------------------------------------
            # 1) Autorización (bajo lock).
            # -----------------------------------------------------------------
            denied = authorize(draft, input_data.actor_id, Action.MANAGE_MEMBERS)
            if denied is not None:
                return denied

            # -----------------------------------------------------------------
            # 2) Validaciones.
            # -----------------------------------------------------------------
            if new_role is None:
                return validation_error(
                    "Invalid role. Expected one of: viewer, editor, owner."
                )
            if not draft.is_member(target_id):
                return not_found_error("Member not found.", resource="Member")

            # -----------------------------------------------------------------
            # 3) Aplicar.
            # -----------------------------------------------------------------
            if new_role == Role.OWNER:
                if draft.owner_id != target_id:
                    transferred.append(draft.owner_id)
                    draft.transfer_ownership(target_id)
            elif target_id == draft.owner_id:
                return conflict_error(
                    "The owner cannot be demoted; transfer ownership instead."
                )
            else:
                draft.change_role(target_id, new_role)

            changed.append(draft.members[target_id])
            return None

        updated, rejection = self._workspaces.mutate_workspace(
            input_data.workspace_id, mutation
        )
        if rejection is not None:
            return MembershipResult(error=rejection)
        if updated is None:
            return MembershipResult(error=not_found_error())

        if transferred:
            logger.info(
                "workspace.ownership_transferred",
                extra={
                    "workspace_id": str(updated.id),
                    "previous_owner_id": str(transferred[-1]),
                    "new_owner_id": str(target_id),
                },
            )
        else:
            logger.info(
                "workspace.member_role_changed",
                extra={
                    "workspace_id": str(updated.id),
                    "member_id": str(target_id),
                    "role": changed[-1].role.value,
                },
            )
        return MembershipResult(workspace=updated, membership=changed[-1])
