"""
===============================================================================
USE CASE: Invite Member By Email
===============================================================================

Name:
    Invite Member Use Case

Business Goal:
    Un editor u owner agrega a otro usuario (por email) como viewer.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    InviteMemberUseCase

Responsibilities:
    - Pre-chequear INVITE_MEMBER (falla rápido sin consultar identidad).
    - Resolver email -> user_id vía IdentityProviderPort (fuera del lock).
    - Dentro de la mutación: re-chequear permiso y duplicado, luego agregar.

Collaborators:
    - WorkspaceRepository.get_workspace / mutate_workspace
    - IdentityProviderPort.resolve_email

Error Mapping:
    - NOT_FOUND: workspace inexistente, o email sin usuario (resource="User")
    - FORBIDDEN: el actor no es editor/owner
    - VALIDATION_ERROR: email vacío
    - CONFLICT: el usuario ya es miembro
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Membership, Role, Workspace, utcnow
from ....domain.permissions import Action
from ....domain.repositories import WorkspaceRepository
from ....domain.services import IdentityProviderPort
from .workspace_access import (
    authorize,
    conflict_error,
    not_found_error,
    resolve_workspace_for,
    validation_error,
)
from .workspace_results import MembershipResult, WorkspaceError


@dataclass(frozen=True)
class InviteMemberInput:
    workspace_id: UUID
    actor_id: UUID | None
    email: str


class InviteMemberUseCase:
    def __init__(
        self,
        repository: WorkspaceRepository,
        identity_provider: IdentityProviderPort,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._workspaces = repository
        self._identity = identity_provider
        self._clock = clock

    def execute(self, input_data: InviteMemberInput) -> MembershipResult:
        # ---------------------------------------------------------------------
        # 1) Workspace + permiso (pre-chequeo).
        # ---------------------------------------------------------------------
        _, error = resolve_workspace_for(
            workspace_id=input_data.workspace_id,
            actor_id=input_data.actor_id,
            action=Action.INVITE_MEMBER,
            workspace_repository=self._workspaces,
        )
        if error is not None:
            return MembershipResult(error=error)

        # ---------------------------------------------------------------------
        # 2) Resolver invitado.
        # ---------------------------------------------------------------------
        email = (input_data.email or "").strip()
        if not email:
            return MembershipResult(error=validation_error("Email is required."))

        invitee_id = self._identity.resolve_email(email)
        if invitee_id is None:
            return MembershipResult(
                error=not_found_error("User not found.", resource="User")
            )

        # ---------------------------------------------------------------------
        # 3) Mutación atómica.
        # ---------------------------------------------------------------------
        added: list[Membership] = []

        def mutation(draft: Workspace) -> WorkspaceError | None:
            denied = authorize(draft, input_data.actor_id, Action.INVITE_MEMBER)
            if denied is not None:
                return denied
            if draft.is_member(invitee_id):
                return conflict_error("User is already a member of this workspace.")
            added.append(draft.add_member(invitee_id, Role.VIEWER, at=self._clock()))
            return None

        updated, rejection = self._workspaces.mutate_workspace(
            input_data.workspace_id, mutation
        )
        if rejection is not None:
            return MembershipResult(error=rejection)
        if updated is None:
            return MembershipResult(error=not_found_error())

        logger.info(
            "workspace.member_invited",
            extra={
                "workspace_id": str(updated.id),
                "member_id": str(invitee_id),
                "invited_by": str(input_data.actor_id),
            },
        )
        return MembershipResult(workspace=updated, membership=added[-1])
