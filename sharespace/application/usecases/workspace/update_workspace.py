"""
===============================================================================
USE CASE: Update Workspace
===============================================================================

Business Goal:
    Permitir al owner cambiar nombre, descripción y visibilidad pública.
    El access_code y la membresía NO se tocan acá.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateWorkspaceUseCase

Responsibilities:
    - Validar nombre/descripción (mismas reglas que la creación).
    - Re-chequear UPDATE_WORKSPACE dentro de la mutación atómica (el rol del
      actor pudo cambiar entre la lectura y la escritura).

Collaborators:
    - WorkspaceRepository.mutate_workspace
    - create_workspace.validate_workspace_details
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Workspace
from ....domain.permissions import Action
from ....domain.repositories import WorkspaceRepository
from .create_workspace import validate_workspace_details
from .workspace_access import authorize, forbidden_error, not_found_error
from .workspace_results import WorkspaceError, WorkspaceResult


@dataclass(frozen=True)
class UpdateWorkspaceInput:
    workspace_id: UUID
    actor_id: UUID | None
    name: str
    description: str
    is_public: bool | None = None


class UpdateWorkspaceUseCase:
    def __init__(
        self,
        repository: WorkspaceRepository,
        *,
        max_name_chars: int = 255,
        max_description_chars: int = 2_000,
    ) -> None:
        self._workspaces = repository
        self._max_name_chars = max_name_chars
        self._max_description_chars = max_description_chars

    def execute(self, input_data: UpdateWorkspaceInput) -> WorkspaceResult:
        if input_data.actor_id is None:
            return WorkspaceResult(error=forbidden_error())

        name, description, error = validate_workspace_details(
            input_data.name,
            input_data.description,
            max_name_chars=self._max_name_chars,
            max_description_chars=self._max_description_chars,
        )
        if error is not None:
            return WorkspaceResult(error=error)

        def mutation(draft: Workspace) -> WorkspaceError | None:
            denied = authorize(draft, input_data.actor_id, Action.UPDATE_WORKSPACE)
            if denied is not None:
                return denied
            draft.name = name
            draft.description = description
            if input_data.is_public is not None:
                draft.is_public = input_data.is_public
            return None

        updated, rejection = self._workspaces.mutate_workspace(
            input_data.workspace_id, mutation
        )
        if rejection is not None:
            return WorkspaceResult(error=rejection)
        if updated is None:
            return WorkspaceResult(error=not_found_error())

        logger.info("workspace.updated", extra={"workspace_id": str(updated.id)})
        return WorkspaceResult(workspace=updated)
