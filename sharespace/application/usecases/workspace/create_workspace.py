"""
===============================================================================
USE CASE: Create Workspace
===============================================================================

Name:
    Create Workspace Use Case

Business Goal:
    Crear un workspace garantizando:
      - nombre y descripción válidos (no vacíos, con longitud acotada)
      - código de acceso único (colisiones se reintentan)
      - el creador queda como único owner

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateWorkspaceUseCase

Responsibilities:
    - Validar actor, nombre y descripción.
    - Generar access_code y persistir (reintento ante colisión).
    - Insertar la membresía owner del creador.

Collaborators:
    - WorkspaceRepository.create_workspace (None si el código colisiona)
    - workspace_results: WorkspaceResult / WorkspaceError

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    CreateWorkspaceInput(name, description, actor_id, is_public)

Outputs:
    WorkspaceResult

Error Mapping:
    - FORBIDDEN: actor ausente
    - VALIDATION_ERROR: nombre/descripción vacíos o demasiado largos
    - CONFLICT: no se logró un código único tras varios intentos
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Role, Workspace, utcnow
from ....domain.repositories import WorkspaceRepository
from .workspace_access import conflict_error, forbidden_error, validation_error
from .workspace_results import WorkspaceError, WorkspaceResult

DEFAULT_ACCESS_CODE_LENGTH = 8
_MAX_CODE_ATTEMPTS = 5


def generate_access_code(length: int = DEFAULT_ACCESS_CODE_LENGTH) -> str:
    """Código corto para compartir en persona (hex de un uuid4)."""
    return uuid4().hex[:length]


def validate_workspace_details(
    name: str | None,
    description: str | None,
    *,
    max_name_chars: int,
    max_description_chars: int,
) -> tuple[str, str, WorkspaceError | None]:
    """Normaliza (strip) y valida nombre/descripción."""
    normalized_name = (name or "").strip()
    normalized_description = (description or "").strip()

    if not normalized_name:
        return "", "", validation_error("Workspace name is required.")
    if len(normalized_name) > max_name_chars:
        return "", "", validation_error(
            f"Workspace name must be at most {max_name_chars} characters."
        )
    if not normalized_description:
        return "", "", validation_error("Workspace description is required.")
    if len(normalized_description) > max_description_chars:
        return "", "", validation_error(
            f"Workspace description must be at most {max_description_chars} characters."
        )
    return normalized_name, normalized_description, None


@dataclass(frozen=True)
class CreateWorkspaceInput:
    name: str
    description: str
    actor_id: UUID | None = None
    is_public: bool = False


class CreateWorkspaceUseCase:
    """
    Use Case (Command):
        Orquesta la creación de un workspace y su primer miembro (owner).
    """

    def __init__(
        self,
        repository: WorkspaceRepository,
        *,
        access_code_length: int = DEFAULT_ACCESS_CODE_LENGTH,
        max_name_chars: int = 255,
        max_description_chars: int = 2_000,
        code_factory: Callable[[int], str] = generate_access_code,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._workspaces = repository
        self._access_code_length = access_code_length
        self._max_name_chars = max_name_chars
        self._max_description_chars = max_description_chars
        self._code_factory = code_factory
        self._clock = clock

    def execute(self, input_data: CreateWorkspaceInput) -> WorkspaceResult:
        # ---------------------------------------------------------------------
        # 1) Validar actor.
        # ---------------------------------------------------------------------
        if input_data.actor_id is None:
            return WorkspaceResult(
                error=forbidden_error("Actor is required to create workspace.")
            )

        # ---------------------------------------------------------------------
        # 2) Normalizar y validar datos.
        # ---------------------------------------------------------------------
        name, description, error = validate_workspace_details(
            input_data.name,
            input_data.description,
            max_name_chars=self._max_name_chars,
            max_description_chars=self._max_description_chars,
        )
        if error is not None:
            return WorkspaceResult(error=error)

        # ---------------------------------------------------------------------
        # 3) Construir y persistir, regenerando el código si colisiona.
        # ---------------------------------------------------------------------
        workspace_id = uuid4()
        now = self._clock()
        for _ in range(_MAX_CODE_ATTEMPTS):
            workspace = Workspace(
                id=workspace_id,
                name=name,
                description=description,
                access_code=self._code_factory(self._access_code_length),
                owner_id=input_data.actor_id,
                is_public=bool(input_data.is_public),
                created_at=now,
                updated_at=now,
            )
            workspace.add_member(input_data.actor_id, Role.OWNER, at=now)

            created = self._workspaces.create_workspace(workspace)
            if created is not None:
                logger.info(
                    "workspace.created",
                    extra={
                        "workspace_id": str(created.id),
                        "is_public": created.is_public,
                    },
                )
                return WorkspaceResult(workspace=created)

            logger.warning(
                "workspace.access_code_collision",
                extra={"workspace_id": str(workspace_id)},
            )

        return WorkspaceResult(
            error=conflict_error("Could not allocate a unique access code.")
        )
