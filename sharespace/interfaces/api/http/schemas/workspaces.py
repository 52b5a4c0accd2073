"""
===============================================================================
TARJETA CRC — schemas/workspaces.py
===============================================================================

Módulo:
    Schemas HTTP para Workspaces y membresías

Responsabilidades:
    - Definir DTOs de request/response para endpoints de workspaces.
    - Validar campos (name/description) con límites desde settings.
    - Exponer el access_code sólo a miembros (el router decide).

Colaboradores:
    - domain.entities.Role
    - crosscutting.config.get_settings (límites)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .....crosscutting.config import get_settings
from .....domain.entities import Role

_settings = get_settings()


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateWorkspaceReq(BaseModel):
    """Request para crear workspace."""

    name: Annotated[
        str,
        Field(
            ...,
            min_length=1,
            max_length=_settings.max_name_chars,
            description="Nombre del workspace",
        ),
    ]
    description: str = Field(
        ...,
        min_length=1,
        max_length=_settings.max_description_chars,
        description="Descripción del workspace",
    )
    is_public: bool = Field(default=False)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class UpdateWorkspaceReq(BaseModel):
    """Request para actualizar workspace (name/description obligatorios)."""

    name: str = Field(..., min_length=1, max_length=_settings.max_name_chars)
    description: str = Field(
        ..., min_length=1, max_length=_settings.max_description_chars
    )
    is_public: bool | None = Field(default=None)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class InviteMemberReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class SetMemberRoleReq(BaseModel):
    """El valor se valida en el caso de uso (rol desconocido -> 422)."""

    role: str = Field(..., min_length=1, max_length=32)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class WorkspaceRes(BaseModel):
    """Response de workspace (access_code sólo para miembros)."""

    id: UUID
    name: str
    description: str
    owner_id: UUID
    is_public: bool
    access_code: str | None = None
    role: Role | None = None
    member_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WorkspacesListRes(BaseModel):
    workspaces: list[WorkspaceRes]


class MemberRes(BaseModel):
    user_id: UUID
    role: Role
    joined_at: datetime
    email: str | None = None
    name: str | None = None


class MembersListRes(BaseModel):
    members: list[MemberRes]


class DeleteWorkspaceRes(BaseModel):
    workspace_id: UUID
    deleted: bool
    files_removed: int
    storage_cleaned: bool
