"""
===============================================================================
TARJETA CRC — domain/permissions.py
===============================================================================

Módulo:
    Evaluador de Permisos (Role x Action)

Responsabilidades:
    - Publicar UNA tabla estática de capacidades por rol.
    - Responder allows(role, action) de forma pura y total.
    - Resolver acceso de lectura pública (is_public) por fuera de la tabla.

Colaboradores:
    - domain.entities: Role, Workspace
    - application/usecases: consultan allows() antes de mutar.

Reglas:
    - Sin efectos laterales, sin DB, sin FastAPI.
    - La tabla cubre todo Role x Action; agregar un Action sin fila para cada
      rol rompe en import (ver _check_exhaustive).
    - El acceso público nunca habilita escrituras.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping
from uuid import UUID

from .entities import Role, Workspace


class Action(str, Enum):
    """Acciones sujetas a autorización."""

    VIEW = "view"
    UPLOAD = "upload"
    SOFT_DELETE = "soft_delete"
    RESTORE = "restore"
    PURGE = "purge"
    RENAME_MOVE = "rename_move"
    INVITE_MEMBER = "invite_member"
    MANAGE_MEMBERS = "manage_members"
    UPDATE_WORKSPACE = "update_workspace"
    DELETE_WORKSPACE = "delete_workspace"


_VIEWER: FrozenSet[Action] = frozenset(
    {
        Action.VIEW,
        Action.UPLOAD,
        Action.SOFT_DELETE,
        Action.RESTORE,
    }
)
_EDITOR: FrozenSet[Action] = _VIEWER | {
    Action.RENAME_MOVE,
    Action.INVITE_MEMBER,
}
_OWNER: FrozenSet[Action] = frozenset(Action)

CAPABILITIES: Mapping[Role, FrozenSet[Action]] = MappingProxyType(
    {
        Role.VIEWER: _VIEWER,
        Role.EDITOR: _EDITOR,
        Role.OWNER: _OWNER,
    }
)

# Lectura para no-miembros de un workspace público.
PUBLIC_ACTIONS: FrozenSet[Action] = frozenset({Action.VIEW})


def _check_exhaustive() -> None:
    missing = [role for role in Role if role not in CAPABILITIES]
    if missing:
        raise RuntimeError(f"Capability table missing roles: {missing}")


_check_exhaustive()


def allows(role: Role, action: Action) -> bool:
    """True si `role` puede ejecutar `action`."""
    return action in CAPABILITIES[role]


def can_view_workspace(workspace: Workspace, user_id: UUID | None) -> bool:
    """Lectura: miembro (cualquier rol) o workspace público."""
    return workspace.is_public or workspace.is_member(user_id)


def workspace_allows(
    workspace: Workspace, user_id: UUID | None, action: Action
) -> bool:
    """
    Combina membresía + tabla + acceso público.

    - Miembro: decide la tabla según su rol.
    - No miembro de workspace público: solo PUBLIC_ACTIONS.
    - Resto: nada.
    """
    role = workspace.role_of(user_id)
    if role is not None:
        return allows(role, action)
    return workspace.is_public and action in PUBLIC_ACTIONS
