"""
===============================================================================
WORKSPACE USE CASES PACKAGE (Public API / Exports)
===============================================================================

Business Goal:
    Exponer un punto único y estable de importación para los casos de uso de
    Workspaces y membresía, sus DTOs y helpers de acceso.

Collaborators:
    - Módulos internos del paquete:
        create_workspace, list_workspaces, get_workspace, update_workspace,
        delete_workspace, join_workspace, invite_member, set_member_role,
        remove_member, list_members, workspace_access, workspace_results
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Use Cases
# -----------------------------------------------------------------------------
from .create_workspace import (
    CreateWorkspaceInput,
    CreateWorkspaceUseCase,
    generate_access_code,
)
from .delete_workspace import DeleteWorkspaceUseCase
from .get_workspace import GetWorkspaceUseCase
from .invite_member import InviteMemberInput, InviteMemberUseCase
from .join_workspace import JoinWorkspaceUseCase
from .list_members import ListMembersUseCase
from .list_workspaces import ListWorkspacesUseCase
from .remove_member import RemoveMemberInput, RemoveMemberUseCase
from .set_member_role import SetMemberRoleInput, SetMemberRoleUseCase, parse_role
from .update_workspace import UpdateWorkspaceInput, UpdateWorkspaceUseCase

# -----------------------------------------------------------------------------
# Helpers (compartidos con los casos de uso de archivos)
# -----------------------------------------------------------------------------
from .workspace_access import resolve_workspace_for

# -----------------------------------------------------------------------------
# DTOs / Result models
# -----------------------------------------------------------------------------
from .workspace_results import (
    DeleteWorkspaceResult,
    MemberListResult,
    MembershipResult,
    MemberView,
    WorkspaceError,
    WorkspaceErrorCode,
    WorkspaceListResult,
    WorkspaceResult,
)

__all__ = [
    # Use Cases
    "CreateWorkspaceInput",
    "CreateWorkspaceUseCase",
    "DeleteWorkspaceUseCase",
    "GetWorkspaceUseCase",
    "InviteMemberInput",
    "InviteMemberUseCase",
    "JoinWorkspaceUseCase",
    "ListMembersUseCase",
    "ListWorkspacesUseCase",
    "RemoveMemberInput",
    "RemoveMemberUseCase",
    "SetMemberRoleInput",
    "SetMemberRoleUseCase",
    "UpdateWorkspaceInput",
    "UpdateWorkspaceUseCase",
    # Helpers
    "generate_access_code",
    "parse_role",
    "resolve_workspace_for",
    # DTOs / Result models
    "DeleteWorkspaceResult",
    "MemberListResult",
    "MembershipResult",
    "MemberView",
    "WorkspaceError",
    "WorkspaceErrorCode",
    "WorkspaceListResult",
    "WorkspaceResult",
]
