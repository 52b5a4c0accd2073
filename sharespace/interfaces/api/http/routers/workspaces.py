"""
===============================================================================
TARJETA CRC — sharespace/interfaces/api/http/routers/workspaces.py
===============================================================================

Class/Module:
    Workspace Router

Responsibilities:
    - Exponer endpoints HTTP de workspaces y membresías.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir WorkspaceError -> RFC7807.

Collaborators:
    - sharespace.application.usecases.workspace
    - sharespace.identity.current_user (require_user, optional_user)
    - sharespace.container (factories DI)
    - schemas.workspaces (DTOs Pydantic)

Notas:
    - La autorización vive en los casos de uso (tabla de capacidades); el
      router sólo exige autenticación donde el endpoint no admite anónimos.
    - access_code sólo se devuelve a miembros.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from .....application.usecases.workspace import (
    CreateWorkspaceInput,
    CreateWorkspaceUseCase,
    DeleteWorkspaceUseCase,
    GetWorkspaceUseCase,
    InviteMemberInput,
    InviteMemberUseCase,
    JoinWorkspaceUseCase,
    ListMembersUseCase,
    ListWorkspacesUseCase,
    MemberView,
    RemoveMemberInput,
    RemoveMemberUseCase,
    SetMemberRoleInput,
    SetMemberRoleUseCase,
    UpdateWorkspaceInput,
    UpdateWorkspaceUseCase,
)
from .....container import (
    get_create_workspace_use_case,
    get_delete_workspace_use_case,
    get_get_workspace_use_case,
    get_invite_member_use_case,
    get_join_workspace_use_case,
    get_list_members_use_case,
    get_list_workspaces_use_case,
    get_remove_member_use_case,
    get_set_member_role_use_case,
    get_update_workspace_use_case,
)
from .....domain.entities import Membership, Workspace
from .....identity.current_user import optional_user, require_user
from .....identity.users import User
from ..error_mapping import raise_workspace_error
from ..schemas.workspaces import (
    CreateWorkspaceReq,
    DeleteWorkspaceRes,
    InviteMemberReq,
    MemberRes,
    MembersListRes,
    SetMemberRoleReq,
    UpdateWorkspaceReq,
    WorkspaceRes,
    WorkspacesListRes,
)

router = APIRouter(tags=["workspaces"])


# =============================================================================
# Helpers internos (puros / sin IO)
# =============================================================================


def _user_id(user: User | None) -> UUID | None:
    return user.id if user is not None else None


def _to_workspace_res(ws: Workspace, viewer_id: UUID | None) -> WorkspaceRes:
    """Mapea entidad de dominio -> DTO HTTP (access_code sólo para miembros)."""
    is_member = ws.is_member(viewer_id)
    return WorkspaceRes(
        id=ws.id,
        name=ws.name,
        description=ws.description,
        owner_id=ws.owner_id,
        is_public=ws.is_public,
        access_code=ws.access_code if is_member else None,
        role=ws.role_of(viewer_id),
        member_count=len(ws.members),
        created_at=ws.created_at,
        updated_at=ws.updated_at,
    )


def _to_member_res(member: Membership | MemberView) -> MemberRes:
    return MemberRes(
        user_id=member.user_id,
        role=member.role,
        joined_at=member.joined_at,
        email=getattr(member, "email", None),
        name=getattr(member, "name", None),
    )


# =============================================================================
# Endpoints: Workspaces
# =============================================================================


@router.post("/workspaces", response_model=WorkspaceRes, status_code=201)
def create_workspace(
    req: CreateWorkspaceReq,
    use_case: CreateWorkspaceUseCase = Depends(get_create_workspace_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(
        CreateWorkspaceInput(
            name=req.name,
            description=req.description,
            actor_id=user.id,
            is_public=req.is_public,
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error)
    return _to_workspace_res(result.workspace, user.id)


@router.get("/workspaces", response_model=WorkspacesListRes)
def list_workspaces(
    use_case: ListWorkspacesUseCase = Depends(get_list_workspaces_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(user.id)
    if result.error is not None:
        raise_workspace_error(result.error)
    return WorkspacesListRes(
        workspaces=[_to_workspace_res(ws, user.id) for ws in result.workspaces]
    )


@router.post("/workspaces/join/{access_code}", response_model=WorkspaceRes)
def join_workspace(
    access_code: str,
    use_case: JoinWorkspaceUseCase = Depends(get_join_workspace_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(user.id, access_code)
    if result.error is not None:
        raise_workspace_error(result.error, target_id=access_code)
    return _to_workspace_res(result.workspace, user.id)


@router.get("/workspaces/{workspace_id}", response_model=WorkspaceRes)
def get_workspace(
    workspace_id: UUID,
    use_case: GetWorkspaceUseCase = Depends(get_get_workspace_use_case),
    user: User | None = Depends(optional_user()),
):
    actor_id = _user_id(user)
    result = use_case.execute(workspace_id, actor_id)
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id)
    return _to_workspace_res(result.workspace, actor_id)


@router.put("/workspaces/{workspace_id}", response_model=WorkspaceRes)
def update_workspace(
    workspace_id: UUID,
    req: UpdateWorkspaceReq,
    use_case: UpdateWorkspaceUseCase = Depends(get_update_workspace_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(
        UpdateWorkspaceInput(
            workspace_id=workspace_id,
            actor_id=user.id,
            name=req.name,
            description=req.description,
            is_public=req.is_public,
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id)
    return _to_workspace_res(result.workspace, user.id)


@router.delete("/workspaces/{workspace_id}", response_model=DeleteWorkspaceRes)
def delete_workspace(
    workspace_id: UUID,
    use_case: DeleteWorkspaceUseCase = Depends(get_delete_workspace_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(workspace_id, user.id)
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id)
    return DeleteWorkspaceRes(
        workspace_id=workspace_id,
        deleted=result.deleted,
        files_removed=result.files_removed,
        storage_cleaned=result.storage_cleaned,
    )


# =============================================================================
# Endpoints: Membresías
# =============================================================================


@router.get("/workspaces/{workspace_id}/members", response_model=MembersListRes)
def list_members(
    workspace_id: UUID,
    use_case: ListMembersUseCase = Depends(get_list_members_use_case),
    user: User | None = Depends(optional_user()),
):
    result = use_case.execute(workspace_id, _user_id(user))
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id)
    return MembersListRes(members=[_to_member_res(m) for m in result.members])


@router.post(
    "/workspaces/{workspace_id}/invite", response_model=MemberRes, status_code=201
)
def invite_member(
    workspace_id: UUID,
    req: InviteMemberReq,
    use_case: InviteMemberUseCase = Depends(get_invite_member_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(
        InviteMemberInput(workspace_id=workspace_id, actor_id=user.id, email=req.email)
    )
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id, target_id=req.email)
    return _to_member_res(result.membership)


@router.put("/workspaces/{workspace_id}/members/{user_id}", response_model=MemberRes)
def set_member_role(
    workspace_id: UUID,
    user_id: UUID,
    req: SetMemberRoleReq,
    use_case: SetMemberRoleUseCase = Depends(get_set_member_role_use_case),
    user: User = Depends(require_user()),
):
    """Cambia el rol de un miembro; role=owner transfiere ownership."""
    result = use_case.execute(
        SetMemberRoleInput(
            workspace_id=workspace_id,
            actor_id=user.id,
            target_user_id=user_id,
            role=req.role,
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id, target_id=user_id)
    return _to_member_res(result.membership)


@router.delete("/workspaces/{workspace_id}/members/{user_id}", status_code=204)
def remove_member(
    workspace_id: UUID,
    user_id: UUID,
    use_case: RemoveMemberUseCase = Depends(get_remove_member_use_case),
    user: User = Depends(require_user()),
):
    """Owner remueve a un miembro, o un miembro se va (user_id == actor)."""
    result = use_case.execute(
        RemoveMemberInput(
            workspace_id=workspace_id, actor_id=user.id, target_user_id=user_id
        )
    )
    if result.error is not None:
        raise_workspace_error(result.error, workspace_id=workspace_id, target_id=user_id)
    return Response(status_code=204)
