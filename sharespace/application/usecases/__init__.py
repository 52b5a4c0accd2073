"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── workspace/      # Workspaces, membership and roles
└── files/          # File lifecycle and share links

Usage
-----
    from sharespace.application.usecases.workspace import CreateWorkspaceUseCase
    from sharespace.application.usecases import UploadFileUseCase
"""

from .files import (
    DownloadFileUseCase,
    DownloadSharedFileUseCase,
    FileErrorCode,
    GetShareUseCase,
    ListFilesUseCase,
    PurgeFileUseCase,
    ResolveSharedFileUseCase,
    RestoreFileUseCase,
    SoftDeleteFileUseCase,
    UpdateFileUseCase,
    UploadFileUseCase,
)
from .workspace import (
    CreateWorkspaceUseCase,
    DeleteWorkspaceUseCase,
    GetWorkspaceUseCase,
    InviteMemberUseCase,
    JoinWorkspaceUseCase,
    ListMembersUseCase,
    ListWorkspacesUseCase,
    RemoveMemberUseCase,
    SetMemberRoleUseCase,
    UpdateWorkspaceUseCase,
    WorkspaceErrorCode,
)

__all__ = [
    # Files
    "DownloadFileUseCase",
    "DownloadSharedFileUseCase",
    "FileErrorCode",
    "GetShareUseCase",
    "ListFilesUseCase",
    "PurgeFileUseCase",
    "ResolveSharedFileUseCase",
    "RestoreFileUseCase",
    "SoftDeleteFileUseCase",
    "UpdateFileUseCase",
    "UploadFileUseCase",
    # Workspaces
    "CreateWorkspaceUseCase",
    "DeleteWorkspaceUseCase",
    "GetWorkspaceUseCase",
    "InviteMemberUseCase",
    "JoinWorkspaceUseCase",
    "ListMembersUseCase",
    "ListWorkspacesUseCase",
    "RemoveMemberUseCase",
    "SetMemberRoleUseCase",
    "UpdateWorkspaceUseCase",
    "WorkspaceErrorCode",
]
