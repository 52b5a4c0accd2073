"""
===============================================================================
TARJETA CRC — sharespace/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, blob store, identidad) siguiendo DIP.
  - Exponer factories de casos de uso para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache).
  - Elegir el Blob Store según Settings.storage_backend.

Colaboradores:
  - sharespace.crosscutting.config.get_settings
  - sharespace.domain.repositories / domain.services (puertos)
  - sharespace.infrastructure.* (implementaciones)
  - sharespace.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (sólo expone factories).
  - Tests: reset_container() limpia los singletons entre casos.
===============================================================================
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from .application.usecases.files import (
    DownloadFileUseCase,
    DownloadSharedFileUseCase,
    GetShareUseCase,
    ListFilesUseCase,
    PurgeFileUseCase,
    ResolveSharedFileUseCase,
    RestoreFileUseCase,
    SoftDeleteFileUseCase,
    UpdateFileUseCase,
    UploadFileUseCase,
)
from .application.usecases.workspace import (
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
)
from .crosscutting.config import get_settings
from .domain.repositories import FileRepository, UserRepository, WorkspaceRepository
from .domain.services import BlobStorePort, IdentityProviderPort
from .identity.identity_provider import TokenIdentityProvider
from .infrastructure.repositories import (
    InMemoryFileRepository,
    InMemoryUserRepository,
    InMemoryWorkspaceRepository,
)
from .infrastructure.storage import (
    InMemoryBlobStore,
    LocalBlobStore,
    S3BlobStore,
    S3Config,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_workspace_repository() -> WorkspaceRepository:
    return InMemoryWorkspaceRepository()


@lru_cache(maxsize=1)
def get_file_repository() -> FileRepository:
    return InMemoryFileRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    return InMemoryUserRepository()


# =============================================================================
# Servicios externos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStorePort:
    """
    Blob Store según STORAGE_BACKEND:
      - local (default): disco bajo STORAGE_ROOT
      - s3: bucket S3/MinIO
      - memory: volátil (tests)
    """
    settings = get_settings()
    if settings.storage_backend == "s3":
        return S3BlobStore(
            S3Config(
                bucket=settings.s3_bucket,
                access_key=settings.s3_access_key,
                secret_key=settings.s3_secret_key,
                region=settings.s3_region or None,
                endpoint_url=settings.s3_endpoint_url or None,
            )
        )
    if settings.storage_backend == "memory":
        return InMemoryBlobStore()
    return LocalBlobStore(settings.storage_root)


@lru_cache(maxsize=1)
def get_identity_provider() -> IdentityProviderPort:
    return TokenIdentityProvider(get_user_repository())


# =============================================================================
# Casos de uso: Workspaces
# =============================================================================


def get_create_workspace_use_case() -> CreateWorkspaceUseCase:
    settings = get_settings()
    return CreateWorkspaceUseCase(
        get_workspace_repository(),
        access_code_length=settings.access_code_length,
        max_name_chars=settings.max_name_chars,
        max_description_chars=settings.max_description_chars,
    )


def get_list_workspaces_use_case() -> ListWorkspacesUseCase:
    return ListWorkspacesUseCase(get_workspace_repository())


def get_get_workspace_use_case() -> GetWorkspaceUseCase:
    return GetWorkspaceUseCase(get_workspace_repository())


def get_update_workspace_use_case() -> UpdateWorkspaceUseCase:
    settings = get_settings()
    return UpdateWorkspaceUseCase(
        get_workspace_repository(),
        max_name_chars=settings.max_name_chars,
        max_description_chars=settings.max_description_chars,
    )


def get_delete_workspace_use_case() -> DeleteWorkspaceUseCase:
    return DeleteWorkspaceUseCase(
        get_workspace_repository(), get_file_repository(), get_blob_store()
    )


def get_join_workspace_use_case() -> JoinWorkspaceUseCase:
    return JoinWorkspaceUseCase(get_workspace_repository())


def get_invite_member_use_case() -> InviteMemberUseCase:
    return InviteMemberUseCase(get_workspace_repository(), get_identity_provider())


def get_set_member_role_use_case() -> SetMemberRoleUseCase:
    return SetMemberRoleUseCase(get_workspace_repository())


def get_remove_member_use_case() -> RemoveMemberUseCase:
    return RemoveMemberUseCase(get_workspace_repository())


def get_list_members_use_case() -> ListMembersUseCase:
    return ListMembersUseCase(get_workspace_repository(), get_user_repository())


# =============================================================================
# Casos de uso: Archivos
# =============================================================================


def get_upload_file_use_case() -> UploadFileUseCase:
    settings = get_settings()
    return UploadFileUseCase(
        get_file_repository(),
        get_workspace_repository(),
        get_blob_store(),
        anonymous_ttl=timedelta(hours=settings.anonymous_ttl_hours),
        share_id_bytes=settings.share_id_bytes,
        max_name_chars=settings.max_name_chars,
    )


def get_list_files_use_case() -> ListFilesUseCase:
    return ListFilesUseCase(get_file_repository(), get_workspace_repository())


def get_download_file_use_case() -> DownloadFileUseCase:
    return DownloadFileUseCase(
        get_file_repository(), get_workspace_repository(), get_blob_store()
    )


def get_update_file_use_case() -> UpdateFileUseCase:
    return UpdateFileUseCase(
        get_file_repository(),
        get_workspace_repository(),
        max_name_chars=get_settings().max_name_chars,
    )


def get_soft_delete_file_use_case() -> SoftDeleteFileUseCase:
    return SoftDeleteFileUseCase(get_file_repository(), get_workspace_repository())


def get_restore_file_use_case() -> RestoreFileUseCase:
    return RestoreFileUseCase(get_file_repository(), get_workspace_repository())


def get_purge_file_use_case() -> PurgeFileUseCase:
    return PurgeFileUseCase(
        get_file_repository(), get_workspace_repository(), get_blob_store()
    )


def get_get_share_use_case() -> GetShareUseCase:
    return GetShareUseCase(get_file_repository(), get_workspace_repository())


def get_resolve_shared_file_use_case() -> ResolveSharedFileUseCase:
    return ResolveSharedFileUseCase(get_file_repository())


def get_download_shared_file_use_case() -> DownloadSharedFileUseCase:
    return DownloadSharedFileUseCase(get_file_repository(), get_blob_store())


# =============================================================================
# Tests
# =============================================================================


def reset_container() -> None:
    """Limpia singletons (y settings) para aislar tests."""
    for factory in (
        get_workspace_repository,
        get_file_repository,
        get_user_repository,
        get_blob_store,
        get_identity_provider,
        get_settings,
    ):
        factory.cache_clear()
