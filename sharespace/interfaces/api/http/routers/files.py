"""
===============================================================================
TARJETA CRC — sharespace/interfaces/api/http/routers/files.py
===============================================================================

Class/Module:
    Files Router

Responsibilities:
    - Upload anónimo y a workspace (multipart, con límite de tamaño).
    - Listados (activos / papelera), descarga, rename/move.
    - Ciclo de vida: soft-delete, restore, purge.
    - Share links: obtener share_id, descargar y consultar metadata pública.

Collaborators:
    - sharespace.application.usecases.files
    - sharespace.identity.current_user (require_user, optional_user)
    - dependencies (read_upload_bytes, sanitize_filename, content_disposition)
    - error_mapping.raise_file_error

Notas:
    - /files/share/{share_id} se registra ANTES de /files/{file_id}.
    - Lecturas aceptan anónimos (workspaces públicos, archivos anónimos);
      mutaciones exigen usuario autenticado.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile

from .....application.usecases.files import (
    DownloadFileUseCase,
    DownloadSharedFileUseCase,
    GetShareUseCase,
    ListFilesUseCase,
    PurgeFileUseCase,
    ResolveSharedFileUseCase,
    RestoreFileUseCase,
    SoftDeleteFileUseCase,
    UpdateFileInput,
    UpdateFileUseCase,
    UploadFileInput,
    UploadFileUseCase,
)
from .....container import (
    get_download_file_use_case,
    get_download_shared_file_use_case,
    get_get_share_use_case,
    get_list_files_use_case,
    get_purge_file_use_case,
    get_resolve_shared_file_use_case,
    get_restore_file_use_case,
    get_soft_delete_file_use_case,
    get_update_file_use_case,
    get_upload_file_use_case,
)
from .....domain.entities import StoredFile
from .....identity.current_user import optional_user, require_user
from .....identity.users import User
from ..dependencies import (
    build_share_url,
    content_disposition,
    read_upload_bytes,
    sanitize_filename,
)
from ..error_mapping import raise_file_error
from ..schemas.files import (
    FileRes,
    FilesListRes,
    PurgeFileRes,
    ShareRes,
    SharedFileInfoRes,
    UpdateFileReq,
    UploadFileRes,
)

router = APIRouter(tags=["files"])


# =============================================================================
# Helpers internos
# =============================================================================


def _user_id(user: User | None) -> UUID | None:
    return user.id if user is not None else None


def _to_file_res(stored_file: StoredFile) -> FileRes:
    return FileRes(
        id=stored_file.id,
        name=stored_file.name,
        content_type=stored_file.content_type,
        size=stored_file.size,
        folder=stored_file.folder,
        workspace_id=stored_file.workspace_id,
        uploader_id=stored_file.uploader_id,
        state=stored_file.state,
        uploaded_at=stored_file.uploaded_at,
        deleted_at=stored_file.deleted_at,
        expires_at=stored_file.expires_at,
        version_count=len(stored_file.versions),
    )


def _download_response(stored_file: StoredFile, content: bytes) -> Response:
    return Response(
        content=content,
        media_type=stored_file.content_type,
        headers={"Content-Disposition": content_disposition(stored_file.name)},
    )


async def _upload(
    use_case: UploadFileUseCase,
    file: UploadFile,
    *,
    actor_id: UUID | None,
    workspace_id: UUID | None = None,
    folder: str | None = None,
):
    content = await read_upload_bytes(file)
    result = use_case.execute(
        UploadFileInput(
            content=content,
            filename=sanitize_filename(file.filename),
            content_type=file.content_type,
            actor_id=actor_id,
            workspace_id=workspace_id,
            folder=folder,
        )
    )
    if result.error is not None:
        raise_file_error(result.error, workspace_id=workspace_id)
    return result


# =============================================================================
# Uploads
# =============================================================================


@router.post("/files/anonymous", response_model=UploadFileRes, status_code=201)
async def upload_anonymous(
    request: Request,
    file: UploadFile = File(...),
    use_case: UploadFileUseCase = Depends(get_upload_file_use_case),
    user: User | None = Depends(optional_user()),
):
    """Upload sin workspace: expira y devuelve el share link."""
    result = await _upload(use_case, file, actor_id=_user_id(user))
    stored_file = result.file
    return UploadFileRes(
        **_to_file_res(stored_file).model_dump(),
        versioned=result.versioned,
        share_id=stored_file.share_id,
        share_url=build_share_url(request, stored_file.share_id),
    )


@router.post(
    "/files/workspace/{workspace_id}", response_model=UploadFileRes, status_code=201
)
async def upload_to_workspace(
    workspace_id: UUID,
    file: UploadFile = File(...),
    folder: str | None = Form(None),
    use_case: UploadFileUseCase = Depends(get_upload_file_use_case),
    user: User = Depends(require_user()),
):
    result = await _upload(
        use_case, file, actor_id=user.id, workspace_id=workspace_id, folder=folder
    )
    return UploadFileRes(
        **_to_file_res(result.file).model_dump(), versioned=result.versioned
    )


# =============================================================================
# Listados
# =============================================================================


@router.get("/files/workspace/{workspace_id}", response_model=FilesListRes)
def list_workspace_files(
    workspace_id: UUID,
    folder: str | None = Query(None),
    use_case: ListFilesUseCase = Depends(get_list_files_use_case),
    user: User | None = Depends(optional_user()),
):
    result = use_case.execute(workspace_id, _user_id(user), folder=folder)
    if result.error is not None:
        raise_file_error(result.error, workspace_id=workspace_id)
    return FilesListRes(files=[_to_file_res(f) for f in result.files])


@router.get("/files/workspace/{workspace_id}/deleted", response_model=FilesListRes)
def list_deleted_files(
    workspace_id: UUID,
    use_case: ListFilesUseCase = Depends(get_list_files_use_case),
    user: User | None = Depends(optional_user()),
):
    """Papelera del workspace."""
    result = use_case.execute(workspace_id, _user_id(user), deleted=True)
    if result.error is not None:
        raise_file_error(result.error, workspace_id=workspace_id)
    return FilesListRes(files=[_to_file_res(f) for f in result.files])


# =============================================================================
# Share links (públicos)
# =============================================================================


@router.get("/files/share/{share_id}", name="download_shared_file")
def download_shared_file(
    share_id: str,
    use_case: DownloadSharedFileUseCase = Depends(get_download_shared_file_use_case),
):
    result = use_case.execute(share_id)
    if result.error is not None:
        raise_file_error(result.error, file_id=share_id)
    return _download_response(result.file, result.content)


@router.get("/files/share/{share_id}/info", response_model=SharedFileInfoRes)
def shared_file_info(
    share_id: str,
    use_case: ResolveSharedFileUseCase = Depends(get_resolve_shared_file_use_case),
):
    result = use_case.execute(share_id)
    if result.error is not None:
        raise_file_error(result.error, file_id=share_id)
    stored_file = result.file
    return SharedFileInfoRes(
        name=stored_file.name,
        content_type=stored_file.content_type,
        size=stored_file.size,
        uploaded_at=stored_file.uploaded_at,
        expires_at=stored_file.expires_at,
    )


# =============================================================================
# Archivo individual
# =============================================================================


@router.get("/files/{file_id}")
def download_file(
    file_id: UUID,
    use_case: DownloadFileUseCase = Depends(get_download_file_use_case),
    user: User | None = Depends(optional_user()),
):
    result = use_case.execute(file_id, _user_id(user))
    if result.error is not None:
        raise_file_error(result.error, file_id=file_id)
    return _download_response(result.file, result.content)


@router.put("/files/{file_id}", response_model=FileRes)
def update_file(
    file_id: UUID,
    req: UpdateFileReq,
    use_case: UpdateFileUseCase = Depends(get_update_file_use_case),
    user: User = Depends(require_user()),
):
    """Rename y/o move dentro del workspace."""
    result = use_case.execute(
        UpdateFileInput(
            file_id=file_id, actor_id=user.id, name=req.name, folder=req.folder
        )
    )
    if result.error is not None:
        raise_file_error(result.error, file_id=file_id)
    return _to_file_res(result.file)


@router.delete("/files/{file_id}", response_model=FileRes)
def soft_delete_file(
    file_id: UUID,
    use_case: SoftDeleteFileUseCase = Depends(get_soft_delete_file_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(file_id, user.id)
    if result.error is not None:
        raise_file_error(result.error, file_id=file_id)
    return _to_file_res(result.file)


@router.put("/files/{file_id}/restore", response_model=FileRes)
def restore_file(
    file_id: UUID,
    use_case: RestoreFileUseCase = Depends(get_restore_file_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(file_id, user.id)
    if result.error is not None:
        raise_file_error(result.error, file_id=file_id)
    return _to_file_res(result.file)


@router.delete("/files/{file_id}/permanent", response_model=PurgeFileRes)
def purge_file(
    file_id: UUID,
    use_case: PurgeFileUseCase = Depends(get_purge_file_use_case),
    user: User = Depends(require_user()),
):
    result = use_case.execute(file_id, user.id)
    if result.error is not None:
        raise_file_error(result.error, file_id=file_id)
    return PurgeFileRes(
        file_id=file_id, purged=result.purged, storage_cleaned=result.storage_cleaned
    )


@router.get("/files/{file_id}/share", response_model=ShareRes)
def get_share(
    request: Request,
    file_id: UUID,
    use_case: GetShareUseCase = Depends(get_get_share_use_case),
    user: User | None = Depends(optional_user()),
):
    result = use_case.execute(file_id, _user_id(user))
    if result.error is not None:
        raise_file_error(result.error, file_id=file_id)
    return ShareRes(
        file_id=file_id,
        share_id=result.share_id,
        share_url=build_share_url(request, result.share_id),
    )
