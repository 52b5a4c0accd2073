"""
===============================================================================
USE CASE: Upload File (anónimo o a workspace)
===============================================================================

Name:
    Upload File Use Case

Business Goal:
    Guardar bytes en el Blob Store y registrar la metadata:
      - anónimo: sin workspace, expira a las `anonymous_ttl` del upload
      - workspace: requiere UPLOAD (cualquier miembro), carpeta por defecto "/"
      - re-upload sobre (workspace, carpeta, nombre) activo: versiona

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UploadFileUseCase

Responsibilities:
    - Validar nombre y carpeta.
    - Autorizar contra el workspace destino.
    - put() en Blob Store; ante StorageError => STORAGE_ERROR.
    - Versionar (mutate_file) o crear registro con share_id único.
    - Deshacer el alta si el workspace se borró en paralelo.

Collaborators:
    - WorkspaceRepository / FileRepository / BlobStorePort
    - share_links.new_share_id

Error Mapping:
    - VALIDATION_ERROR: nombre vacío/largo, carpeta inválida
    - NOT_FOUND / FORBIDDEN: workspace inexistente / actor sin UPLOAD
    - STORAGE_ERROR: el Blob Store rechazó los bytes
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import StoredFile, utcnow
from ....domain.permissions import Action
from ....domain.repositories import FileRepository, WorkspaceRepository
from ....domain.services import BlobStorePort
from ....infrastructure.storage.errors import StorageError
from ..workspace.workspace_access import resolve_workspace_for
from .file_access import conflict_error, storage_error, validation_error
from .file_results import FileError, FileErrorCode, FileResult, from_workspace_error
from .share_links import DEFAULT_SHARE_ID_BYTES, new_share_id

DEFAULT_CONTENT_TYPE = "application/octet-stream"
ROOT_FOLDER = "/"
_MAX_SHARE_ID_ATTEMPTS = 5
_STALE = object()


def normalize_folder(folder: str | None) -> tuple[str, FileError | None]:
    """
    "/" por defecto; siempre con "/" inicial y sin "/" final.

    Ejemplos: None -> "/", "docs/" -> "/docs", "/a//b" -> "/a/b".
    """
    raw = (folder or "").strip()
    parts = [p for p in raw.replace("\\", "/").split("/") if p]
    if any(p in {".", ".."} for p in parts):
        return "", validation_error("Folder must not contain '.' or '..' segments.")
    return ROOT_FOLDER + "/".join(parts), None


@dataclass(frozen=True)
class UploadFileInput:
    content: bytes
    filename: str
    content_type: str | None = None
    actor_id: UUID | None = None
    workspace_id: UUID | None = None
    folder: str | None = None


class UploadFileUseCase:
    def __init__(
        self,
        file_repository: FileRepository,
        workspace_repository: WorkspaceRepository,
        blob_store: BlobStorePort,
        *,
        anonymous_ttl: timedelta = timedelta(hours=24),
        share_id_bytes: int = DEFAULT_SHARE_ID_BYTES,
        max_name_chars: int = 255,
        share_id_factory: Callable[[int], str] = new_share_id,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._files = file_repository
        self._workspaces = workspace_repository
        self._blobs = blob_store
        self._anonymous_ttl = anonymous_ttl
        self._share_id_bytes = share_id_bytes
        self._max_name_chars = max_name_chars
        self._share_id_factory = share_id_factory
        self._clock = clock

    def execute(self, input_data: UploadFileInput) -> FileResult:
        # ---------------------------------------------------------------------
        # 1) Validar input.
        # ---------------------------------------------------------------------
        name = (input_data.filename or "").strip()
        if not name:
            return FileResult(error=validation_error("File name is required."))
        if len(name) > self._max_name_chars:
            return FileResult(
                error=validation_error(
                    f"File name must be at most {self._max_name_chars} characters."
                )
            )

        folder, error = normalize_folder(input_data.folder)
        if error is not None:
            return FileResult(error=error)

        # ---------------------------------------------------------------------
        # 2) Autorizar destino (sólo uploads a workspace).
        # ---------------------------------------------------------------------
        if input_data.workspace_id is not None:
            _, ws_error = resolve_workspace_for(
                workspace_id=input_data.workspace_id,
                actor_id=input_data.actor_id,
                action=Action.UPLOAD,
                workspace_repository=self._workspaces,
            )
            if ws_error is not None:
                return FileResult(error=from_workspace_error(ws_error))

        # ---------------------------------------------------------------------
        # 3) Bytes al Blob Store.
        # ---------------------------------------------------------------------
        content_type = (input_data.content_type or "").strip() or DEFAULT_CONTENT_TYPE
        try:
            blob_ref = self._blobs.put(input_data.content, content_type=content_type)
        except StorageError as exc:
            logger.error(
                "file.upload.storage_failed",
                extra={"error": exc.message, "error_id": exc.error_id},
            )
            return FileResult(error=storage_error("Could not store file content."))

        now = self._clock()
        size = len(input_data.content)

        # ---------------------------------------------------------------------
        # 4) Re-upload: versionar el archivo activo en la misma ruta.
        # ---------------------------------------------------------------------
        if input_data.workspace_id is not None:
            versioned = self._replace_existing(
                input_data, name, folder, blob_ref, size, content_type, now
            )
            if versioned is not None:
                return FileResult(file=versioned, versioned=True)

        # ---------------------------------------------------------------------
        # 5) Alta de registro nuevo (share_id único).
        # ---------------------------------------------------------------------
        is_anonymous = input_data.workspace_id is None
        for _ in range(_MAX_SHARE_ID_ATTEMPTS):
            stored_file = StoredFile(
                id=uuid4(),
                name=name,
                content_type=content_type,
                size=size,
                blob_ref=blob_ref,
                share_id=self._share_id_factory(self._share_id_bytes),
                uploaded_at=now,
                workspace_id=input_data.workspace_id,
                folder=ROOT_FOLDER if is_anonymous else folder,
                uploader_id=input_data.actor_id,
                expires_at=now + self._anonymous_ttl if is_anonymous else None,
            )
            if self._files.add_file(stored_file):
                if self._orphaned(stored_file):
                    return FileResult(
                        error=FileError(
                            code=FileErrorCode.NOT_FOUND,
                            message="Workspace not found.",
                            resource="Workspace",
                        )
                    )
                logger.info(
                    "file.uploaded",
                    extra={
                        "file_id": str(stored_file.id),
                        "workspace_id": str(stored_file.workspace_id or ""),
                        "anonymous": is_anonymous,
                        "size_bytes": size,
                    },
                )
                return FileResult(file=stored_file)

        self._discard_blob(blob_ref)
        return FileResult(error=conflict_error("Could not allocate a unique share id."))

    # =========================================================================
    # Helpers privados
    # =========================================================================

    def _replace_existing(
        self,
        input_data: UploadFileInput,
        name: str,
        folder: str,
        blob_ref: str,
        size: int,
        content_type: str,
        now: datetime,
    ) -> StoredFile | None:
        existing = self._files.find_active_at_path(
            input_data.workspace_id, folder, name
        )
        if existing is None:
            return None

        def mutation(draft: StoredFile):
            # La ruta pudo cambiar (rename/move/soft-delete) desde la búsqueda
            if draft.is_deleted or draft.folder != folder or draft.name != name:
                return _STALE
            draft.replace_content(
                blob_ref=blob_ref,
                size=size,
                content_type=content_type,
                uploader_id=input_data.actor_id,
                at=now,
            )
            return None

        updated, rejection = self._files.mutate_file(existing.id, mutation)
        if updated is None or rejection is not None:
            return None

        logger.info(
            "file.versioned",
            extra={
                "file_id": str(updated.id),
                "workspace_id": str(updated.workspace_id),
                "versions": len(updated.versions),
            },
        )
        return updated

    def _orphaned(self, stored_file: StoredFile) -> bool:
        """
        Re-chequeo post-alta: el workspace pudo borrarse entre la autorización
        y add_file. DeleteWorkspace quita el workspace antes de barrer sus
        archivos, así que un alta posterior al barrido se deshace acá.
        """
        if stored_file.workspace_id is None:
            return False
        if self._workspaces.get_workspace(stored_file.workspace_id) is not None:
            return False

        removed, _ = self._files.delete_file(stored_file.id)
        if removed is not None:
            # Si el barrido llegó antes, el blob ya fue liberado ahí
            self._discard_blob(stored_file.blob_ref)
        logger.warning(
            "file.upload.workspace_gone",
            extra={
                "file_id": str(stored_file.id),
                "workspace_id": str(stored_file.workspace_id),
            },
        )
        return True

    def _discard_blob(self, blob_ref: str) -> None:
        try:
            self._blobs.delete(blob_ref)
        except StorageError as exc:
            logger.warning(
                "file.upload.blob_cleanup_failed",
                extra={"blob_ref": blob_ref, "error": exc.message},
            )
