"""
===============================================================================
CRC CARD — infrastructure/storage/local_file_storage.py
===============================================================================

Clase:
  LocalBlobStore (Adapter)

Responsabilidades:
  - Implementar BlobStorePort sobre el filesystem local (backend por defecto).
  - Distribuir blobs en subdirectorios <root>/<ab>/<abcdef...> para no
    saturar un único directorio.
  - Traducir OSError -> StorageError.

Colaboradores:
  - domain.services.BlobStorePort (port)
  - infrastructure.storage.errors
===============================================================================
"""

from __future__ import annotations

import errno
import os
import re
from pathlib import Path
from uuid import uuid4

from ...crosscutting.logger import logger
from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)

# blob_ref = uuid4().hex: 32 hex chars; cualquier otra cosa se rechaza
_BLOB_REF_RE = re.compile(r"^[0-9a-f]{32}$")


class LocalBlobStore:
    def __init__(self, root: str | os.PathLike) -> None:
        if not str(root).strip():
            raise StorageConfigurationError("storage_root es requerido.")
        self._root = Path(root).resolve()
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageConfigurationError(
                f"No se pudo crear storage_root: {self._root}"
            ) from exc

    @property
    def root(self) -> Path:
        return self._root

    def put(self, content: bytes, *, content_type: str | None = None) -> str:
        blob_ref = uuid4().hex
        path = self._path_for(blob_ref)
        tmp_path = path.with_suffix(".part")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(bytes(content))
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise self._map_os_error(exc, key=blob_ref, action="put") from exc
        return blob_ref

    def get(self, blob_ref: str) -> bytes:
        path = self._path_for(blob_ref)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise self._map_os_error(exc, key=blob_ref, action="get") from exc

    def delete(self, blob_ref: str) -> None:
        path = self._path_for(blob_ref)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise self._map_os_error(exc, key=blob_ref, action="delete") from exc

    def _path_for(self, blob_ref: str) -> Path:
        if not _BLOB_REF_RE.match(blob_ref or ""):
            raise StorageNotFoundError(blob_ref)
        return self._root / blob_ref[:2] / blob_ref

    @staticmethod
    def _map_os_error(exc: OSError, *, key: str, action: str) -> StorageError:
        if isinstance(exc, FileNotFoundError):
            return StorageNotFoundError(key)
        if isinstance(exc, PermissionError):
            return StoragePermissionError()
        if exc.errno in (errno.ENOSPC, errno.EIO, errno.EROFS):
            logger.warning(
                "Storage unavailable", extra={"action": action, "key": key}
            )
            return StorageUnavailableError()
        logger.error(
            "Storage error", exc_info=exc, extra={"action": action, "key": key}
        )
        return StorageError(f"Fallo de storage ({action}).", original_error=exc)
