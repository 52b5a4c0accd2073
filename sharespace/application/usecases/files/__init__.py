"""
===============================================================================
FILE USE CASES PACKAGE (Public API / Exports)
===============================================================================

Business Goal:
    Punto único de importación para el ciclo de vida de archivos:
    upload, listados, descarga, rename/move, papelera, purge y share links.
===============================================================================
"""

from __future__ import annotations

from .download_file import DownloadFileUseCase
from .file_access import authorize_file_action, load_file_for
from .file_results import (
    FileContentResult,
    FileError,
    FileErrorCode,
    FileListResult,
    FileResult,
    PurgeResult,
    ShareResult,
)
from .list_files import ListFilesUseCase
from .purge_file import PurgeFileUseCase
from .restore_file import RestoreFileUseCase
from .share_links import (
    DownloadSharedFileUseCase,
    GetShareUseCase,
    ResolveSharedFileUseCase,
    new_share_id,
)
from .soft_delete_file import SoftDeleteFileUseCase
from .update_file import UpdateFileInput, UpdateFileUseCase
from .upload_file import UploadFileInput, UploadFileUseCase, normalize_folder

__all__ = [
    # Use Cases
    "DownloadFileUseCase",
    "DownloadSharedFileUseCase",
    "GetShareUseCase",
    "ListFilesUseCase",
    "PurgeFileUseCase",
    "ResolveSharedFileUseCase",
    "RestoreFileUseCase",
    "SoftDeleteFileUseCase",
    "UpdateFileInput",
    "UpdateFileUseCase",
    "UploadFileInput",
    "UploadFileUseCase",
    # Helpers
    "authorize_file_action",
    "load_file_for",
    "new_share_id",
    "normalize_folder",
    # Results
    "FileContentResult",
    "FileError",
    "FileErrorCode",
    "FileListResult",
    "FileResult",
    "PurgeResult",
    "ShareResult",
]
