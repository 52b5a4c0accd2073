"""Adapters de infraestructura: Blob Store."""

from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)
from .in_memory import InMemoryBlobStore
from .local_file_storage import LocalBlobStore
from .s3_file_storage import S3BlobStore, S3Config

__all__ = [
    "InMemoryBlobStore",
    "LocalBlobStore",
    "S3BlobStore",
    "S3Config",
    "StorageError",
    "StorageConfigurationError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageUnavailableError",
]
