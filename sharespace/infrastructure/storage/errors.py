"""
===============================================================================
CRC CARD — infrastructure/storage/errors.py
===============================================================================

Componente:
  Errores tipados del Blob Store (local / S3 / memoria)

Responsabilidades:
  - Definir un lenguaje común de fallas del subsistema de almacenamiento.
  - Evitar que excepciones de boto3/botocore u OSError se filtren hacia arriba.
  - Permitir manejo consistente (status codes, logs).

Colaboradores:
  - infrastructure/storage/*.py (mapean errores nativos -> StorageError)
  - application/usecases/files (STORAGE_ERROR / best-effort en purge)
  - api/exception_handlers.py (fallback 503)
===============================================================================
"""

from ...crosscutting.exceptions import ShareSpaceError


class StorageError(ShareSpaceError):
    """Base de errores del subsistema de Storage."""

    error_code: str = "STORAGE_ERROR"


class StorageConfigurationError(StorageError):
    """Configuración inválida o incompleta del adaptador de storage."""


class StorageNotFoundError(StorageError):
    """Objeto no encontrado (ej: NoSuchKey / archivo inexistente en disco)."""

    def __init__(self, key: str):
        super().__init__(f"Archivo no encontrado en storage. key={key}")
        self.key = key


class StoragePermissionError(StorageError):
    """Credenciales inválidas o falta de permisos (ej: AccessDenied / EACCES)."""

    def __init__(self, message: str = "Permiso denegado en storage."):
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """Storage caído o temporalmente no disponible (timeouts, 503, disco lleno)."""

    def __init__(self, message: str = "Storage no disponible."):
        super().__init__(message)
