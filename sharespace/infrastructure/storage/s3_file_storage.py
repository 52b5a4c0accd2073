"""
===============================================================================
CRC CARD — infrastructure/storage/s3_file_storage.py
===============================================================================

Clase:
  S3BlobStore (Adapter)

Responsabilidades:
  - Implementar BlobStorePort contra S3-compatible (AWS S3 / MinIO).
  - Generar la clave del objeto (blob_ref) en put().
  - Encapsular boto3 (NO filtrar ClientError).

Colaboradores:
  - domain.services.BlobStorePort (port)
  - infrastructure.storage.errors (errores tipados)
  - boto3/botocore (SDK, oculto por este adapter)

Decisiones de diseño:
  - Validación fail-fast de config.
  - Lazy import de boto3/botocore.
  - Cliente inyectable para tests.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from ...crosscutting.logger import logger
from .errors import (
    StorageConfigurationError,
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}
_PERMISSION_CODES = {"AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch"}
_UNAVAILABLE_CODES = {"SlowDown", "RequestTimeout", "ServiceUnavailable", "503"}


@dataclass(frozen=True)
class S3Config:
    """
    Configuración del storage S3-compatible.

    Nota:
      - endpoint_url permite MinIO u otros S3 compatibles.
      - prefix agrupa los blobs bajo una "carpeta" del bucket.
    """

    bucket: str
    access_key: str
    secret_key: str
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    prefix: str = "blobs/"


class S3BlobStore:
    """Adapter S3-compatible: put / get / delete."""

    def __init__(self, config: S3Config, *, client=None) -> None:
        self._config = config
        self._bucket = (config.bucket or "").strip()

        if not self._bucket:
            raise StorageConfigurationError("S3 bucket es requerido.")
        if (
            not (config.access_key or "").strip()
            or not (config.secret_key or "").strip()
        ):
            raise StorageConfigurationError(
                "Credenciales S3 requeridas (access_key/secret_key)."
            )

        if client is not None:
            self._client = client
            return

        import boto3

        self._client = boto3.client(
            "s3",
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region or None,
            endpoint_url=config.endpoint_url or None,
        )

    # =========================================================================
    # API pública (Port)
    # =========================================================================

    def put(self, content: bytes, *, content_type: str | None = None) -> str:
        key = f"{self._config.prefix}{uuid4().hex}"
        effective_ct = (content_type or "application/octet-stream").strip()

        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=bytes(content),
                ContentType=effective_ct,
            )
        except Exception as exc:
            raise self._map_storage_error(exc, key=key, action="put") from exc
        return key

    def get(self, blob_ref: str) -> bytes:
        self._require_key(blob_ref)

        try:
            response = self._client.get_object(Bucket=self._bucket, Key=blob_ref)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except Exception as exc:
            raise self._map_storage_error(exc, key=blob_ref, action="get") from exc

    def delete(self, blob_ref: str) -> None:
        """Delete en S3 es idempotente: borrar algo inexistente no falla."""
        self._require_key(blob_ref)

        try:
            self._client.delete_object(Bucket=self._bucket, Key=blob_ref)
        except Exception as exc:
            raise self._map_storage_error(exc, key=blob_ref, action="delete") from exc

    # =========================================================================
    # Helpers privados
    # =========================================================================

    @staticmethod
    def _require_key(key: str) -> None:
        if not (key or "").strip():
            raise StorageError("key de storage es requerido.")

    def _map_storage_error(
        self, exc: Exception, *, key: str, action: str
    ) -> StorageError:
        """Traduce errores del SDK a errores del subsistema."""
        from botocore.exceptions import (
            ClientError,
            ConnectTimeoutError,
            EndpointConnectionError,
            ReadTimeoutError,
        )

        if isinstance(exc, StorageError):
            return exc

        if isinstance(
            exc, (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)
        ):
            logger.warning("Storage unavailable", extra={"action": action, "key": key})
            return StorageUnavailableError("Storage no disponible (timeout/conexión).")

        if isinstance(exc, ClientError):
            code = str((exc.response.get("Error") or {}).get("Code") or "")

            if code in _NOT_FOUND_CODES:
                return StorageNotFoundError(key)
            if code in _PERMISSION_CODES:
                return StoragePermissionError(
                    "Permiso/credenciales inválidas en storage."
                )
            if code in _UNAVAILABLE_CODES:
                return StorageUnavailableError("Storage temporalmente no disponible.")

            logger.error(
                "Storage ClientError",
                extra={"action": action, "key": key, "code": code},
            )
            return StorageError(f"Fallo de storage ({action}). code={code}")

        logger.error(
            "Storage error",
            exc_info=exc,
            extra={"action": action, "key": key},
        )
        return StorageError(f"Fallo de storage ({action}).", original_error=exc)
