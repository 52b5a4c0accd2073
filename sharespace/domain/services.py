"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para colaboradores externos (Blob Store / Identity).
    - Proteger a application de detalles del proveedor (boto3, JWT, disco).

Colaboradores:
    - infrastructure/storage/*: implementaciones de BlobStorePort.
    - identity/identity_provider.py: implementación de IdentityProviderPort.
    - application/usecases: consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
    - Errores del Blob Store: StorageError (y subclases), nunca SDK.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID


class BlobStorePort(Protocol):
    """Contrato para guardar/leer bytes opacos."""

    def put(self, content: bytes, *, content_type: str | None = None) -> str:
        """Guarda bytes y devuelve una referencia opaca (blob_ref)."""
        ...

    def get(self, blob_ref: str) -> bytes:
        """Lee bytes. StorageNotFoundError si no existe."""
        ...

    def delete(self, blob_ref: str) -> None:
        """Borra bytes (idempotente)."""
        ...


class IdentityProviderPort(Protocol):
    """Contrato de identidad (verificación de credenciales + lookup por email)."""

    def verify(self, credential: str) -> UUID:
        """UUID del usuario, o InvalidCredentialError."""
        ...

    def resolve_email(self, email: str) -> UUID | None:
        ...
