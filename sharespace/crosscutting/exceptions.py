"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Base común para errores internos que cruzan capas como excepción (hoy: storage,
identidad), con:
- error_code estable
- error_id para correlación con logs

Los errores de negocio NO usan excepciones: viajan como resultados tipados
(WorkspaceResult, FileResult, ...).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ShareSpaceError

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - infrastructure/storage/errors.py (StorageError hereda de acá)
  - api/exception_handlers.py
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class ShareSpaceError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "SHARESPACE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

