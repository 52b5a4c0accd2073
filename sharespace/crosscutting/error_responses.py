"""
===============================================================================
TARJETA CRC — crosscutting/error_responses.py (Problem Details / RFC 7807)
===============================================================================

Responsabilidades:
  - Catálogo cerrado de códigos de error de la API (ErrorCode) y su status HTTP.
  - Payload application/problem+json (ErrorDetail) con request_id adjunto.
  - Factories por código: lo que usa error_mapping para traducir resultados
    de casos de uso (incluye 410 para archivos anónimos expirados).
  - Handler FastAPI para AppHTTPException.

Colaboradores:
  - crosscutting/middleware.py (request.state.request_id)
  - interfaces/api/http/error_mapping.py
  - api/exception_handlers.py (registro en la app)

Notas:
  - El cliente decide por `code`, nunca por el texto de `detail`.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    EXPIRED_RESOURCE = "EXPIRED_RESOURCE"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_CODE[self]


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.EXPIRED_RESOURCE: 410,
    ErrorCode.PAYLOAD_TOO_LARGE: 413,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.STORAGE_ERROR: 503,
}


class ErrorDetail(BaseModel):
    """Problem Details + `code` estable + `errors` opcionales (loc/msg, request_id)."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


def _openapi_error(code: ErrorCode) -> dict[str, Any]:
    return {
        "description": f"{code.value} (problem+json)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


# Documentación OpenAPI compartida por todos los routers
OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code.status_code: _openapi_error(code)
    for code in ErrorCode
    if code is not ErrorCode.INTERNAL_ERROR
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode estable y detalles opcionales."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors

    @classmethod
    def of(
        cls,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ) -> "AppHTTPException":
        return cls(code.status_code, code, detail, errors, headers)


# ---------------------------------------------------------------------------
# Factories (una por código)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.VALIDATION_ERROR, detail, errors)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException.of(
        ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


def forbidden(detail: str = "No tenés permiso para esta operación") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.FORBIDDEN, detail)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException.of(
        ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no existe"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.CONFLICT, detail)


def gone(detail: str = "El link expiró") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.EXPIRED_RESOURCE, detail)


def payload_too_large(max_size: str) -> AppHTTPException:
    return AppHTTPException.of(
        ErrorCode.PAYLOAD_TOO_LARGE, f"El archivo supera el límite de {max_size}"
    )


def storage_unavailable(
    detail: str = "El almacenamiento de archivos no responde",
) -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.STORAGE_ERROR, detail)


def internal_error(detail: str = "Error interno") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handler FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Serializa AppHTTPException como problem+json (propaga headers, ej. WWW-Authenticate)."""
    errors = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        errors.append({"request_id": request_id})

    slug = exc.code.value.lower().replace("_", "-")
    problem = ErrorDetail(
        type=f"urn:sharespace:problem:{slug}",
        title=exc.code.value.replace("_", " ").capitalize(),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=request.url.path,
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
