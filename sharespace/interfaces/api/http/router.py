"""
===============================================================================
TARJETA CRC — interfaces/api/http/router.py
===============================================================================

Responsabilidades:
  - Armar el APIRouter raíz de ShareSpace (auth, workspaces, files).
  - Documentar en OpenAPI las respuestas problem+json comunes.

Notas:
  - api/main.py lo monta con prefix="/api".
  - Orden de inclusión = orden de tags en /docs.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import auth_router, files_router, workspaces_router

_SUBROUTERS = (auth_router, workspaces_router, files_router)


def build_router() -> APIRouter:
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    for subrouter in _SUBROUTERS:
        api_router.include_router(subrouter)
    return api_router


__all__ = ["build_router"]
