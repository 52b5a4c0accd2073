"""
===============================================================================
TARJETA CRC — sharespace/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por bounded context para ser incluidos por el
      router principal.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .auth import router as auth_router
from .files import router as files_router
from .workspaces import router as workspaces_router

__all__ = [
    "auth_router",
    "files_router",
    "workspaces_router",
]
