"""
===============================================================================
TARJETA CRC — identity/current_user.py
===============================================================================

Módulo:
    Dependencias FastAPI de usuario actual

Responsabilidades:
    - require_user(): 401 si no hay token válido.
    - optional_user(): permite anónimos (share links, upload anónimo, lectura
      de workspaces públicos); un token presente pero inválido sigue siendo 401.
    - Registrar user_id en el contexto de logs.

Colaboradores:
    - container.get_identity_provider / get_user_repository
    - identity.auth_users.extract_access_token
    - crosscutting.error_responses.unauthorized
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Header, Request

from ..container import get_identity_provider, get_user_repository
from ..context import set_user_context
from ..crosscutting.error_responses import unauthorized
from .auth_users import InvalidCredentialError, extract_access_token
from .users import User


def _resolve_user(token: str) -> User:
    try:
        user_id = get_identity_provider().verify(token)
    except InvalidCredentialError as exc:
        raise unauthorized(exc.message) from exc

    user = get_user_repository().get_user(user_id)
    if user is None:
        raise unauthorized("Token inválido.")
    set_user_context(str(user.id))
    return user


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> User:
        token = extract_access_token(request, authorization)
        if not token:
            raise unauthorized("Falta token Bearer.")
        user = _resolve_user(token)
        request.state.user = user
        return user

    return dependency


def optional_user() -> Callable:
    """Dependency FastAPI: usuario si hay token, None si es anónimo."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> User | None:
        token = extract_access_token(request, authorization)
        if not token:
            return None
        user = _resolve_user(token)
        request.state.user = user
        return user

    return dependency
