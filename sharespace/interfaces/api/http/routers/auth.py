"""
===============================================================================
TARJETA CRC — routers/auth.py (Registro, login y perfil)
===============================================================================

Responsabilidades:
  - Exponer endpoints de autenticación de usuario (register/login/me) con JWT.
  - Editar el perfil propio (PUT /auth/me; email único).
  - Setear cookie httpOnly con el access token (alternativa al header).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ identity.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - identity.auth_users: register_user, authenticate_user, create_access_token,
    update_profile
  - identity.current_user.require_user
  - container.get_user_repository
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from .....container import get_user_repository
from .....crosscutting.error_responses import conflict, unauthorized
from .....domain.repositories import UserRepository
from .....identity.auth_users import (
    authenticate_user,
    create_access_token,
    get_auth_settings,
    register_user,
    update_profile,
)
from .....identity.current_user import require_user
from .....identity.users import User
from ..schemas.auth import LoginReq, LoginRes, RegisterReq, UpdateProfileReq, UserRes

router = APIRouter(tags=["auth"])


def _to_user_res(user: User) -> UserRes:
    return UserRes(
        id=user.id,
        email=user.email,
        name=user.name,
        is_active=user.is_active,
        created_at=user.created_at,
    )


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    response.set_cookie(
        key=get_auth_settings().jwt_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


@router.post("/auth/register", response_model=UserRes, status_code=201)
def register(
    req: RegisterReq,
    users: UserRepository = Depends(get_user_repository),
):
    user = register_user(users, email=req.email, name=req.name, password=req.password)
    if user is None:
        raise conflict("El email ya está registrado.")
    return _to_user_res(user)


@router.post("/auth/login", response_model=LoginRes)
def login(
    req: LoginReq,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
):
    """Inicia sesión y devuelve JWT (también como cookie httpOnly)."""
    user = authenticate_user(users, req.email, req.password)
    if user is None:
        raise unauthorized("Credenciales inválidas.")

    token, expires_in = create_access_token(user)
    _set_auth_cookie(response, token, expires_in)
    return LoginRes(
        access_token=token, expires_in=expires_in, user=_to_user_res(user)
    )


@router.get("/auth/me", response_model=UserRes)
def me(user: User = Depends(require_user())):
    return _to_user_res(user)


@router.put("/auth/me", response_model=UserRes)
def update_me(
    req: UpdateProfileReq,
    user: User = Depends(require_user()),
    users: UserRepository = Depends(get_user_repository),
):
    """Actualiza nombre y email del usuario autenticado."""
    updated = update_profile(users, user, name=req.name, email=req.email)
    if updated is None:
        raise conflict("El email ya está en uso.")
    return _to_user_res(updated)
