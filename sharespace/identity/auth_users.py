"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (Argon2 + JWT)

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Registrar usuarios (email único) y autenticar credenciales.
    - Actualizar perfil (nombre + email, manteniendo unicidad de email).
    - Emitir JWT de acceso con expiración (access token).
    - Decodificar y validar JWT (firma, exp, claims mínimos).
    - Extraer token desde Authorization: Bearer o cookie.

Colaboradores:
    - crosscutting.config.get_settings: secreto, TTL, nombre de cookie.
    - domain.repositories.UserRepository: persistencia de User.
    - identity.users: User / normalize_email.

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - Funciones puras: los errores de token son InvalidCredentialError; la capa
      HTTP los traduce a 401 (identity/current_user.py).
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Request

from ..crosscutting.config import get_settings
from ..crosscutting.exceptions import ShareSpaceError
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .users import User, normalize_email

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"
DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"

_password_hasher = PasswordHasher()


class InvalidCredentialError(ShareSpaceError):
    """Token ausente, expirado, con firma inválida o de un usuario inexistente."""

    error_code: str = "UNAUTHORIZED"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Payload mínimo que esperamos de un access token."""

    user_id: UUID
    email: str


def get_auth_settings() -> AuthSettings:
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
    )


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Registro / login
# ---------------------------------------------------------------------------


def register_user(
    users: UserRepository, *, email: str, name: str, password: str
) -> User | None:
    """
    Crea un usuario activo.

    Retorna None si el email ya está registrado (el caller responde 409).
    """
    user = User(
        id=uuid4(),
        email=normalize_email(email),
        name=name.strip(),
        password_hash=hash_password(password),
        is_active=True,
        created_at=datetime.now(timezone.utc),
    )
    if not users.add_user(user):
        return None
    logger.info("user.registered", extra={"target_user_id": str(user.id)})
    return user


def update_profile(
    users: UserRepository, user: User, *, name: str, email: str
) -> User | None:
    """Cambia nombre y email. None si el email ya está en uso por otro usuario."""
    updated = replace(user, name=name.strip(), email=normalize_email(email))
    if not users.update_user(updated):
        return None
    logger.info("user.profile_updated", extra={"target_user_id": str(user.id)})
    return updated


def authenticate_user(users: UserRepository, email: str, password: str) -> User | None:
    """Valida credenciales y retorna el usuario activo o None.

    Seguridad:
        - No diferenciamos "usuario no existe" vs "password incorrecto".
    """
    normalized_email = normalize_email(email)
    if not normalized_email:
        return None

    user = users.get_user_by_email(normalized_email)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso firmado.

    Retorna:
        (token, expires_in_seconds)
    """
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(user.id),
        CLAIM_EMAIL: user.email,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """Decodifica y valida un JWT de acceso (InvalidCredentialError si falla)."""
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidCredentialError("Token expirado.", original_error=exc) from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidCredentialError("Token inválido.", original_error=exc) from exc

    token_type = payload.get(CLAIM_TYP)
    if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
        raise InvalidCredentialError("Tipo de token inválido.")

    try:
        user_id = UUID(str(payload[CLAIM_SUB]))
    except ValueError as exc:
        raise InvalidCredentialError("Token inválido.") from exc

    return TokenPayload(user_id=user_id, email=str(payload.get(CLAIM_EMAIL) or ""))


# ---------------------------------------------------------------------------
# Extracción de token (header/cookie)
# ---------------------------------------------------------------------------


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Resuelve token desde Authorization o cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token

    cookie_name = (
        get_auth_settings().jwt_cookie_name or ""
    ).strip() or DEFAULT_ACCESS_TOKEN_COOKIE
    return request.cookies.get(cookie_name)
