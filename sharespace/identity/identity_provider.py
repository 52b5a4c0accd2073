"""
===============================================================================
TARJETA CRC — identity/identity_provider.py
===============================================================================

Clase:
    TokenIdentityProvider (implementa domain.services.IdentityProviderPort)

Responsabilidades:
    - verify(credential): JWT -> user_id de un usuario existente y activo.
    - resolve_email(email): email -> user_id (para invitaciones).

Colaboradores:
    - identity.auth_users: decode_access_token / InvalidCredentialError
    - domain.repositories.UserRepository
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ..domain.repositories import UserRepository
from .auth_users import AuthSettings, InvalidCredentialError, decode_access_token
from .users import normalize_email


class TokenIdentityProvider:
    def __init__(
        self,
        user_repository: UserRepository,
        auth_settings: AuthSettings | None = None,
    ) -> None:
        self._users = user_repository
        self._auth_settings = auth_settings

    def verify(self, credential: str) -> UUID:
        payload = decode_access_token(credential, self._auth_settings)
        user = self._users.get_user(payload.user_id)
        if user is None or not user.is_active:
            raise InvalidCredentialError("Token inválido.")
        return user.id

    def resolve_email(self, email: str) -> UUID | None:
        user = self._users.get_user_by_email(normalize_email(email))
        if user is None or not user.is_active:
            return None
        return user.id
