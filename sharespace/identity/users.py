"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelo de Usuario

Responsabilidades:
    - Definir el dataclass User utilizado por registro/login/token.
    - Mantener el contrato de datos de identidad centralizado y estable.

Colaboradores:
    - identity/auth_users.py: hashea contraseñas y emite/valida JWT.
    - infrastructure/repositories/in_memory/user.py: persiste User.
    - identity/identity_provider.py: resuelve email -> user_id.

Notas:
    - Sin roles globales: los roles viven por workspace (domain.entities.Role).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario."""

    id: UUID
    email: str
    name: str
    password_hash: str
    is_active: bool = True
    created_at: datetime | None = None
