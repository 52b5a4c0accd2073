"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para registro / login / perfil

Responsabilidades:
    - DTOs de request/response de /auth (incluye edición de perfil).
    - Normalizar email (strip + lower) antes de llegar a identity.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProfileFields(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        value = v.strip().lower()
        local, _, domain = value.partition("@")
        if not local or "." not in domain or " " in value or "@" in domain:
            raise ValueError("email inválido")
        return value

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        value = v.strip()
        if not value:
            raise ValueError("name no puede estar vacío")
        return value


class RegisterReq(ProfileFields):
    password: str = Field(..., min_length=8, max_length=512)


class UpdateProfileReq(ProfileFields):
    """PUT /auth/me: ambos campos obligatorios."""


class LoginReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRes(BaseModel):
    id: UUID
    email: str
    name: str
    is_active: bool
    created_at: datetime | None = None


class LoginRes(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes
