"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Workspace, Membership, StoredFile, FileVersion)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples:
        * un único owner por workspace
        * membresía sin duplicados y ordenada por fecha de ingreso
        * anonymous ⇔ sin workspace ⇔ con expires_at
    - Proveer clone() para el esquema copy-on-write de los repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.permissions: decide acciones a partir de Role.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI/boto3.
    - Datos + comportamiento mínimo (las reglas de autorización viven en
      domain.permissions, no acá).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID


def utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class Role(str, Enum):
    """
    Rol de un miembro dentro de un workspace.

    Orden total por privilegio: viewer(0) < editor(1) < owner(2).
    """

    VIEWER = "viewer"
    EDITOR = "editor"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def at_least(self, other: "Role") -> bool:
        """True si este rol tiene igual o más privilegio que `other`."""
        return self.rank >= other.rank


_ROLE_RANK: Dict[Role, int] = {
    Role.VIEWER: 0,
    Role.EDITOR: 1,
    Role.OWNER: 2,
}


# ---------------------------------------------------------------------------
# Membership / Workspace
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Membership:
    """Vincula un usuario con un workspace (rol + fecha de ingreso)."""

    user_id: UUID
    role: Role
    joined_at: datetime


@dataclass
class Workspace:
    """
    Workspace: espacio de colaboración con membresía y un único owner.

    Importante:
      - `members` es un dict ordenado (user_id -> Membership). El orden de
        inserción ES el orden de ingreso; cambiar un rol no lo altera.
      - `access_code` es inmutable luego de la creación.
    """

    id: UUID
    name: str
    description: str
    access_code: str
    owner_id: UUID
    is_public: bool = False
    members: Dict[UUID, Membership] = field(default_factory=dict)

    # Auditoría
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # -- lecturas ------------------------------------------------------------

    def member(self, user_id: UUID | None) -> Membership | None:
        if user_id is None:
            return None
        return self.members.get(user_id)

    def is_member(self, user_id: UUID | None) -> bool:
        return self.member(user_id) is not None

    def role_of(self, user_id: UUID | None) -> Role | None:
        membership = self.member(user_id)
        return membership.role if membership else None

    def list_members(self) -> List[Membership]:
        """Miembros en orden de ingreso."""
        return list(self.members.values())

    def owner_ids(self) -> List[UUID]:
        return [m.user_id for m in self.members.values() if m.role == Role.OWNER]

    # -- escrituras (sobre borradores; ver repositorios) ---------------------

    def add_member(
        self, user_id: UUID, role: Role, *, at: datetime | None = None
    ) -> Membership:
        """Agrega un miembro al final. El caller valida duplicados."""
        membership = Membership(user_id=user_id, role=role, joined_at=at or utcnow())
        self.members[user_id] = membership
        return membership

    def remove_member(self, user_id: UUID) -> Membership | None:
        return self.members.pop(user_id, None)

    def change_role(self, user_id: UUID, role: Role) -> Membership:
        """Cambia el rol conservando la posición (join order)."""
        updated = replace(self.members[user_id], role=role)
        self.members[user_id] = updated
        return updated

    def transfer_ownership(self, new_owner_id: UUID) -> None:
        """
        Transfiere ownership: el owner actual pasa a editor y `new_owner_id`
        pasa a owner. Ambas escrituras ocurren sobre el mismo borrador, por lo
        que nunca se publica un estado con cero o dos owners.
        """
        previous_owner_id = self.owner_id
        if previous_owner_id == new_owner_id:
            return
        if previous_owner_id in self.members:
            self.change_role(previous_owner_id, Role.EDITOR)
        self.change_role(new_owner_id, Role.OWNER)
        self.owner_id = new_owner_id

    def clone(self) -> "Workspace":
        """Copia independiente (Membership es inmutable: alcanza copiar el dict)."""
        return replace(self, members=dict(self.members))


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class FileState(str, Enum):
    """
    Estados del ciclo de vida de un archivo.

    PURGED es terminal y nunca se persiste: el registro desaparece.
    EXPIRED no es un estado sino un predicado (StoredFile.is_expired).
    """

    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"
    PURGED = "purged"


@dataclass(frozen=True)
class FileVersion:
    """Versión previa de un archivo (append-only)."""

    blob_ref: str
    uploaded_at: datetime
    uploader_id: Optional[UUID] = None


@dataclass
class StoredFile:
    """
    Archivo subido (metadata). Los bytes viven en el Blob Store.

    Invariantes:
      - is_anonymous ⇔ workspace_id is None ⇔ expires_at is not None
      - is_deleted ⇔ deleted_at is not None
      - share_id se genera una sola vez y no cambia
    """

    id: UUID
    name: str
    content_type: str
    size: int
    blob_ref: str
    share_id: str
    uploaded_at: datetime
    workspace_id: Optional[UUID] = None
    folder: str = "/"
    uploader_id: Optional[UUID] = None
    deleted_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    versions: List[FileVersion] = field(default_factory=list)

    @property
    def is_anonymous(self) -> bool:
        return self.workspace_id is None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def state(self) -> FileState:
        return FileState.SOFT_DELETED if self.is_deleted else FileState.ACTIVE

    def is_expired(self, now: datetime) -> bool:
        """Chequeo lazy de expiración (no hay barrido en background)."""
        if not self.is_anonymous or self.expires_at is None:
            return False
        return now > self.expires_at

    def blob_refs(self) -> List[str]:
        """Referencia actual + versiones previas (para purge)."""
        return [self.blob_ref, *(v.blob_ref for v in self.versions)]

    def mark_deleted(self, *, at: datetime | None = None) -> None:
        self.deleted_at = at or utcnow()

    def restore(self) -> None:
        self.deleted_at = None

    def replace_content(
        self,
        *,
        blob_ref: str,
        size: int,
        content_type: str,
        uploader_id: UUID | None,
        at: datetime | None = None,
    ) -> FileVersion:
        """Re-upload: guarda la referencia previa en `versions` y la reemplaza."""
        previous = FileVersion(
            blob_ref=self.blob_ref,
            uploaded_at=self.uploaded_at,
            uploader_id=self.uploader_id,
        )
        self.versions.append(previous)
        self.blob_ref = blob_ref
        self.size = size
        self.content_type = content_type
        self.uploader_id = uploader_id
        self.uploaded_at = at or utcnow()
        return previous

    def clone(self) -> "StoredFile":
        return replace(self, versions=list(self.versions))
