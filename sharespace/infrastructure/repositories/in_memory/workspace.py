"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/workspace.py
============================================================
Class: InMemoryWorkspaceRepository

Responsibilities:
  - Almacenar workspaces (con su membresía ordenada) en memoria.
  - Garantizar unicidad de access_code.
  - Ejecutar mutaciones como unidad atómica por workspace (copy-on-write):
      1) tomar el lock del workspace
      2) clonar el estado actual
      3) aplicar la mutación sobre el borrador
      4) publicar el borrador sólo si la mutación no fue rechazada

Collaborators:
  - domain.entities.Workspace
  - domain.repositories.WorkspaceRepository (contrato a implementar)
  - _locks.AggregateLocks

Constraints / Notes:
  - Thread-safe: índice protegido por Lock + lock por agregado.
  - Copias defensivas: nunca se entrega el objeto almacenado.
  - Repo puro: NO aplica permisos (eso es domain.permissions).
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple, TypeVar
from uuid import UUID

from ....domain.entities import Workspace
from ....domain.repositories import WorkspaceMutation, WorkspaceRepository
from ._locks import AggregateLocks

R = TypeVar("R")


class InMemoryWorkspaceRepository(WorkspaceRepository):
    """
    Repositorio in-memory, thread-safe, para Workspaces.

    Modelo mental:
    - _workspaces es la "tabla" (UUID -> Workspace) y _by_code su índice único.
    - Un lector nunca ve un borrador: sólo estados publicados completos.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._workspaces: Dict[UUID, Workspace] = {}
        self._by_code: Dict[str, UUID] = {}
        self._aggregate_locks = AggregateLocks()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # =========================================================
    # Alta
    # =========================================================
    def create_workspace(self, workspace: Workspace) -> Optional[Workspace]:
        """None si el access_code ya existe (el caller reintenta con otro)."""
        stored = workspace.clone()
        now = self._now()
        stored.created_at = stored.created_at or now
        stored.updated_at = stored.updated_at or stored.created_at

        with self._lock:
            if stored.access_code in self._by_code:
                return None
            if stored.id in self._workspaces:
                raise ValueError(f"Workspace {stored.id} already exists")
            self._workspaces[stored.id] = stored
            self._by_code[stored.access_code] = stored.id
        return stored.clone()

    # =========================================================
    # Lecturas
    # =========================================================
    def get_workspace(self, workspace_id: UUID) -> Optional[Workspace]:
        with self._lock:
            workspace = self._workspaces.get(workspace_id)
            return workspace.clone() if workspace else None

    def get_workspace_by_access_code(self, access_code: str) -> Optional[Workspace]:
        with self._lock:
            workspace_id = self._by_code.get(access_code)
            if workspace_id is None:
                return None
            return self._workspaces[workspace_id].clone()

    def list_workspaces_for_member(self, user_id: UUID) -> List[Workspace]:
        """Orden: fecha de ingreso del usuario (más antigua primero)."""
        with self._lock:
            owned = [
                w.clone() for w in self._workspaces.values() if w.is_member(user_id)
            ]
        return sorted(owned, key=lambda w: w.members[user_id].joined_at)

    # =========================================================
    # Escrituras atómicas
    # =========================================================
    def mutate_workspace(
        self, workspace_id: UUID, mutation: WorkspaceMutation
    ) -> Tuple[Optional[Workspace], Optional[R]]:
        with self._aggregate_locks.lock_for(workspace_id):
            with self._lock:
                current = self._workspaces.get(workspace_id)
            if current is None:
                return None, None

            draft = current.clone()
            rejection = mutation(draft)
            if rejection is not None:
                return None, rejection

            if draft.access_code != current.access_code:
                raise ValueError("access_code is immutable")
            draft.id = current.id
            draft.updated_at = self._now()

            with self._lock:
                if workspace_id not in self._workspaces:
                    return None, None
                self._workspaces[workspace_id] = draft
            return draft.clone(), None

    def delete_workspace(
        self,
        workspace_id: UUID,
        guard: Optional[Callable[[Workspace], Optional[R]]] = None,
    ) -> Tuple[Optional[Workspace], Optional[R]]:
        with self._aggregate_locks.lock_for(workspace_id):
            with self._lock:
                current = self._workspaces.get(workspace_id)
            if current is None:
                return None, None

            if guard is not None:
                rejection = guard(current.clone())
                if rejection is not None:
                    return None, rejection

            with self._lock:
                removed = self._workspaces.pop(workspace_id, None)
                if removed is not None:
                    self._by_code.pop(removed.access_code, None)

        self._aggregate_locks.discard(workspace_id)
        return (removed.clone() if removed else None), None
