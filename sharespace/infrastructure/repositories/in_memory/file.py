"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/file.py
============================================================
Class: InMemoryFileRepository

Responsibilities:
  - Almacenar metadata de archivos (StoredFile) en memoria.
  - Garantizar unicidad de share_id (índice share_id -> file_id).
  - Listar archivos de un workspace por estado (activos / papelera) y carpeta.
  - Ejecutar mutaciones como unidad atómica por archivo (copy-on-write).

Collaborators:
  - domain.entities.StoredFile
  - domain.repositories.FileRepository (contrato a implementar)
  - _locks.AggregateLocks

Constraints / Notes:
  - Thread-safe: índice protegido por Lock + lock por archivo.
  - Una mutación que compite con un borrado no "resucita" el registro.
  - on_path_taken: el chequeo de ruta libre y el commit ocurren bajo el
    mismo lock de índice (dos renames al mismo destino no ganan ambos).
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple, TypeVar
from uuid import UUID

from ....domain.entities import StoredFile
from ....domain.repositories import FileMutation, FileRepository
from ._locks import AggregateLocks

R = TypeVar("R")


class InMemoryFileRepository(FileRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._files: Dict[UUID, StoredFile] = {}
        self._by_share_id: Dict[str, UUID] = {}
        self._aggregate_locks = AggregateLocks()

    # =========================================================
    # Alta
    # =========================================================
    def add_file(self, stored_file: StoredFile) -> bool:
        """False si el share_id colisiona (el caller regenera el token)."""
        stored = stored_file.clone()
        with self._lock:
            if stored.share_id in self._by_share_id:
                return False
            if stored.id in self._files:
                raise ValueError(f"File {stored.id} already exists")
            self._files[stored.id] = stored
            self._by_share_id[stored.share_id] = stored.id
        return True

    # =========================================================
    # Lecturas
    # =========================================================
    def get_file(self, file_id: UUID) -> Optional[StoredFile]:
        with self._lock:
            stored = self._files.get(file_id)
            return stored.clone() if stored else None

    def get_file_by_share_id(self, share_id: str) -> Optional[StoredFile]:
        with self._lock:
            file_id = self._by_share_id.get(share_id)
            if file_id is None:
                return None
            return self._files[file_id].clone()

    def list_workspace_files(
        self,
        workspace_id: UUID,
        *,
        deleted: bool = False,
        folder: Optional[str] = None,
    ) -> List[StoredFile]:
        with self._lock:
            return [
                f.clone()
                for f in self._files.values()
                if f.workspace_id == workspace_id
                and f.is_deleted == deleted
                and (folder is None or f.folder == folder)
            ]

    def find_active_at_path(
        self, workspace_id: UUID, folder: str, name: str
    ) -> Optional[StoredFile]:
        with self._lock:
            for f in self._files.values():
                if (
                    f.workspace_id == workspace_id
                    and f.folder == folder
                    and f.name == name
                    and not f.is_deleted
                ):
                    return f.clone()
        return None

    # =========================================================
    # Escrituras atómicas
    # =========================================================
    def mutate_file(
        self,
        file_id: UUID,
        mutation: FileMutation,
        *,
        on_path_taken: Optional[Callable[[StoredFile], R]] = None,
    ) -> Tuple[Optional[StoredFile], Optional[R]]:
        with self._aggregate_locks.lock_for(file_id):
            with self._lock:
                current = self._files.get(file_id)
            if current is None:
                return None, None

            draft = current.clone()
            rejection = mutation(draft)
            if rejection is not None:
                return None, rejection

            if draft.share_id != current.share_id:
                raise ValueError("share_id is immutable")
            draft.id = current.id

            with self._lock:
                if file_id not in self._files:
                    return None, None
                if on_path_taken is not None:
                    occupant = self._active_occupant(draft)
                    if occupant is not None:
                        return None, on_path_taken(occupant.clone())
                self._files[file_id] = draft
            return draft.clone(), None

    def delete_file(
        self,
        file_id: UUID,
        guard: Optional[Callable[[StoredFile], Optional[R]]] = None,
    ) -> Tuple[Optional[StoredFile], Optional[R]]:
        with self._aggregate_locks.lock_for(file_id):
            with self._lock:
                current = self._files.get(file_id)
            if current is None:
                return None, None

            if guard is not None:
                rejection = guard(current.clone())
                if rejection is not None:
                    return None, rejection

            with self._lock:
                removed = self._pop(file_id)

        self._aggregate_locks.discard(file_id)
        return (removed.clone() if removed else None), None

    def delete_workspace_files(self, workspace_id: UUID) -> List[StoredFile]:
        with self._lock:
            ids = [f.id for f in self._files.values() if f.workspace_id == workspace_id]
            removed = [self._pop(file_id) for file_id in ids]
        for file_id in ids:
            self._aggregate_locks.discard(file_id)
        return [f for f in removed if f is not None]

    def _active_occupant(self, draft: StoredFile) -> Optional[StoredFile]:
        """Otro archivo activo en la ruta del draft. Requiere self._lock tomado."""
        if draft.workspace_id is None or draft.is_deleted:
            return None
        for f in self._files.values():
            if (
                f.id != draft.id
                and f.workspace_id == draft.workspace_id
                and f.folder == draft.folder
                and f.name == draft.name
                and not f.is_deleted
            ):
                return f
        return None

    def _pop(self, file_id: UUID) -> Optional[StoredFile]:
        """Requiere self._lock tomado."""
        removed = self._files.pop(file_id, None)
        if removed is not None:
            self._by_share_id.pop(removed.share_id, None)
        return removed
