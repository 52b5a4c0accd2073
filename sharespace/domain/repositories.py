"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application/domain independent from infrastructure.
- Make every read-then-write an atomic unit per aggregate (mutate_* methods).

Collaborators
- domain.entities: Workspace, StoredFile
- identity.users: User
- infrastructure.repositories.in_memory: thread-safe implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports.
- Returned entities are snapshots; mutating them never changes stored state.

Notes
- mutate_* receives a callback that edits a private draft of the aggregate.
  The callback returns None to commit, or any other value to abort; the
  value is handed back to the caller untouched (typically a use-case error).
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Tuple, TypeVar
from uuid import UUID

from ..identity.users import User
from .entities import StoredFile, Workspace

R = TypeVar("R")

WorkspaceMutation = Callable[[Workspace], Optional[R]]
FileMutation = Callable[[StoredFile], Optional[R]]


class WorkspaceRepository(Protocol):
    """
    Workspace aggregate persistence (metadata + ordered membership).

    Implementations must guarantee:
      - access_code uniqueness (create_workspace returns None on collision)
      - per-workspace serialization of mutate_workspace / delete_workspace
    """

    def create_workspace(self, workspace: Workspace) -> Optional[Workspace]:
        ...

    def get_workspace(self, workspace_id: UUID) -> Optional[Workspace]:
        ...

    def get_workspace_by_access_code(self, access_code: str) -> Optional[Workspace]:
        ...

    def list_workspaces_for_member(self, user_id: UUID) -> List[Workspace]:
        """Workspaces where user_id is a member, oldest first."""
        ...

    def mutate_workspace(
        self, workspace_id: UUID, mutation: WorkspaceMutation
    ) -> Tuple[Optional[Workspace], Optional[R]]:
        """
        Returns:
          - (None, None) if the workspace does not exist
          - (committed snapshot, None) on commit
          - (None, rejection) when the mutation aborted
        """
        ...

    def delete_workspace(
        self,
        workspace_id: UUID,
        guard: Optional[Callable[[Workspace], Optional[R]]] = None,
    ) -> Tuple[Optional[Workspace], Optional[R]]:
        """Same contract as mutate_workspace; guard only inspects."""
        ...


class FileRepository(Protocol):
    """
    StoredFile aggregate persistence.

    Implementations must guarantee:
      - share_id uniqueness (add_file returns False on collision)
      - per-file serialization of mutate_file / delete_file
  - at most one active file per (workspace, folder, name) on
    mutations that pass on_path_taken
    """

    def add_file(self, stored_file: StoredFile) -> bool:
        ...

    def get_file(self, file_id: UUID) -> Optional[StoredFile]:
        ...

    def get_file_by_share_id(self, share_id: str) -> Optional[StoredFile]:
        ...

    def list_workspace_files(
        self,
        workspace_id: UUID,
        *,
        deleted: bool = False,
        folder: Optional[str] = None,
    ) -> List[StoredFile]:
        """Files of a workspace filtered by lifecycle state, oldest first."""
        ...

    def find_active_at_path(
        self, workspace_id: UUID, folder: str, name: str
    ) -> Optional[StoredFile]:
        ...

    def mutate_file(
        self,
        file_id: UUID,
        mutation: FileMutation,
        *,
        on_path_taken: Optional[Callable[[StoredFile], R]] = None,
    ) -> Tuple[Optional[StoredFile], Optional[R]]:
        """
        Same contract as WorkspaceRepository.mutate_workspace.

        With on_path_taken, the commit is rejected with on_path_taken(occupant)
        when another active file of the workspace holds the draft's
        (folder, name); the check and the write are atomic.
        """
        ...

    def delete_file(
        self,
        file_id: UUID,
        guard: Optional[Callable[[StoredFile], Optional[R]]] = None,
    ) -> Tuple[Optional[StoredFile], Optional[R]]:
        """Removes the record; returns the removed snapshot."""
        ...

    def delete_workspace_files(self, workspace_id: UUID) -> List[StoredFile]:
        """Removes every record of a workspace; returns removed snapshots."""
        ...


class UserRepository(Protocol):
    """User persistence for the identity layer."""

    def add_user(self, user: User) -> bool:
        """False if the email is already registered."""
        ...

    def get_user(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def update_user(self, user: User) -> bool:
        """
        Replaces the stored profile (same id).

        False if the email is registered to another user.
        """
        ...
