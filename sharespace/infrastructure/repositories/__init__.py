"""
============================================================
TARJETA CRC
============================================================
Class: sharespace.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios en un único punto de
  importación.

Collaborators:
- Repositorios InMemory (thread-safe, copy-on-write)
============================================================
"""

from .in_memory import (
    InMemoryFileRepository,
    InMemoryUserRepository,
    InMemoryWorkspaceRepository,
)

__all__ = [
    "InMemoryFileRepository",
    "InMemoryUserRepository",
    "InMemoryWorkspaceRepository",
]
