"""
In-Memory Repository Implementations.

Thread-safe, copy-on-write. Data is lost on process restart.
"""

from .file import InMemoryFileRepository
from .user import InMemoryUserRepository
from .workspace import InMemoryWorkspaceRepository

__all__ = [
    "InMemoryFileRepository",
    "InMemoryUserRepository",
    "InMemoryWorkspaceRepository",
]
