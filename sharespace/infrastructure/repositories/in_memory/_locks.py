"""
Locks por agregado para repositorios in-memory.

Un Lock por id (workspace o archivo) serializa los read-then-write de ese
agregado; agregados distintos avanzan en paralelo. El dict de locks se
protege con un lock de índice propio.
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Hashable


class AggregateLocks:
    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: Dict[Hashable, Lock] = {}

    def lock_for(self, key: Hashable) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = Lock()
            return lock

    def discard(self, key: Hashable) -> None:
        with self._guard:
            self._locks.pop(key, None)
