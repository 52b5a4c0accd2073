"""Blob store en memoria (tests / STORAGE_BACKEND=memory)."""

from __future__ import annotations

from threading import Lock
from typing import Dict
from uuid import uuid4

from .errors import StorageNotFoundError


class InMemoryBlobStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._blobs: Dict[str, bytes] = {}

    def put(self, content: bytes, *, content_type: str | None = None) -> str:
        blob_ref = uuid4().hex
        with self._lock:
            self._blobs[blob_ref] = bytes(content)
        return blob_ref

    def get(self, blob_ref: str) -> bytes:
        with self._lock:
            try:
                return self._blobs[blob_ref]
            except KeyError:
                raise StorageNotFoundError(blob_ref) from None

    def delete(self, blob_ref: str) -> None:
        with self._lock:
            self._blobs.pop(blob_ref, None)

    def __contains__(self, blob_ref: object) -> bool:
        with self._lock:
            return blob_ref in self._blobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._blobs)
