"""
In-memory UserRepository (email único, normalizado).

update_user reemplaza el registro y mueve el índice de email en un solo paso
bajo el lock (un email tomado por otro usuario rechaza el cambio).
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.repositories import UserRepository
from ....identity.users import User, normalize_email


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}
        self._by_email: Dict[str, UUID] = {}

    def add_user(self, user: User) -> bool:
        email = normalize_email(user.email)
        with self._lock:
            if email in self._by_email:
                return False
            self._users[user.id] = user
            self._by_email[email] = user.id
        return True

    def get_user(self, user_id: UUID) -> Optional[User]:
        # User es inmutable (frozen): no hace falta copiar
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_email.get(normalize_email(email))
            return self._users.get(user_id) if user_id else None

    def update_user(self, user: User) -> bool:
        """False si el email pertenece a otro usuario."""
        email = normalize_email(user.email)
        with self._lock:
            current = self._users.get(user.id)
            if current is None:
                raise ValueError(f"User {user.id} does not exist")
            holder = self._by_email.get(email)
            if holder is not None and holder != user.id:
                return False
            self._by_email.pop(normalize_email(current.email), None)
            self._users[user.id] = user
            self._by_email[email] = user.id
        return True
