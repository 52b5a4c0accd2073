"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (before importing sharespace)
  - Provide in-memory repositories, blob store and a controllable clock
  - Provide small factories for users and workspaces

Collaborators:
  - pytest: Test framework
  - sharespace.infrastructure (in-memory adapters)

Notes:
  - Env vars are set at import time so Settings never reads a real .env
  - reset_container() runs around every test (singletons + settings)
"""

import os
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_JSON", "false")

from sharespace.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from sharespace.container import reset_container  # noqa: E402
from sharespace.domain.entities import Role, Workspace  # noqa: E402
from sharespace.identity.auth_users import hash_password  # noqa: E402
from sharespace.identity.identity_provider import TokenIdentityProvider  # noqa: E402
from sharespace.identity.users import User  # noqa: E402
from sharespace.infrastructure.repositories import (  # noqa: E402
    InMemoryFileRepository,
    InMemoryUserRepository,
    InMemoryWorkspaceRepository,
)
from sharespace.infrastructure.storage import InMemoryBlobStore  # noqa: E402

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _isolated_container():
    reset_container()
    yield
    reset_container()


# ============================================================================
# Clock
# ============================================================================


class FakeClock:
    """Reloj controlable: clock() devuelve `now`; advance() lo mueve."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Adapters in-memory
# ============================================================================


@pytest.fixture
def workspace_repo() -> InMemoryWorkspaceRepository:
    return InMemoryWorkspaceRepository()


@pytest.fixture
def file_repo() -> InMemoryFileRepository:
    return InMemoryFileRepository()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def identity_provider(user_repo) -> TokenIdentityProvider:
    return TokenIdentityProvider(user_repo)


# ============================================================================
# Test Data Factories
# ============================================================================


class UserFactory:
    """Crea usuarios activos y los registra en el repo."""

    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users

    def create(self, email: str | None = None, name: str = "Test User") -> User:
        user = User(
            id=uuid4(),
            email=email or f"{uuid4().hex[:8]}@example.com",
            name=name,
            password_hash=hash_password("secret-password"),
            is_active=True,
            created_at=T0,
        )
        assert self._users.add_user(user)
        return user


@pytest.fixture
def users(user_repo) -> UserFactory:
    return UserFactory(user_repo)


def make_workspace(
    owner_id: UUID,
    *,
    members: dict[UUID, Role] | None = None,
    is_public: bool = False,
    access_code: str | None = None,
    name: str = "Team",
) -> Workspace:
    """Workspace con owner + miembros (en orden), listo para create_workspace()."""
    workspace = Workspace(
        id=uuid4(),
        name=name,
        description="Shared files",
        access_code=access_code or uuid4().hex[:8],
        owner_id=owner_id,
        is_public=is_public,
        created_at=T0,
        updated_at=T0,
    )
    workspace.add_member(owner_id, Role.OWNER, at=T0)
    for offset, (user_id, role) in enumerate((members or {}).items(), start=1):
        workspace.add_member(user_id, role, at=T0 + timedelta(minutes=offset))
    return workspace


@pytest.fixture
def seeded_workspace(workspace_repo):
    """Crea y persiste un workspace; devuelve el snapshot guardado."""

    def _seed(owner_id: UUID, **kwargs) -> Workspace:
        created = workspace_repo.create_workspace(make_workspace(owner_id, **kwargs))
        assert created is not None
        return created

    return _seed
