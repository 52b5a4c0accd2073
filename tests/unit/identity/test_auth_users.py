"""
Name: Auth Users Tests

Responsibilities:
  - Argon2 hashing and credential checks
  - Profile update (name + unique email)
  - JWT issue/decode (expiry, tampering)
  - Token extraction from header or cookie
  - TokenIdentityProvider lookups
"""

from dataclasses import replace
from uuid import uuid4

import jwt
import pytest
from starlette.requests import Request

from sharespace.identity.auth_users import (
    AuthSettings,
    InvalidCredentialError,
    authenticate_user,
    create_access_token,
    decode_access_token,
    extract_access_token,
    hash_password,
    register_user,
    update_profile,
    verify_password,
)
from sharespace.identity.identity_provider import TokenIdentityProvider

pytestmark = pytest.mark.unit

_SETTINGS = AuthSettings(
    jwt_secret="unit-test-secret",
    jwt_access_ttl_minutes=5,
    jwt_cookie_name="access_token",
)


def _request(cookie: str | None = None) -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie else []
    return Request({"type": "http", "headers": headers})


def test_hash_and_verify_password():
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed) is True
    assert verify_password("wrong", hashed) is False
    assert verify_password("s3cret-pass", "not-a-hash") is False


def test_register_normalizes_email_and_rejects_duplicates(user_repo):
    user = register_user(
        user_repo, email="  Ana@Example.COM ", name=" Ana ", password="password1"
    )

    assert user.email == "ana@example.com"
    assert user.name == "Ana"
    assert (
        register_user(user_repo, email="ana@example.com", name="x", password="password2")
        is None
    )


def test_authenticate_user(user_repo):
    register_user(user_repo, email="bob@example.com", name="Bob", password="password1")

    assert authenticate_user(user_repo, "BOB@example.com", "password1") is not None
    assert authenticate_user(user_repo, "bob@example.com", "nope") is None
    assert authenticate_user(user_repo, "ghost@example.com", "password1") is None
    assert authenticate_user(user_repo, "", "password1") is None


def test_update_profile_changes_name_and_email(user_repo):
    user = register_user(user_repo, email="ana@example.com", name="Ana", password="password1")

    updated = update_profile(user_repo, user, name=" Ana María ", email="ANA.M@Example.com")

    assert (updated.name, updated.email) == ("Ana María", "ana.m@example.com")
    assert updated.password_hash == user.password_hash
    assert user_repo.get_user(user.id) == updated
    assert user_repo.get_user_by_email("ana.m@example.com").id == user.id
    assert user_repo.get_user_by_email("ana@example.com") is None
    assert authenticate_user(user_repo, "ana.m@example.com", "password1") is not None


def test_update_profile_rejects_email_of_other_user(user_repo):
    ana = register_user(user_repo, email="ana@example.com", name="Ana", password="password1")
    register_user(user_repo, email="bob@example.com", name="Bob", password="password1")

    assert update_profile(user_repo, ana, name="Ana", email="BOB@example.com") is None
    assert user_repo.get_user(ana.id).email == "ana@example.com"
    assert user_repo.get_user_by_email("bob@example.com").name == "Bob"


def test_update_profile_keeps_own_email(user_repo):
    ana = register_user(user_repo, email="ana@example.com", name="Ana", password="password1")

    updated = update_profile(user_repo, ana, name="Ana B", email="ana@example.com")

    assert updated.name == "Ana B"
    assert user_repo.get_user_by_email("ana@example.com").name == "Ana B"

def test_token_roundtrip(users):
    user = users.create()

    token, expires_in = create_access_token(user, _SETTINGS)
    payload = decode_access_token(token, _SETTINGS)

    assert expires_in == 300
    assert payload.user_id == user.id
    assert payload.email == user.email


def test_expired_token_is_rejected(users):
    user = users.create()
    token, _ = create_access_token(user, replace(_SETTINGS, jwt_access_ttl_minutes=-1))

    with pytest.raises(InvalidCredentialError):
        decode_access_token(token, _SETTINGS)


def test_token_signed_with_other_secret_is_rejected(users):
    token, _ = create_access_token(
        users.create(), replace(_SETTINGS, jwt_secret="another-secret")
    )

    with pytest.raises(InvalidCredentialError):
        decode_access_token(token, _SETTINGS)


def test_token_with_wrong_type_is_rejected():
    token = jwt.encode(
        {"sub": str(uuid4()), "exp": 4102444800, "typ": "refresh"},
        _SETTINGS.jwt_secret,
        algorithm="HS256",
    )

    with pytest.raises(InvalidCredentialError):
        decode_access_token(token, _SETTINGS)


class TestTokenExtraction:
    def test_bearer_header_wins(self):
        assert extract_access_token(_request("access_token=cookie"), "Bearer abc") == "abc"

    def test_cookie_fallback(self):
        assert extract_access_token(_request("access_token=cookie"), None) == "cookie"

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer   "])
    def test_malformed_header_is_ignored(self, header):
        assert extract_access_token(_request(), header) is None


class TestTokenIdentityProvider:
    def test_verify_returns_user_id(self, user_repo, users):
        user = users.create()
        token, _ = create_access_token(user, _SETTINGS)

        provider = TokenIdentityProvider(user_repo, _SETTINGS)

        assert provider.verify(token) == user.id

    def test_verify_rejects_unknown_user(self, user_repo):
        ghost = register_user(
            type(user_repo)(), email="ghost@example.com", name="G", password="password1"
        )
        token, _ = create_access_token(ghost, _SETTINGS)

        with pytest.raises(InvalidCredentialError):
            TokenIdentityProvider(user_repo, _SETTINGS).verify(token)

    def test_verify_rejects_inactive_user(self, user_repo):
        user = register_user(
            user_repo, email="off@example.com", name="Off", password="password1"
        )
        inactive = replace(user, is_active=False)
        token, _ = create_access_token(inactive, _SETTINGS)
        user_repo._users[user.id] = inactive

        with pytest.raises(InvalidCredentialError):
            TokenIdentityProvider(user_repo, _SETTINGS).verify(token)

    def test_resolve_email(self, user_repo, users):
        user = users.create(email="carla@example.com")
        provider = TokenIdentityProvider(user_repo, _SETTINGS)

        assert provider.resolve_email("CARLA@example.com") == user.id
        assert provider.resolve_email("nobody@example.com") is None
