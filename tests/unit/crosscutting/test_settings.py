"""
Name: Settings Validation Tests

Responsibilities:
  - Fail fast on invalid environment configuration
"""

import pytest
from pydantic import ValidationError

from sharespace.crosscutting.config import Settings

pytestmark = pytest.mark.unit


def test_defaults_are_valid():
    settings = Settings(storage_backend="memory")

    assert settings.anonymous_ttl_hours == 24
    assert settings.access_code_length == 8
    assert settings.is_production() is False


def test_s3_backend_requires_bucket():
    with pytest.raises(ValidationError):
        Settings(storage_backend="s3", s3_bucket="")

    assert Settings(storage_backend="S3", s3_bucket="files").storage_backend == "s3"


def test_unknown_backend_is_rejected():
    with pytest.raises(ValidationError):
        Settings(storage_backend="ftp")


@pytest.mark.parametrize("secret", ["dev-secret", "short-secret", ""])
def test_production_requires_strong_jwt_secret(secret):
    with pytest.raises(ValidationError):
        Settings(app_env="production", jwt_secret=secret)


def test_production_accepts_long_secret():
    settings = Settings(app_env="production", jwt_secret="x" * 40)
    assert settings.is_production() is True


@pytest.mark.parametrize("length", [5, 33])
def test_access_code_length_bounds(length):
    with pytest.raises(ValidationError):
        Settings(access_code_length=length)


@pytest.mark.parametrize(
    "field", ["max_upload_bytes", "anonymous_ttl_hours", "max_name_chars"]
)
def test_limits_must_be_positive(field):
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


def test_allowed_origins_are_split():
    settings = Settings(allowed_origins="http://a.test, ,http://b.test")
    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]
