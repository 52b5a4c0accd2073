"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide safe defaults for a single-node deployment

Collaborators:
  - api/main.py: reads settings for CORS and logging
  - container.py: reads settings for storage backend and use-case limits
  - interfaces/api/http/dependencies.py: reads the upload size limit

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - Tests disable the .env file through model_config
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_STORAGE_BACKENDS = {"local", "s3", "memory"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        log_level: Root log level for the "sharespace" logger
        log_json: Emit JSON lines instead of plain text
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        jwt_cookie_name: Cookie name accepted as an alternative to the header
        storage_backend: local|s3|memory (default: local)
        storage_root: Base directory for the local blob store
        s3_endpoint_url: S3/MinIO endpoint URL (optional)
        s3_bucket: S3 bucket name
        s3_access_key: S3 access key ID
        s3_secret_key: S3 secret access key
        s3_region: S3 region (optional)
        max_upload_bytes: Maximum upload size in bytes (default: 100MB)
        anonymous_ttl_hours: Lifetime of anonymous uploads (default: 24)
        access_code_length: Length of workspace join codes (default: 8)
        share_id_bytes: Random bytes behind each share token (default: 24)
        max_name_chars: Maximum workspace/file name length
        max_description_chars: Maximum workspace description length
    """

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60 * 24
    jwt_cookie_name: str = "access_token"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "./uploads"
    s3_endpoint_url: str = ""
    s3_bucket: str = ""
    s3_access_key: str = ""
    s3_secret_key: str = ""
    s3_region: str = ""
    max_upload_bytes: int = 100 * 1024 * 1024

    # Sharing / workspaces
    anonymous_ttl_hours: int = 24
    access_code_length: int = 8
    share_id_bytes: int = 24
    max_name_chars: int = 255
    max_description_chars: int = 2_000

    @field_validator("storage_backend")
    @classmethod
    def storage_backend_valid(cls, v: str) -> str:
        backend = (v or "local").strip().lower()
        if backend not in _STORAGE_BACKENDS:
            raise ValueError("storage_backend must be local, s3, or memory")
        return backend

    @field_validator("log_level")
    @classmethod
    def log_level_upper(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @field_validator(
        "max_upload_bytes",
        "anonymous_ttl_hours",
        "jwt_access_ttl_minutes",
        "max_name_chars",
        "max_description_chars",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("access_code_length")
    @classmethod
    def access_code_length_valid(cls, v: int) -> int:
        # uuid4().hex provides 32 characters
        if v < 6 or v > 32:
            raise ValueError("access_code_length must be between 6 and 32")
        return v

    @field_validator("share_id_bytes")
    @classmethod
    def share_id_bytes_valid(cls, v: int) -> int:
        if v < 16:
            raise ValueError("share_id_bytes must be >= 16")
        return v

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_storage_requirements(self):
        if self.storage_backend == "s3" and not self.s3_bucket.strip():
            raise ValueError("S3_BUCKET is required when STORAGE_BACKEND=s3")
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
