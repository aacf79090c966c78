"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("PetCode Registry API", alias="APP_NAME")
    api_v1_prefix: str = Field("/api/v1", alias="API_V1_PREFIX")

    database_url: str = Field(..., alias="DATABASE_URL")
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    secret_key: str = Field(..., alias="SECRET_KEY")
    identity_provider: Literal["jwt", "dev"] = Field("jwt", alias="IDENTITY_PROVIDER")
    identity_jwt_secret: str = Field(default="", alias="IDENTITY_JWT_SECRET")
    identity_jwt_algorithm: str = Field("HS256", alias="IDENTITY_JWT_ALGORITHM")
    identity_issuer: str | None = Field(default=None, alias="IDENTITY_ISSUER")
    identity_audience: str | None = Field(default=None, alias="IDENTITY_AUDIENCE")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    public_profile_base_url: str = Field(
        "http://localhost:5173/mascota/", alias="PUBLIC_PROFILE_BASE_URL"
    )
    profile_slug_length: int = Field(12, alias="PROFILE_SLUG_LENGTH")
    profile_slug_max_attempts: int = Field(5, alias="PROFILE_SLUG_MAX_ATTEMPTS")
    order_status_policy: Literal["forward_only", "open"] = Field(
        "forward_only", alias="ORDER_STATUS_POLICY"
    )

    redis_url: str | None = Field(default=None, alias="REDIS_URL")

    s3_endpoint_url: str | None = Field(default=None, alias="S3_ENDPOINT_URL")
    s3_bucket: str | None = Field(default=None, alias="S3_BUCKET")
    s3_storage_root: str | None = Field(default=None, alias="S3_STORAGE_ROOT")
    s3_cache_seconds: int = Field(31536000, alias="S3_CACHE_SECONDS")

    photo_max_bytes: int = Field(10 * 1024 * 1024, alias="PHOTO_MAX_BYTES")
    photo_thumbnail_size: int = Field(400, alias="PHOTO_THUMBNAIL_SIZE")
    image_max_width: int = Field(1600, alias="IMAGE_MAX_WIDTH")
    image_webp_quality: int = Field(82, alias="IMAGE_WEBP_QUALITY")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:5174",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allowlist: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"], alias="CORS_ALLOWLIST"
    )

    rate_limit_default: str = Field("100/minute", alias="RATE_LIMIT_DEFAULT")
    rate_limit_public: str = Field("30/minute", alias="RATE_LIMIT_PUBLIC")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
    )

    def model_post_init(self, __context: Any) -> None:
        """Populate the identity secret from the generic secret when not provided."""

        if not self.identity_jwt_secret:
            object.__setattr__(self, "identity_jwt_secret", self.secret_key)

    @field_validator("cors_allow_origins", "cors_allowlist", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    def public_url_for(self, slug: str) -> str:
        """Return the URL encoded in a QR tag for a public profile slug."""
        return f"{self.public_profile_base_url.rstrip('/')}/{slug}"


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
