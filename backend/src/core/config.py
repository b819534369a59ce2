"""Application configuration using pydantic-settings."""
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    # Session cookie - only disable Secure for plain-http local development
    session_cookie_secure: bool = Field(default=True, validation_alias="SESSION_COOKIE_SECURE")

    # Login policy - when False, any password is accepted for an existing username
    password_check_enabled: bool = Field(
        default=False, validation_alias="PASSWORD_CHECK_ENABLED",
    )

    # Redis - for rate limiting login/registration attempts
    redis_url: str = Field(default="redis://localhost:6379", validation_alias="REDIS_URL")
    redis_enabled: bool = Field(default=True, validation_alias="REDIS_ENABLED")
    redis_pool_size: int = Field(default=20, validation_alias="REDIS_POOL_SIZE")

    @model_validator(mode="after")
    def validate_cookie_security(self) -> "Settings":
        """
        Prevent insecure session cookies from being used with a production database.

        Without the Secure attribute the session token travels over plain HTTP, so it
        is only acceptable against a local development database.
        """
        if self.session_cookie_secure:
            return self

        try:
            parsed = urlparse(self.database_url)
            scheme = parsed.scheme
            hostname = parsed.hostname or ""
        except ValueError:
            # If we can't parse the URL, treat it as non-local (fail-safe)
            scheme = ""
            hostname = ""

        # SQLite URLs have no host and are always local
        if scheme.startswith("sqlite"):
            return self

        local_hosts = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}
        if hostname.lower() not in local_hosts:
            raise ValueError(
                f"SESSION_COOKIE_SECURE cannot be disabled with a non-local database. "
                f"Database host '{hostname}' appears to be a production database. "
                f"Insecure session cookies must only be used locally.",
            )

        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
