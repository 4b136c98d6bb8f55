"""Application configuration."""

from functools import lru_cache
from ipaddress import ip_network
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_FRONTEND_URL = "http://localhost:3000"
DEFAULT_TRUSTED_PROXIES = ("127.0.0.1", "::1")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SIMS HR API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database. Optional at startup; requests fail with a descriptive error
    # until it is configured (see require_configuration).
    database_url: str | None = Field(
        default=None,
        description="PostgreSQL connection URL using the privileged service credential.",
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Security - JWT
    jwt_secret: str | None = Field(default=None, min_length=16)
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 1  # Role is re-read from the store, keep tokens short

    # CORS - the single frontend origin allowed to call the API
    frontend_url: str | None = None

    # Rate limiting
    redis_url: str | None = None
    trusted_proxies: str = ""
    rate_limit_login_attempts: int = 10
    rate_limit_login_window_minutes: int = 15

    # Prefix added by a serverless gateway, e.g. "/.netlify/functions/api"
    path_prefix: str = ""

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        if self.database_url and not self.database_url.startswith(
            ("postgresql://", "postgres://", "postgresql+asyncpg://", "sqlite+aiosqlite://")
        ):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        if self.path_prefix and not self.path_prefix.startswith("/"):
            raise ValueError("PATH_PREFIX must start with '/'")

        for proxy in self.trusted_proxies_list:
            try:
                ip_network(proxy, strict=False)
            except ValueError as e:
                raise ValueError(f"TRUSTED_PROXIES entry is not an IP or CIDR range: {proxy}") from e

        return self

    @property
    def async_database_url(self) -> str | None:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility.
        """
        if not self.database_url:
            return None
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url.replace("sslmode=", "ssl=")

    @property
    def missing_required(self) -> list[str]:
        """Names of required environment variables that are not set."""
        missing = []
        if not self.database_url:
            missing.append("DATABASE_URL")
        if not self.jwt_secret:
            missing.append("JWT_SECRET")
        return missing

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        if self.frontend_url:
            return [o.strip() for o in self.frontend_url.split(",") if o.strip()]
        if self.environment == "development":
            return [DEVELOPMENT_FRONTEND_URL]
        return []

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Get trusted proxies as a list.

        Unset means loopback only, so a directly exposed server never
        honours a client-supplied X-Forwarded-For.
        """
        if not self.trusted_proxies:
            return list(DEFAULT_TRUSTED_PROXIES)
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]

    @property
    def login_rate_limit(self) -> str:
        """Login rate limit in slowapi notation."""
        return f"{self.rate_limit_login_attempts}/{self.rate_limit_login_window_minutes} minutes"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
