"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import RedisDsn, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from medihub.core.constants import DEFAULT_INSECURE_SECRET, MIN_SECRET_KEY_LENGTH


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "MediHub"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    secret_key: str = DEFAULT_INSECURE_SECRET

    # Database
    database_url: str = "sqlite+aiosqlite:///./medihub.db"
    database_echo: bool = False

    # CORS
    cors_origins: list[str] = []

    # API Documentation
    api_docs_base_url: str = "https://medihub.example.com"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Reject short session secrets.

        The development default is let through here; ``is_production``
        refuses it at runtime.

        Raises:
            ValueError: If the key is shorter than the minimum length
        """
        if v != DEFAULT_INSECURE_SECRET and len(v) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"SECRET_KEY must be at least {MIN_SECRET_KEY_LENGTH} characters. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        return v

    # Session cookie
    session_cookie_name: str = "medihub-session"
    session_expire_minutes: int = 480
    jwt_algorithm: str = "HS256"

    # Route gating
    login_path: str = "/login"
    landing_path: str = "/dashboard"

    # Redis
    redis_url: RedisDsn = RedisDsn("redis://localhost:6379")
    cache_enabled: bool = False
    cache_ttl: int = 300

    # Logging
    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment.

        Raises:
            ValueError: If using insecure secret key in production
        """
        is_prod = self.environment == "production"
        if is_prod and self.secret_key == DEFAULT_INSECURE_SECRET:
            raise ValueError(
                "SECRET_KEY must be set to a secure value in production. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        return is_prod

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def session_cookie_secure(self) -> bool:
        """Only send the session cookie over HTTPS in production."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
