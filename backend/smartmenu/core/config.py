"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./smartmenu.db"

    # Security
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Customer-facing frontend, used to build QR code links
    frontend_url: str = "http://localhost:5173"

    # Orders
    order_number_prefix: str = "ORD"

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_prefix: str = "/api"

    # Rate limiting
    rate_limit_enabled: bool = True

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        if v == DEFAULT_SECRET_KEY:
            import warnings
            warnings.warn(
                "Using default SECRET_KEY is insecure! Set SECRET_KEY environment variable.",
                UserWarning,
                stacklevel=2,
            )
        elif len(v) < 32:
            import warnings
            warnings.warn(
                "SECRET_KEY should be at least 32 characters for HS256 signing.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @field_validator("access_token_expire_minutes")
    @classmethod
    def validate_token_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Refuse to run outside debug mode with the default signing key."""
        if not self.debug and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError(
                "FATAL: Cannot start in production mode with default SECRET_KEY. "
                "Set a secure SECRET_KEY environment variable (minimum 32 characters)."
            )
        return self

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
