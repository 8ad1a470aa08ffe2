"""Application configuration using Pydantic Settings with multi-file support."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_DATA_URL = "https://app-media.noloco.app/noloco/dublin-bikes.json"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Priority (lowest to highest):
    1. .env (base defaults)
    2. env-files/dev.env (development overrides)
    3. OS environment variables (highest priority)
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "env-files/dev.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Dataset Query API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Remote dataset
    DATA_URL: str = Field(
        default=DEFAULT_DATA_URL,
        min_length=1,
        description="URL of the JSON array served by the API",
    )
    DATA_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Timeout for fetching the remote dataset",
    )

    # Security
    SECURITY_HEADERS_ENABLED: bool = Field(default=True, description="Enable security headers")

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
