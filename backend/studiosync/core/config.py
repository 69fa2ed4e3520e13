# backend/studiosync/core/config.py
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    # Server
    port: int = Field(default=5000, description="Port the HTTP server listens on")
    environment: str = Field(default="development", description="development | production | test")
    client_url: str = Field(
        default="http://localhost:3000",
        description="Single origin allowed by CORS (credentials enabled)",
    )
    api_version: str = Field(default="v1", description="Version segment of the API prefix")
    log_level: str = Field(default="INFO")

    # Database
    database_url: str = Field(default="sqlite:///./studiosync.db")
    database_echo: bool = False
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_timeout: int = 30

    # Authentication
    secret_key: SecretStr = Field(
        default=SecretStr("dev-secret-key-change-me-before-deploying-studiosync"),
        description="Secret key for JWT tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 7

    # Rate limiting (fixed window per client address)
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100

    # Reservations
    studio_timezone: str = Field(
        default="UTC",
        description="Timezone used to read studio opening hours and naive request datetimes",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_version")
    @classmethod
    def _normalize_api_version(cls, value: str) -> str:
        cleaned = (value or "v1").strip().strip("/")
        return cleaned or "v1"

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return (value or "development").strip().lower()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def api_prefix(self) -> str:
        return f"/api/{self.api_version}"

    def engine_kwargs(self) -> dict[str, Any]:
        """Pool settings for create_engine; SQLite ignores pooling knobs."""
        if self.database_url.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}, "echo": self.database_echo}
        return {
            "pool_size": self.database_pool_size,
            "max_overflow": self.database_max_overflow,
            "pool_timeout": self.database_pool_timeout,
            "pool_pre_ping": True,
            "echo": self.database_echo,
        }


settings = Settings()
