"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for application settings.
- Load and validate environment variables from `.env` or OS environment.
- Cover both sides of the dashboard:
    * API server (listen address, environment mode, dataset override, log sink)
    * Python client (API base URL, timeout, retry policy)

This module does NOT:
- Open files or sockets.
- Configure logging (see core/logging.py).
"""

from pathlib import Path
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: findash/core/config.py
# .env should be at the project root
_CONFIG_DIR = Path(__file__).parent  # findash/core
_PROJECT_DIR = _CONFIG_DIR.parent.parent
_ENV_FILE = _PROJECT_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: pydantic will look in CWD
    _ENV_FILE_PATH = ".env"


class Settings(BaseSettings):
    """
    Settings container for the dashboard API and its Python client.

    Every value can be overridden through the environment, e.g.
    `PORT=8080 ENVIRONMENT=development findash-server`.
    """

    # Server
    ENVIRONMENT: str = Field(
        "production",
        description="Runtime mode; 'development' exposes stack traces in 500 responses",
    )
    HOST: str = Field("0.0.0.0", description="Interface the API server binds to")
    PORT: int = Field(4000, description="Port the API server listens on")
    CORS_ALLOW_ORIGINS: str = Field(
        "*",
        description="Comma-separated list of allowed CORS origins",
    )

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FILE: str = Field(
        "server.log",
        description="Append-mode log file attached at startup (empty disables)",
    )

    # Dataset
    DATASET_PATH: str = Field(
        "",
        description="Optional JSON file replacing the embedded company dataset",
    )

    # Client
    API_BASE_URL: str = Field(
        "",
        description="Base URL of the dashboard API (empty means http://localhost:<PORT>)",
    )
    API_TIMEOUT_SECONDS: float = Field(10.0, description="Per-request timeout (seconds)")
    API_MAX_ATTEMPTS: int = Field(3, description="Total attempts per client operation")
    API_RETRY_DELAY_SECONDS: float = Field(
        2.0,
        description="Linear backoff step; attempt n waits n * delay before retrying",
    )
    API_MIN_LOADING_DELAY_SECONDS: float = Field(
        0.5,
        description="Minimum duration of a client load, smooths loading indicators",
    )

    @field_validator("ENVIRONMENT", "LOG_LEVEL", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> str:
        """Strip surrounding whitespace from mode strings."""
        if not isinstance(v, str):
            return v
        return v.strip()

    @field_validator("API_BASE_URL", mode="before")
    @classmethod
    def strip_base_url(cls, v: Any) -> str:
        """Drop a trailing slash so endpoint paths can be appended directly."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v or ""

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",")]
        return [o for o in origins if o] or ["*"]

    @property
    def resolved_api_base_url(self) -> str:
        return self.API_BASE_URL or f"http://localhost:{self.PORT}"

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton pattern — settings imported anywhere will reference same object.
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
