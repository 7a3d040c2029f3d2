"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


DEFAULT_REGISTRY_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"


class RateLimitSettings(BaseSettings):
    """Sliding-window admission control toward the remote registry."""

    window_seconds: float = Field(
        1.0,
        description="Length of the rolling window in seconds",
        gt=0,
    )
    max_requests: int = Field(
        5,
        description="Maximum admissions allowed within one rolling window",
        ge=1,
    )
    tick_seconds: float | None = Field(
        None,
        description="Eviction period in seconds (defaults to 1s, or a tenth of windows under 10s)",
        gt=0,
    )
    poll_interval_seconds: float = Field(
        0.01,
        description="Upper bound on how long a blocked caller sleeps between re-checks",
        gt=0,
    )
    admission_timeout_seconds: float | None = Field(
        None,
        description="Gateway only: give up waiting for a slot after this long (None waits indefinitely)",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class RegistrySettings(BaseSettings):
    """Remote document registry endpoint."""

    url: str = Field(
        DEFAULT_REGISTRY_URL,
        description="Endpoint receiving POSTed signed documents",
    )
    timeout_seconds: float = Field(
        30.0,
        description="HTTP timeout for a single submission in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (default logs/app.log)",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


def _build_rate_limit_settings() -> RateLimitSettings:
    """Build rate limit settings from environment.

    Pydantic Settings (v2) populates values from environment variables; the
    factory keeps nested groups re-reading the environment on each Settings().
    """

    return RateLimitSettings()


def _build_registry_settings() -> RegistrySettings:
    return RegistrySettings()


def _build_log_settings() -> LogSettings:
    return LogSettings()


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are invalid.
    """

    app_env: str = APP_ENV
    rate_limit: RateLimitSettings = Field(default_factory=_build_rate_limit_settings)
    registry: RegistrySettings = Field(default_factory=_build_registry_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
