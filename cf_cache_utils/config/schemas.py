"""
cf-cache-utils — Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All runtime configuration is defined here and validated at startup.

CDN credentials are deliberately absent: they are resolved through the
credential store so environment constants and persisted settings share one
precedence rule.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_BASE = "https://api.cloudflare.com/client/v4"
ONE_YEAR_SECONDS = 365 * 24 * 60 * 60


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class SettingsBackend(str, Enum):
    """Supported persisted-settings backends."""

    MEMORY = "memory"
    JSON = "json"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    format: LogFormat = Field(default=LogFormat.JSON, description="Log record format")


class CacheConfig(BaseModel):
    """Response cache-header configuration."""

    public_ttl_seconds: int = Field(
        default=ONE_YEAR_SECONDS,
        ge=1,
        description="Lifetime for publicly cacheable responses and 301 redirects",
    )


class PurgeConfig(BaseModel):
    """Purge dispatcher configuration."""

    api_base: str = Field(default=DEFAULT_API_BASE, description="Provider API base URL")
    log_path: str = Field(default="./data/cloudflare-api.log", description="Append-only purge log file")
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP timeout for purge calls (None = transport default)",
    )

    @field_validator("api_base")
    @classmethod
    def validate_api_base(cls, v: str) -> str:
        """Require an absolute http(s) base URL, stored without trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("api_base must be an absolute http(s) URL")
        return v.rstrip("/")


class SettingsConfig(BaseModel):
    """Persisted settings store configuration."""

    backend: SettingsBackend = Field(default=SettingsBackend.MEMORY, description="Settings backend to use")
    path: str | None = Field(default=None, validate_default=True, description="Settings file path (json backend)")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None, info: Any) -> str | None:
        """Ensure path is provided when backend is json."""
        backend = info.data.get("backend")
        if backend == SettingsBackend.JSON and not v:
            raise ValueError("path is required when settings backend is 'json'")
        return v


class SecurityConfig(BaseModel):
    """Interactive action security configuration."""

    nonce_lifetime_seconds: int = Field(default=86400, ge=1, description="One-time token lifetime")
    required_capability: str = Field(default="manage_options", description="Capability for clear-cache")


class AppConfig(BaseModel):
    """Root configuration for cf-cache-utils."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    debug: bool = Field(default=False, description="Debug mode (adds PP-Cache-Tag)")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    purge: PurgeConfig = Field(default_factory=PurgeConfig)
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
