"""
cf-cache-utils — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config, reset_config
from .schemas import (
    DEFAULT_API_BASE,
    ONE_YEAR_SECONDS,
    AppConfig,
    CacheConfig,
    Environment,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PurgeConfig,
    SecurityConfig,
    SettingsBackend,
    SettingsConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    # Main config
    "AppConfig",
    # Constants
    "DEFAULT_API_BASE",
    "ONE_YEAR_SECONDS",
    # Enums
    "Environment",
    "SettingsBackend",
    "LogLevel",
    "LogFormat",
    # Config sections
    "LoggingConfig",
    "CacheConfig",
    "PurgeConfig",
    "SettingsConfig",
    "SecurityConfig",
]
