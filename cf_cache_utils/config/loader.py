"""
cf-cache-utils — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import DEFAULT_API_BASE, ONE_YEAR_SECONDS, AppConfig

logger = logging.getLogger(__name__)

_config_instance: AppConfig | None = None


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> AppConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    timeout = os.getenv("PURGE_TIMEOUT_SECONDS")

    config_dict = {
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "debug": _env_flag("CF_UTILS_DEBUG"),
        "logging": {
            "format": os.getenv("LOG_FORMAT", "json"),
        },
        "cache": {
            "public_ttl_seconds": os.getenv("CACHE_TTL_SECONDS", str(ONE_YEAR_SECONDS)),
        },
        "purge": {
            "api_base": os.getenv("CLOUDFLARE_API_BASE", DEFAULT_API_BASE),
            "log_path": os.getenv("PURGE_LOG_PATH", "./data/cloudflare-api.log"),
            "timeout_seconds": timeout if timeout else None,
        },
        "settings": {
            "backend": os.getenv("SETTINGS_BACKEND", "memory"),
            "path": os.getenv("SETTINGS_PATH"),
        },
        "security": {
            "nonce_lifetime_seconds": os.getenv("NONCE_LIFETIME_SECONDS", "86400"),
        },
    }

    try:
        _config_instance = AppConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (environment: {_config_instance.environment})",
            extra={"environment": _config_instance.environment, "settings_backend": _config_instance.settings.backend},
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> AppConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current AppConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> AppConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded AppConfig instance
    """
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """Forget the loaded configuration. Used by tests."""
    global _config_instance
    _config_instance = None
