"""
cf-cache-utils — Settings Store Factory

Canonical factory for creating settings stores based on configuration.

Examples:
    from cf_cache_utils.credentials.factory import create_settings_store

    # Uses env-configured backend (memory by default)
    store = create_settings_store()

    # Or explicitly supply a SettingsConfig (e.g., for tests)
    from cf_cache_utils.config import SettingsBackend, SettingsConfig
    cfg = SettingsConfig(backend=SettingsBackend.JSON, path="/var/lib/cf-utils/settings.json")
    json_store = create_settings_store(cfg, name="site")
"""

from __future__ import annotations

import logging

from ..config import SettingsBackend, SettingsConfig, get_config
from ..errors import ConfigurationError
from .backends.json_file import JsonFileSettingsStore
from .backends.memory import MemorySettingsStore
from .interface import SettingsStore

logger = logging.getLogger(__name__)

# Global settings store registry
_store_instances: dict[str, SettingsStore] = {}


def create_settings_store(
    config: SettingsConfig | None = None,
    name: str = "default",
) -> SettingsStore:
    """
    Create a settings store based on configuration.

    Args:
        config: Settings configuration (uses global config if not provided)
        name: Store instance name

    Returns:
        Configured settings store

    Raises:
        ConfigurationError: If the configured backend is unknown or incomplete
    """
    if name in _store_instances:
        logger.debug("Returning existing settings store: %s", name)
        return _store_instances[name]

    if config is None:
        config = get_config().settings

    logger.info(
        "Creating settings store '%s' with backend: %s",
        name,
        config.backend,
        extra={"store_name": name, "backend": str(config.backend)},
    )

    if config.backend == SettingsBackend.MEMORY:
        store: SettingsStore = MemorySettingsStore()
    elif config.backend == SettingsBackend.JSON:
        if not config.path:
            raise ConfigurationError(
                "SETTINGS_PATH must be set when SETTINGS_BACKEND=json",
                details={"env": "SETTINGS_PATH", "backend": "json"},
            )
        store = JsonFileSettingsStore(config.path)
    else:
        raise ConfigurationError(
            f"Unknown settings backend: {config.backend}",
            details={"backend": str(config.backend), "supported": ["memory", "json"]},
        )

    _store_instances[name] = store
    return store


def get_settings_store(name: str = "default") -> SettingsStore:
    """
    Get an existing settings store by name, creating it from global config if needed.
    """
    if name not in _store_instances:
        logger.debug("Settings store '%s' not found, creating new instance", name)
        return create_settings_store(name=name)

    return _store_instances[name]


def reset_settings_factory() -> None:
    """
    Clear all registered settings stores.

    Warning: Only use this in testing contexts.
    """
    count = len(_store_instances)
    _store_instances.clear()
    logger.debug("Reset settings factory, cleared %d instance reference(s)", count)


def list_settings_stores() -> list[str]:
    """List all registered settings store names."""
    return list(_store_instances.keys())
