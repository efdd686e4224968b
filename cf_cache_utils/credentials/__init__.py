"""
cf-cache-utils — Credentials Module

Credential resolution (environment constants over persisted settings) and
the pluggable settings stores behind it.

Usage:
    from cf_cache_utils.credentials import CredentialStore, create_settings_store

    creds = CredentialStore(create_settings_store()).credentials()
    if creds.is_configured:
        ...
"""

from .factory import (
    create_settings_store,
    get_settings_store,
    list_settings_stores,
    reset_settings_factory,
)
from .interface import SettingsStore
from .store import (
    API_TOKEN,
    CREDENTIAL_NAMES,
    EMAIL,
    ZONE_ID,
    CredentialSettingsInput,
    Credentials,
    CredentialStore,
    constant_name,
)

__all__ = [
    # Resolver
    "CredentialStore",
    "Credentials",
    "CredentialSettingsInput",
    "constant_name",
    "ZONE_ID",
    "EMAIL",
    "API_TOKEN",
    "CREDENTIAL_NAMES",
    # Settings stores
    "SettingsStore",
    "create_settings_store",
    "get_settings_store",
    "list_settings_stores",
    "reset_settings_factory",
]
