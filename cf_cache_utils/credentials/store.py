"""
cf-cache-utils — Credential Store

Resolves CDN credentials from two layers:

1. immutable environment constants (``CLOUDFLARE_ZONE_ID``,
   ``CLOUDFLARE_EMAIL``, ``CLOUDFLARE_API_TOKEN``), snapshotted at
   construction and always authoritative;
2. the mutable settings store, edited by operators.

A field set in the environment is "locked": a settings UI should render it
read-only, and writes to the settings store never override it.
"""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .interface import SettingsStore

logger = logging.getLogger(__name__)

ZONE_ID = "zone-id"
EMAIL = "email"
API_TOKEN = "api-token"

CREDENTIAL_NAMES = (ZONE_ID, EMAIL, API_TOKEN)

_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+\-']+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def constant_name(name: str) -> str:
    """Map a setting name to its environment constant ("zone-id" -> "CLOUDFLARE_ZONE_ID")."""
    return "CLOUDFLARE_" + name.upper().replace("-", "_")


def _mask(value: str | None) -> str | None:
    if value is None:
        return None
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


@dataclass(frozen=True)
class Credentials:
    """Resolved CDN credentials. Any field may be None (unset) or empty."""

    zone_id: str | None = None
    account_email: str | None = None
    api_token: str | None = None

    @property
    def is_configured(self) -> bool:
        """Purges are only attempted when a non-empty zone id is known."""
        return bool(self.zone_id)


class CredentialSettingsInput(BaseModel):
    """Sanitized form of operator-submitted credential settings."""

    zone_id: str = Field(default="", alias="zone-id")
    email: str = Field(default="")
    api_token: str = Field(default="", alias="api-token")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("zone_id", "api_token", mode="before")
    @classmethod
    def sanitize_text(cls, v: object) -> str:
        """Drop control characters and surrounding whitespace."""
        if v is None:
            return ""
        return _CONTROL_RE.sub("", str(v)).strip()

    @field_validator("email", mode="before")
    @classmethod
    def sanitize_email(cls, v: object) -> str:
        """Keep a syntactically valid address, otherwise store an empty string."""
        if v is None:
            return ""
        candidate = str(v).strip()
        return candidate if _EMAIL_RE.match(candidate) else ""

    def as_settings(self) -> dict[str, str]:
        return {ZONE_ID: self.zone_id, EMAIL: self.email, API_TOKEN: self.api_token}


class CredentialStore:
    """
    Layered credential resolver.

    Args:
        settings: Mutable persisted settings
        environ: Environment mapping to snapshot (defaults to os.environ)
    """

    def __init__(self, settings: SettingsStore, environ: Mapping[str, str] | None = None):
        source = os.environ if environ is None else environ
        self._constants = MappingProxyType(
            {name: source[constant_name(name)] for name in CREDENTIAL_NAMES if constant_name(name) in source}
        )
        self.settings = settings

    def resolve(self, name: str) -> str | None:
        """
        Resolve one credential.

        Returns the environment constant if defined, else the stored
        setting, else None. Empty strings are returned unchanged.
        """
        if name in self._constants:
            return self._constants[name]
        return self.settings.get(name)

    def is_locked(self, name: str) -> bool:
        """True when an environment constant overrides the stored setting."""
        return name in self._constants

    def credentials(self) -> Credentials:
        """Resolve all three credentials at once."""
        return Credentials(
            zone_id=self.resolve(ZONE_ID),
            account_email=self.resolve(EMAIL),
            api_token=self.resolve(API_TOKEN),
        )

    def describe(self) -> list[dict[str, object]]:
        """
        Describe each credential for a settings screen.

        Returns:
            One entry per credential with its source ("environment",
            "settings" or "unset"), lock state and masked value
        """
        rows: list[dict[str, object]] = []
        for name in CREDENTIAL_NAMES:
            if self.is_locked(name):
                source = "environment"
            elif self.settings.get(name) is not None:
                source = "settings"
            else:
                source = "unset"
            value = self.resolve(name)
            rows.append(
                {
                    "name": name,
                    "constant": constant_name(name),
                    "source": source,
                    "locked": self.is_locked(name),
                    "value": value if name == EMAIL else _mask(value),
                }
            )
        return rows

    def update_settings(self, values: Mapping[str, object]) -> dict[str, str]:
        """
        Sanitize and persist operator-submitted settings.

        Locked fields are stored too, but resolve() keeps returning the
        environment constant for them.

        Returns:
            The sanitized values that were written
        """
        sanitized = CredentialSettingsInput.model_validate(dict(values)).as_settings()
        self.settings.update(sanitized)
        locked = [name for name in sanitized if self.is_locked(name)]
        logger.info(
            "Stored credential settings",
            extra={"fields": list(sanitized), "locked_fields": locked},
        )
        return sanitized
