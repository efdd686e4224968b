"""
cf-cache-utils — Purge Models

Immutable request and result values exchanged with the purge dispatcher.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import PurgeError


class PurgeScope:
    """Base class for what a purge targets."""


@dataclass(frozen=True)
class Everything(PurgeScope):
    """The entire zone."""


@dataclass(frozen=True)
class SingleUrl(PurgeScope):
    """A single cached URL."""

    url: str


@dataclass(frozen=True)
class PurgeRequest:
    """A purge to send to the provider."""

    scope: PurgeScope

    @classmethod
    def everything(cls) -> "PurgeRequest":
        return cls(Everything())

    @classmethod
    def single_url(cls, url: str) -> "PurgeRequest":
        return cls(SingleUrl(url))

    @property
    def url(self) -> str | None:
        return self.scope.url if isinstance(self.scope, SingleUrl) else None

    def body(self) -> dict[str, Any]:
        """Provider request body for this scope."""
        if isinstance(self.scope, SingleUrl):
            return {"files": [self.scope.url]}
        return {"purge_everything": True}


class PurgeOutcome(str, Enum):
    """How a purge attempt ended."""

    SUCCESS = "success"  # provider answered; status_code may still be non-200
    TRANSPORT_ERROR = "transport_error"
    NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True)
class PurgeResult:
    """Outcome of one purge attempt."""

    outcome: PurgeOutcome
    status_code: int | None = None
    message: str | None = None
    response_body: str | None = None

    @classmethod
    def success(cls, status_code: int, response_body: str = "") -> "PurgeResult":
        return cls(PurgeOutcome.SUCCESS, status_code=status_code, response_body=response_body)

    @classmethod
    def transport_error(cls, message: str) -> "PurgeResult":
        return cls(PurgeOutcome.TRANSPORT_ERROR, message=message)

    @classmethod
    def not_configured(cls) -> "PurgeResult":
        return cls(PurgeOutcome.NOT_CONFIGURED)

    @property
    def ok(self) -> bool:
        """True only when the provider answered 200."""
        return self.outcome == PurgeOutcome.SUCCESS and self.status_code == 200

    def raise_for_outcome(self) -> "PurgeResult":
        """
        Raise PurgeError unless the provider answered 200.

        Returns:
            self, to allow chaining
        """
        if self.outcome == PurgeOutcome.TRANSPORT_ERROR:
            raise PurgeError(f"Cloudflare cache purge failed: {self.message}", details={"outcome": self.outcome.value})
        if self.outcome == PurgeOutcome.NOT_CONFIGURED:
            raise PurgeError("Cloudflare zone is not configured", details={"outcome": self.outcome.value})
        if self.status_code != 200:
            raise PurgeError(
                f"Cloudflare cache purge failed with response code: {self.status_code}",
                details={"outcome": self.outcome.value, "status_code": self.status_code},
            )
        return self
