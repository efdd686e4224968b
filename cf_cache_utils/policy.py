"""
cf-cache-utils — Cacheability Policy

Decides, once per response, whether it may be stored in a shared cache.
Rules are evaluated in order and the first match wins:

1. authenticated user          -> Private
2. admin or login surface      -> Private
3. commerce checkout surface   -> Private
4. no-cache already requested  -> Deferred (an earlier stage decided)
5. anything else               -> Public(one year)
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .config.schemas import ONE_YEAR_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Read-only snapshot of the inbound request attributes that matter for caching."""

    is_authenticated_user: bool = False
    is_admin_surface: bool = False
    is_login_surface: bool = False
    is_commerce_checkout_surface: bool = False
    no_cache_already_requested: bool = False
    classification_tags: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.classification_tags, str):
            raise TypeError("classification_tags must be a sequence of tags, not a single string")
        object.__setattr__(self, "classification_tags", tuple(self.classification_tags))


class CacheDecision:
    """Base class of the three cacheability outcomes."""


@dataclass(frozen=True)
class Public(CacheDecision):
    """Cache in shared caches for ttl_seconds."""

    ttl_seconds: int = ONE_YEAR_SECONDS

    def __post_init__(self) -> None:
        if self.ttl_seconds < 1:
            raise ValueError(f"Public ttl_seconds must be at least 1, got {self.ttl_seconds}")


@dataclass(frozen=True)
class Private(CacheDecision):
    """Never store in a shared cache."""


@dataclass(frozen=True)
class Deferred(CacheDecision):
    """Another layer already decided; emit nothing."""


def decide(ctx: RequestContext, public_ttl: int = ONE_YEAR_SECONDS) -> CacheDecision:
    """
    Decide cacheability for one response.

    Args:
        ctx: Request snapshot
        public_ttl: Lifetime used when the response is public

    Returns:
        Public, Private or Deferred
    """
    if ctx.is_authenticated_user:
        reason, decision = "authenticated user", Private()
    elif ctx.is_admin_surface or ctx.is_login_surface:
        reason, decision = "admin or login surface", Private()
    elif ctx.is_commerce_checkout_surface:
        reason, decision = "commerce checkout surface", Private()
    elif ctx.no_cache_already_requested:
        reason, decision = "no-cache already requested", Deferred()
    else:
        reason, decision = "cacheable", Public(ttl_seconds=public_ttl)

    logger.debug(
        f"Cache decision: {type(decision).__name__} ({reason})",
        extra={"decision": type(decision).__name__, "reason": reason},
    )
    return decision
