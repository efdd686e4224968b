"""
cf-cache-utils — Header Emitter

Turns a cacheability decision and a cache tag into concrete response
headers. Everything here is pure computation: callers apply the result to
their outbound response, typically through HeaderPlan.apply().
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from email.utils import format_datetime

from . import tags as tag_builder
from .config.schemas import ONE_YEAR_SECONDS
from .policy import CacheDecision, Deferred, Private, Public, RequestContext, decide

CACHE_CONTROL = "Cache-Control"
EXPIRES = "Expires"
CACHE_TAG = "Cache-Tag"
DEBUG_CACHE_TAG = "PP-Cache-Tag"
CONTENT_TYPE = "Content-Type"

# Headers that carry no meaning on a permanent redirect
REDIRECT_STRIPPED_HEADERS = (CONTENT_TYPE, CACHE_TAG, DEBUG_CACHE_TAG)


@dataclass(frozen=True)
class HeaderPlan:
    """Headers to set on a response and header names to strip from it."""

    set_headers: tuple[tuple[str, str], ...] = ()
    remove_headers: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.set_headers and not self.remove_headers

    def get(self, name: str) -> str | None:
        """Value planned for a header (case-insensitive), or None."""
        wanted = name.lower()
        for key, value in self.set_headers:
            if key.lower() == wanted:
                return value
        return None

    def apply(self, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
        """
        Apply the plan to a header mapping, replacing existing values.

        Works with any mutable mapping; pass an ``httpx.Headers`` for
        case-insensitive matching.
        """
        for name, value in self.set_headers:
            headers[name] = value
        for name in self.remove_headers:
            if name in headers:
                del headers[name]
        return headers


def http_date(moment: datetime) -> str:
    """Format a moment as an RFC 1123 GMT date (``Mon, 19 Oct 2026 12:00:00 GMT``)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def _private_headers(now: datetime) -> list[tuple[str, str]]:
    return [
        (CACHE_CONTROL, "private, max-age=0"),
        (EXPIRES, http_date(now)),
    ]


def _public_headers(decision: Public, now: datetime) -> list[tuple[str, str]]:
    ttl = decision.ttl_seconds
    return [
        (CACHE_CONTROL, f"public, max-age={ttl}, s-maxage={ttl}"),
        (EXPIRES, http_date(now + timedelta(seconds=ttl))),
    ]


def emit(
    decision: CacheDecision,
    tag: str,
    debug_mode: bool = False,
    now: datetime | None = None,
) -> list[tuple[str, str]]:
    """
    Compute response headers for a cache decision.

    Args:
        decision: Output of policy.decide()
        tag: Cache-Tag value (may be empty)
        debug_mode: Also expose the tag as PP-Cache-Tag
        now: Clock override for tests

    Returns:
        Ordered (name, value) pairs; empty for Deferred
    """
    now = now or datetime.now(UTC)

    if isinstance(decision, Deferred):
        return []

    if isinstance(decision, Private):
        return _private_headers(now)

    if isinstance(decision, Public):
        headers = _public_headers(decision, now)
        headers.append((CACHE_TAG, tag))
        if debug_mode:
            headers.append((DEBUG_CACHE_TAG, tag))
        return headers

    raise TypeError(f"Unknown cache decision: {decision!r}")


def private_plan(now: datetime | None = None) -> HeaderPlan:
    """Plan for an explicit "do not cache" request from another layer."""
    return HeaderPlan(set_headers=tuple(emit(Private(), "", now=now)))


def redirect_headers(
    status_code: int,
    ttl: int = ONE_YEAR_SECONDS,
    now: datetime | None = None,
) -> HeaderPlan:
    """
    Plan for a redirect response.

    Permanent (301) redirects get the one-year public cache headers and lose
    any Content-Type and cache-tag headers; other redirects are untouched.
    """
    if status_code != 301:
        return HeaderPlan()
    return HeaderPlan(
        set_headers=tuple(_public_headers(Public(ttl), now or datetime.now(UTC))),
        remove_headers=REDIRECT_STRIPPED_HEADERS,
    )


def response_plan(
    ctx: RequestContext,
    debug_mode: bool = False,
    public_ttl: int = ONE_YEAR_SECONDS,
    now: datetime | None = None,
) -> HeaderPlan:
    """Run policy, tag builder and emitter for one response."""
    decision = decide(ctx, public_ttl=public_ttl)
    tag = tag_builder.build(ctx.classification_tags)
    return HeaderPlan(set_headers=tuple(emit(decision, tag, debug_mode=debug_mode, now=now)))
