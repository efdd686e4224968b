"""
cf-cache-utils — Event Types

Typed notifications published by the host platform. Each class is also the
subscription key on the event bus.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..policy import RequestContext


class Event:
    """Base class for every bus event."""


class InvalidationEvent(Event):
    """Content-lifecycle events that may require a purge."""


@dataclass(frozen=True)
class PostPublished(InvalidationEvent):
    """A post was saved; it may or may not be in the "publish" state."""

    post_id: int


@dataclass(frozen=True)
class CommentInserted(InvalidationEvent):
    """A comment was inserted with the given approval state ("1" = approved)."""

    comment_id: int
    post_id: int
    approved: str


@dataclass(frozen=True)
class CommentStatusChanged(InvalidationEvent):
    """A comment's moderation status changed ("approve", "1", "hold", "spam", ...)."""

    comment_id: int
    new_status: str


@dataclass(frozen=True)
class RedirectIssued(InvalidationEvent):
    """The platform is about to send a redirect."""

    status_code: int
    location: str = ""


@dataclass(frozen=True)
class ResponseSending(Event):
    """Response headers are about to be sent."""

    context: RequestContext


@dataclass(frozen=True)
class NoCacheHeadersSent(Event):
    """Another layer explicitly asked for the response not to be cached."""


@dataclass(frozen=True)
class UserLoggedIn(Event):
    """A user finished logging in."""

    user_id: int
    request_headers: Mapping[str, str] = field(default_factory=dict)
