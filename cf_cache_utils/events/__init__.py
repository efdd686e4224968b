"""
cf-cache-utils — Events Module

Typed host-platform events, the synchronous event bus, and the invalidation
rules that turn content changes into purges.
"""

from .bus import EventBus
from .models import (
    CommentInserted,
    CommentStatusChanged,
    Event,
    InvalidationEvent,
    NoCacheHeadersSent,
    PostPublished,
    RedirectIssued,
    ResponseSending,
    UserLoggedIn,
)
from .triggers import InvalidationTriggers

__all__ = [
    "EventBus",
    "InvalidationTriggers",
    # Events
    "Event",
    "InvalidationEvent",
    "PostPublished",
    "CommentInserted",
    "CommentStatusChanged",
    "RedirectIssued",
    "ResponseSending",
    "NoCacheHeadersSent",
    "UserLoggedIn",
]
