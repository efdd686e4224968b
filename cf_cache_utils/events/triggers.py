"""
cf-cache-utils — Invalidation Triggers

Maps content-lifecycle events to purge requests and dispatches them.

Rules (each independent, safe to re-fire):
- PostPublished: only when the post status is exactly "publish";
  purges the permalink, then the site root
- CommentInserted: only when the comment is approved ("1");
  purges the post permalink
- CommentStatusChanged: only for "approve" or "1"; purges the permalink of
  the comment's post, nothing if the comment no longer exists
- RedirectIssued: never purges (handled by the redirect header plan)
"""

import logging

from ..content import PUBLISH, ContentRepository
from ..credentials.store import CredentialStore
from ..purge.dispatcher import PurgeDispatcher
from ..purge.models import PurgeRequest, PurgeResult
from .models import (
    CommentInserted,
    CommentStatusChanged,
    InvalidationEvent,
    PostPublished,
    RedirectIssued,
)

logger = logging.getLogger(__name__)

APPROVED = "1"
APPROVING_STATUSES = ("approve", APPROVED)


class InvalidationTriggers:
    """
    Purge calculation and dispatch for lifecycle events.

    Args:
        content: Host content lookups
        dispatcher: Purge dispatcher
        credentials: Credential resolver, consulted on every dispatch
    """

    def __init__(
        self,
        content: ContentRepository,
        dispatcher: PurgeDispatcher,
        credentials: CredentialStore,
    ) -> None:
        self.content = content
        self.dispatcher = dispatcher
        self.credentials = credentials

    def _single_url_purge(self, url: str, what: str, **context: object) -> list[PurgeRequest]:
        if not url:
            logger.warning(f"No {what}, skipping purge", extra=context)
            return []
        return [PurgeRequest.single_url(url)]

    def _permalink_purge(self, post_id: int) -> list[PurgeRequest]:
        return self._single_url_purge(self.content.permalink(post_id), f"permalink for post {post_id}", post_id=post_id)

    def purges_for(self, event: InvalidationEvent) -> list[PurgeRequest]:
        """
        Compute the purges an event calls for, without sending anything.
        """
        if isinstance(event, PostPublished):
            if self.content.post_status(event.post_id) != PUBLISH:
                return []
            requests = self._permalink_purge(event.post_id)
            return requests + self._single_url_purge(self.content.home_url(), "home URL")

        if isinstance(event, CommentInserted):
            if event.approved != APPROVED:
                return []
            return self._permalink_purge(event.post_id)

        if isinstance(event, CommentStatusChanged):
            if event.new_status not in APPROVING_STATUSES:
                return []
            comment = self.content.get_comment(event.comment_id)
            if comment is None:
                return []
            return self._permalink_purge(comment.post_id)

        if isinstance(event, RedirectIssued):
            return []

        raise TypeError(f"Unsupported invalidation event: {event!r}")

    def handle(self, event: InvalidationEvent) -> list[PurgeResult]:
        """Compute and send the purges for an event."""
        requests = self.purges_for(event)
        if not requests:
            return []

        creds = self.credentials.credentials()
        results = [self.dispatcher.purge(request, creds) for request in requests]
        logger.debug(
            f"{type(event).__name__} dispatched {len(results)} purge(s)",
            extra={
                "event_type": type(event).__name__,
                "purge_urls": [r.url for r in requests],
                "outcomes": [r.outcome.value for r in results],
            },
        )
        return results
