"""
cf-cache-utils — Invalidation Trigger Tests

Uses the shared in-memory content fixture:
post 42 published at https://example.com/hello-world/, post 7 a draft,
comment 100 approved on post 42.
"""

import logging

import pytest

from cf_cache_utils.content import Comment, InMemoryContentRepository
from cf_cache_utils.credentials import CredentialStore
from cf_cache_utils.credentials.backends.memory import MemorySettingsStore
from cf_cache_utils.events import (
    CommentInserted,
    CommentStatusChanged,
    InvalidationEvent,
    InvalidationTriggers,
    PostPublished,
    RedirectIssued,
)
from cf_cache_utils.purge import PurgeDispatcher, PurgeOutcome, PurgeRequest

PERMALINK = "https://example.com/hello-world/"
HOME = "https://example.com/"


@pytest.fixture
def triggers(content, dispatcher, credential_store) -> InvalidationTriggers:
    return InvalidationTriggers(content, dispatcher, credential_store)


class TestPurgesFor:
    """Pure purge calculation, nothing is sent."""

    def test_published_post_purges_permalink_then_home(self, triggers: InvalidationTriggers) -> None:
        assert triggers.purges_for(PostPublished(42)) == [
            PurgeRequest.single_url(PERMALINK),
            PurgeRequest.single_url(HOME),
        ]

    @pytest.mark.parametrize("status", ["draft", "pending", "private", "future", "Publish"])
    def test_unpublished_post_purges_nothing(self, content, triggers: InvalidationTriggers, status: str) -> None:
        """Only the exact "publish" status triggers a purge."""
        content.add_post(8, status=status, permalink="https://example.com/eight/")
        assert triggers.purges_for(PostPublished(8)) == []

    def test_unknown_post_purges_nothing(self, triggers: InvalidationTriggers) -> None:
        assert triggers.purges_for(PostPublished(999)) == []

    def test_approved_comment_purges_post(self, triggers: InvalidationTriggers) -> None:
        event = CommentInserted(comment_id=101, post_id=42, approved="1")
        assert triggers.purges_for(event) == [PurgeRequest.single_url(PERMALINK)]

    @pytest.mark.parametrize("approved", ["0", "hold", "spam", "trash"])
    def test_unapproved_comment_purges_nothing(self, triggers: InvalidationTriggers, approved: str) -> None:
        assert triggers.purges_for(CommentInserted(comment_id=101, post_id=42, approved=approved)) == []

    @pytest.mark.parametrize("status", ["approve", "1"])
    def test_comment_approval_purges_post(self, triggers: InvalidationTriggers, status: str) -> None:
        assert triggers.purges_for(CommentStatusChanged(100, status)) == [PurgeRequest.single_url(PERMALINK)]

    @pytest.mark.parametrize("status", ["hold", "0", "spam", "trash", "unapprove"])
    def test_other_status_changes_purge_nothing(self, triggers: InvalidationTriggers, status: str) -> None:
        assert triggers.purges_for(CommentStatusChanged(100, status)) == []

    def test_deleted_comment_is_a_no_op(self, triggers: InvalidationTriggers) -> None:
        """A comment that no longer exists resolves to nothing."""
        assert triggers.purges_for(CommentStatusChanged(555, "approve")) == []

    def test_redirects_never_purge(self, triggers: InvalidationTriggers) -> None:
        assert triggers.purges_for(RedirectIssued(301, "https://example.com/new/")) == []

    def test_missing_permalink_is_skipped(self, dispatcher, credential_store, caplog) -> None:
        """An empty permalink is never turned into a purge of everything."""
        repo = InMemoryContentRepository(home=HOME)
        repo.add_comment(Comment(comment_id=5, post_id=404, approved="1"))
        triggers = InvalidationTriggers(repo, dispatcher, credential_store)

        with caplog.at_level(logging.WARNING):
            assert triggers.purges_for(CommentStatusChanged(5, "approve")) == []

        assert any("No permalink for post 404" in r.getMessage() for r in caplog.records)

    def test_empty_home_url_is_skipped(self, dispatcher, credential_store, transport, caplog) -> None:
        """A site without a home URL still purges the permalink, and only that."""
        repo = InMemoryContentRepository(home="")
        repo.add_post(42, status="publish", permalink="https://example.com/a/")
        triggers = InvalidationTriggers(repo, dispatcher, credential_store)

        with caplog.at_level(logging.WARNING):
            triggers.handle(PostPublished(42))

        assert transport.bodies() == [{"files": ["https://example.com/a/"]}]
        assert any("No home URL" in r.getMessage() for r in caplog.records)

    def test_unsupported_event_type(self, triggers: InvalidationTriggers) -> None:
        class Unknown(InvalidationEvent):
            pass

        with pytest.raises(TypeError):
            triggers.purges_for(Unknown())


class TestHandle:
    """Dispatch through the mocked provider."""

    def test_publish_sends_two_purges(self, triggers: InvalidationTriggers, transport) -> None:
        results = triggers.handle(PostPublished(42))

        assert [r.outcome for r in results] == [PurgeOutcome.SUCCESS, PurgeOutcome.SUCCESS]
        assert transport.bodies() == [{"files": [PERMALINK]}, {"files": [HOME]}]

    def test_draft_sends_nothing(self, triggers: InvalidationTriggers, transport) -> None:
        assert triggers.handle(PostPublished(7)) == []
        assert transport.call_count == 0

    def test_refiring_repeats_purges(self, triggers: InvalidationTriggers, transport) -> None:
        """Every event is handled on its own; nothing is deduplicated."""
        triggers.handle(CommentInserted(comment_id=1, post_id=42, approved="1"))
        triggers.handle(CommentInserted(comment_id=1, post_id=42, approved="1"))
        assert transport.call_count == 2

    def test_not_configured_sends_nothing(self, content, dispatcher: PurgeDispatcher, transport) -> None:
        """Credentials are read at dispatch time; no zone means no calls."""
        triggers = InvalidationTriggers(content, dispatcher, CredentialStore(MemorySettingsStore(), environ={}))

        results = triggers.handle(PostPublished(42))

        assert [r.outcome for r in results] == [PurgeOutcome.NOT_CONFIGURED, PurgeOutcome.NOT_CONFIGURED]
        assert transport.call_count == 0

    def test_credentials_are_read_per_dispatch(
        self, content, dispatcher: PurgeDispatcher, transport, settings_store
    ) -> None:
        triggers = InvalidationTriggers(content, dispatcher, CredentialStore(settings_store, environ={}))
        settings_store.set("zone-id", "other-zone")

        triggers.handle(PostPublished(42))

        assert "/zones/other-zone/purge_cache" in str(transport.requests[0].url)
