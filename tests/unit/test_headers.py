"""
cf-cache-utils — Header Emitter Tests

Covers the concrete header sets for each decision, the debug tag header,
the 301 redirect plan and applying plans to httpx.Headers.
"""

from datetime import UTC, datetime

import httpx
import pytest

from cf_cache_utils.headers import (
    HeaderPlan,
    emit,
    http_date,
    private_plan,
    redirect_headers,
    response_plan,
)
from cf_cache_utils.policy import Deferred, Private, Public, RequestContext

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


def as_dict(pairs: list[tuple[str, str]]) -> dict[str, str]:
    return dict(pairs)


class TestEmit:
    """Test suite for emit()."""

    def test_public_without_debug(self) -> None:
        """Public responses carry cache lifetime and Cache-Tag, no debug tag."""
        headers = as_dict(emit(Public(60), "x", debug_mode=False, now=NOW))

        assert headers["Cache-Control"] == "public, max-age=60, s-maxage=60"
        assert headers["Expires"] == "Mon, 19 Oct 2026 12:01:00 GMT"
        assert headers["Cache-Tag"] == "x"
        assert "PP-Cache-Tag" not in headers

    def test_public_with_debug_adds_pp_cache_tag(self) -> None:
        """Debug mode mirrors the tag into PP-Cache-Tag."""
        headers = as_dict(emit(Public(60), "x", debug_mode=True, now=NOW))
        assert headers["PP-Cache-Tag"] == "x"
        assert headers["Cache-Tag"] == "x"

    def test_public_one_year_expiry(self) -> None:
        """The default lifetime expires a year later."""
        headers = as_dict(emit(Public(), "home", now=NOW))
        assert headers["Cache-Control"] == "public, max-age=31536000, s-maxage=31536000"
        assert headers["Expires"] == "Tue, 19 Oct 2027 12:00:00 GMT"

    def test_public_with_empty_tag(self) -> None:
        """An untagged response still sends an empty Cache-Tag."""
        headers = as_dict(emit(Public(60), "", now=NOW))
        assert headers["Cache-Tag"] == ""

    def test_private_is_already_expired(self) -> None:
        """Private responses expire immediately and carry no tags."""
        headers = emit(Private(), "ignored", debug_mode=True, now=NOW)
        assert headers == [
            ("Cache-Control", "private, max-age=0"),
            ("Expires", "Mon, 19 Oct 2026 12:00:00 GMT"),
        ]

    def test_deferred_emits_nothing(self) -> None:
        """Deferred leaves an earlier decision untouched."""
        assert emit(Deferred(), "x", debug_mode=True, now=NOW) == []

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_public_requires_positive_ttl(self, ttl: int) -> None:
        """A public decision never degrades into private or negative lifetimes."""
        with pytest.raises(ValueError):
            emit(Public(ttl), "home", now=NOW)

    def test_public_one_second(self) -> None:
        headers = as_dict(emit(Public(1), "home", now=NOW))
        assert headers["Cache-Control"] == "public, max-age=1, s-maxage=1"
        assert headers["Expires"] == "Mon, 19 Oct 2026 12:00:01 GMT"

    def test_http_date_treats_naive_as_utc(self) -> None:
        """Naive datetimes are interpreted as UTC."""
        assert http_date(datetime(2026, 1, 2, 3, 4, 5)) == "Fri, 02 Jan 2026 03:04:05 GMT"


class TestPlans:
    """Test suite for header plans."""

    def test_redirect_301_caches_for_a_year_and_strips_headers(self) -> None:
        """Permanent redirects are cacheable and drop body and tag headers."""
        plan = redirect_headers(301, now=NOW)

        assert plan.get("cache-control") == "public, max-age=31536000, s-maxage=31536000"
        assert plan.get("Expires") == "Tue, 19 Oct 2027 12:00:00 GMT"
        assert plan.get("Cache-Tag") is None
        assert set(plan.remove_headers) == {"Content-Type", "Cache-Tag", "PP-Cache-Tag"}

    def test_redirect_rejects_non_positive_ttl(self) -> None:
        with pytest.raises(ValueError):
            redirect_headers(301, ttl=0, now=NOW)

    def test_other_redirects_are_untouched(self) -> None:
        """302 and friends get no headers at all."""
        assert redirect_headers(302, now=NOW).is_empty
        assert redirect_headers(308, now=NOW).is_empty

    def test_apply_to_httpx_headers(self) -> None:
        """Applying a redirect plan replaces and removes case-insensitively."""
        headers = httpx.Headers(
            {
                "content-type": "text/html; charset=UTF-8",
                "cache-tag": "home",
                "pp-cache-tag": "home",
                "cache-control": "no-cache",
                "location": "https://example.com/new/",
            }
        )

        redirect_headers(301, now=NOW).apply(headers)

        assert headers["Cache-Control"] == "public, max-age=31536000, s-maxage=31536000"
        assert "content-type" not in headers
        assert "cache-tag" not in headers
        assert "pp-cache-tag" not in headers
        assert headers["location"] == "https://example.com/new/"

    def test_private_plan(self) -> None:
        """Explicit no-cache requests get the private header pair."""
        plan = private_plan(now=NOW)
        assert plan.get("Cache-Control") == "private, max-age=0"
        assert plan.remove_headers == ()

    def test_response_plan_chains_policy_tags_and_emitter(self) -> None:
        """An anonymous page is public and tagged in classification order."""
        ctx = RequestContext(classification_tags=["single", "postid-42"])
        plan = response_plan(ctx, debug_mode=True, now=NOW)

        assert plan.get("Cache-Tag") == "single,postid-42"
        assert plan.get("PP-Cache-Tag") == "single,postid-42"

    def test_response_plan_for_logged_in_user(self) -> None:
        """Logged-in users never get a Cache-Tag."""
        plan = response_plan(RequestContext(is_authenticated_user=True, classification_tags=["x"]), now=NOW)
        assert plan.get("Cache-Control") == "private, max-age=0"
        assert plan.get("Cache-Tag") is None

    def test_response_plan_deferred_is_empty(self) -> None:
        plan = response_plan(RequestContext(no_cache_already_requested=True), now=NOW)
        assert plan == HeaderPlan()
