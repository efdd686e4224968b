"""
cf-cache-utils — Purge Model Tests
"""

import dataclasses

import pytest

from cf_cache_utils.errors import PurgeError
from cf_cache_utils.purge import Everything, PurgeOutcome, PurgeRequest, PurgeResult, SingleUrl


class TestPurgeRequest:
    """Test suite for PurgeRequest."""

    def test_single_url(self) -> None:
        request = PurgeRequest.single_url("https://example.com/a/")
        assert request.scope == SingleUrl("https://example.com/a/")
        assert request.url == "https://example.com/a/"
        assert request.body() == {"files": ["https://example.com/a/"]}

    def test_everything(self) -> None:
        request = PurgeRequest.everything()
        assert request.scope == Everything()
        assert request.url is None
        assert request.body() == {"purge_everything": True}

    def test_requests_are_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            PurgeRequest.everything().scope = SingleUrl("x")  # type: ignore[misc]


class TestPurgeResult:
    """Test suite for PurgeResult."""

    def test_ok_only_for_200(self) -> None:
        assert PurgeResult.success(200).ok is True
        assert PurgeResult.success(403).ok is False
        assert PurgeResult.transport_error("boom").ok is False
        assert PurgeResult.not_configured().ok is False

    def test_raise_for_outcome_returns_self_on_200(self) -> None:
        result = PurgeResult.success(200, "{}")
        assert result.raise_for_outcome() is result

    @pytest.mark.parametrize(
        "result, fragment",
        [
            (PurgeResult.success(500), "response code: 500"),
            (PurgeResult.transport_error("timed out"), "timed out"),
            (PurgeResult.not_configured(), "not configured"),
        ],
    )
    def test_raise_for_outcome_failures(self, result: PurgeResult, fragment: str) -> None:
        with pytest.raises(PurgeError) as exc_info:
            result.raise_for_outcome()
        assert fragment in exc_info.value.message
        assert exc_info.value.details["outcome"] == result.outcome.value

    def test_outcome_values(self) -> None:
        assert PurgeOutcome.SUCCESS.value == "success"
        assert PurgeOutcome("not_configured") is PurgeOutcome.NOT_CONFIGURED
