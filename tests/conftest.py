"""
cf-cache-utils — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
The provider API is never contacted: every HTTP client is backed by
httpx.MockTransport and records the requests it receives.
"""

import json
import logging
import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx
import pytest

from cf_cache_utils.config import AppConfig, PurgeConfig, reset_config
from cf_cache_utils.content import Comment, InMemoryContentRepository
from cf_cache_utils.credentials import Credentials, CredentialStore, reset_settings_factory
from cf_cache_utils.credentials.backends.memory import MemorySettingsStore
from cf_cache_utils.purge import PurgeDispatcher, PurgeLog

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

ZONE = "023e105f4ecef8ad9ca31a8372d0c353"
TOKEN = "Y3ZoT2t0ZW4tZm9yLXRlc3Rz"
EMAIL = "ops@example.com"
FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


class RecordingTransport:
    """MockTransport handler that records requests and answers from a callable."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


def ok_responder(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "errors": [], "result": {"id": ZONE}})


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep real CDN constants, cached singletons and logger changes out of every test."""
    for name in ("CLOUDFLARE_ZONE_ID", "CLOUDFLARE_EMAIL", "CLOUDFLARE_API_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    package_logger = logging.getLogger("cf_cache_utils")
    saved_logger = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    reset_config()
    reset_settings_factory()
    yield
    reset_config()
    reset_settings_factory()
    package_logger.handlers[:] = saved_logger[0]
    package_logger.setLevel(saved_logger[1])
    package_logger.propagate = saved_logger[2]


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "cloudflare-api.log"


@pytest.fixture
def app_config(log_path: Path) -> AppConfig:
    return AppConfig(environment="test", purge=PurgeConfig(log_path=str(log_path)))


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport(ok_responder)


@pytest.fixture
def http_client(transport: RecordingTransport) -> Generator[httpx.Client, None, None]:
    client = httpx.Client(transport=httpx.MockTransport(transport))
    yield client
    client.close()


@pytest.fixture
def make_client() -> Generator[Callable[..., tuple[httpx.Client, RecordingTransport]], None, None]:
    """Factory for clients with a custom responder."""
    clients: list[httpx.Client] = []

    def factory(
        responder: Callable[[httpx.Request], httpx.Response],
    ) -> tuple[httpx.Client, RecordingTransport]:
        recorder = RecordingTransport(responder)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    return MemorySettingsStore({"zone-id": ZONE, "email": EMAIL, "api-token": TOKEN})


@pytest.fixture
def credential_store(settings_store: MemorySettingsStore) -> CredentialStore:
    return CredentialStore(settings_store, environ={})


@pytest.fixture
def credentials(credential_store: CredentialStore) -> Credentials:
    return credential_store.credentials()


@pytest.fixture
def purge_log(log_path: Path) -> PurgeLog:
    return PurgeLog(log_path)


@pytest.fixture
def dispatcher(purge_log: PurgeLog, http_client: httpx.Client) -> PurgeDispatcher:
    return PurgeDispatcher(purge_log, client=http_client)


@pytest.fixture
def content() -> InMemoryContentRepository:
    repo = InMemoryContentRepository(home="https://example.com/")
    repo.add_post(42, status="publish", permalink="https://example.com/hello-world/")
    repo.add_post(7, status="draft", permalink="https://example.com/?p=7")
    repo.add_comment(Comment(comment_id=100, post_id=42, approved="1"))
    return repo


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
