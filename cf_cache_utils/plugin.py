"""
cf-cache-utils — Composition Root

Builds the runtime from configuration and binds its handlers to the host
platform's event bus.

Usage:
    bus = EventBus()
    utils = CacheUtils.from_config(content=MyContentRepository())
    utils.register(bus)

    plan = bus.publish(ResponseSending(ctx))[0]
    plan.apply(response.headers)
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import httpx

from .actions import ClearCacheAction
from .config import AppConfig, get_config
from .content import ContentRepository
from .credentials.factory import create_settings_store
from .credentials.interface import SettingsStore
from .credentials.store import CredentialStore
from .events.bus import EventBus
from .events.models import (
    CommentInserted,
    CommentStatusChanged,
    NoCacheHeadersSent,
    PostPublished,
    RedirectIssued,
    ResponseSending,
    UserLoggedIn,
)
from .events.triggers import InvalidationTriggers
from .headers import HeaderPlan, private_plan, redirect_headers, response_plan
from .observability import configure_logging
from .purge.dispatcher import PurgeDispatcher
from .purge.log import PurgeLog
from .purge.models import PurgeRequest, PurgeResult
from .security.leaked_credentials import check_leaked_credentials
from .security.nonces import NonceStore

logger = logging.getLogger(__name__)


class CacheUtils:
    """
    Cache-control and purge coordination for one site.

    Args:
        config: Runtime configuration
        content: Host content lookups
        settings_store: Persisted settings (created from config when omitted)
        client: httpx client for the provider API
        environ: Environment mapping for credential constants (os.environ by default)
        lost_password_url: Where leaked-credential logins are sent
        clock: Time source for response headers (tests)
    """

    def __init__(
        self,
        config: AppConfig,
        content: ContentRepository,
        settings_store: SettingsStore | None = None,
        client: httpx.Client | None = None,
        environ: Mapping[str, str] | None = None,
        lost_password_url: str = "/wp-login.php?action=lostpassword",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self.content = content
        self.lost_password_url = lost_password_url
        self._clock = clock

        store = settings_store if settings_store is not None else create_settings_store(config.settings)
        self.credentials = CredentialStore(store, environ=environ)
        self.purge_log = PurgeLog(config.purge.log_path)
        self.dispatcher = PurgeDispatcher(
            self.purge_log,
            api_base=config.purge.api_base,
            client=client,
            timeout=config.purge.timeout_seconds,
        )
        self.triggers = InvalidationTriggers(content, self.dispatcher, self.credentials)
        self.nonces = NonceStore(lifetime_seconds=config.security.nonce_lifetime_seconds)
        self.clear_cache_action = ClearCacheAction(
            self.dispatcher,
            self.credentials,
            self.nonces,
            required_capability=config.security.required_capability,
        )

    @classmethod
    def from_config(cls, content: ContentRepository, **kwargs: Any) -> "CacheUtils":
        """
        Build from the global configuration.

        This is the process startup entry point: it also installs the
        package log handler with the configured level and format.
        """
        config = get_config()
        configure_logging(config.log_level, config.logging.format)
        return cls(config, content, **kwargs)

    def _now(self) -> datetime | None:
        return self._clock() if self._clock else None

    # Response path

    def on_response_sending(self, event: ResponseSending) -> HeaderPlan:
        return response_plan(
            event.context,
            debug_mode=self.config.debug,
            public_ttl=self.config.cache.public_ttl_seconds,
            now=self._now(),
        )

    def on_no_cache_headers(self, event: NoCacheHeadersSent) -> HeaderPlan:
        return private_plan(now=self._now())

    def on_redirect(self, event: RedirectIssued) -> HeaderPlan:
        return redirect_headers(event.status_code, ttl=self.config.cache.public_ttl_seconds, now=self._now())

    # Login

    def on_user_logged_in(self, event: UserLoggedIn) -> str | None:
        redirect = check_leaked_credentials(event.request_headers, self.lost_password_url)
        if redirect:
            logger.warning(
                "Login with exposed credentials, forcing password reset",
                extra={"user_id": event.user_id},
            )
        return redirect

    # Purges

    def clear_cache(self, url: str | None = None) -> PurgeResult:
        """Purge one URL, or the whole zone when url is None or empty."""
        request = PurgeRequest.single_url(url) if url else PurgeRequest.everything()
        return self.dispatcher.purge(request, self.credentials.credentials())

    def register(self, bus: EventBus) -> EventBus:
        """Subscribe every handler; call once at process startup."""
        bus.subscribe(ResponseSending, self.on_response_sending)
        bus.subscribe(NoCacheHeadersSent, self.on_no_cache_headers)
        bus.subscribe(RedirectIssued, self.on_redirect)
        bus.subscribe(PostPublished, self.triggers.handle)
        bus.subscribe(CommentInserted, self.triggers.handle)
        bus.subscribe(CommentStatusChanged, self.triggers.handle)
        bus.subscribe(UserLoggedIn, self.on_user_logged_in)
        logger.info("Registered cache handlers", extra={"debug": self.config.debug})
        return bus

    def close(self) -> None:
        self.dispatcher.close()
