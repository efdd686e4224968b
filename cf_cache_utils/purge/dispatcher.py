"""
cf-cache-utils — Purge Dispatcher

Sends cache purge requests to the Cloudflare API.

Behavior:
- No zone id: return NOT_CONFIGURED without touching the network or the log
- One synchronous POST per request, never retried
- Every attempt is appended to the purge log
- Transport failures and non-200 answers are logged, never raised
"""

import json
import logging
from typing import Any

import httpx

from ..config.schemas import DEFAULT_API_BASE
from ..credentials.store import Credentials
from .log import PurgeLog
from .models import PurgeRequest, PurgeResult

logger = logging.getLogger(__name__)


def encode_body(body: dict[str, Any]) -> str:
    """Compact JSON with slashes and non-ASCII characters left unescaped."""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


class PurgeDispatcher:
    """
    Client for the provider's purge_cache endpoint.

    Args:
        log: Append-only purge log
        api_base: Provider API base URL
        client: Pre-built httpx client (tests pass one with a MockTransport)
        timeout: Request timeout in seconds (None keeps the httpx default)
    """

    def __init__(
        self,
        log: PurgeLog,
        api_base: str = DEFAULT_API_BASE,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.log = log
        self.api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            if self._timeout is None:
                self._client = httpx.Client()
            else:
                self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def endpoint(self, zone_id: str) -> str:
        return f"{self.api_base}/zones/{zone_id}/purge_cache"

    @staticmethod
    def build_headers(creds: Credentials) -> dict[str, str]:
        return {
            "x-auth-email": creds.account_email or "",
            "authorization": f"bearer {creds.api_token or ''}",
            "content-type": "application/json",
        }

    def purge(self, request: PurgeRequest, creds: Credentials) -> PurgeResult:
        """
        Send one purge request.

        Args:
            request: What to purge
            creds: Resolved credentials

        Returns:
            PurgeResult; never raises for provider or network failures
        """
        if not creds.is_configured:
            logger.debug("Skipping purge, no zone id configured")
            return PurgeResult.not_configured()

        url = self.endpoint(creds.zone_id)  # type: ignore[arg-type]
        headers = self.build_headers(creds)
        body = encode_body(request.body())

        try:
            response = self.client.post(url, headers=headers, content=body.encode("utf-8"))
        except httpx.HTTPError as e:
            self.log.append(url, headers, body, "")
            logger.error(
                f"Cloudflare cache purge failed: {e}",
                extra={"endpoint": url, "purge_url": request.url, "error": str(e)},
            )
            return PurgeResult.transport_error(str(e) or type(e).__name__)

        self.log.append(url, headers, body, response.text)

        if response.status_code != 200:
            logger.error(
                f"Cloudflare cache purge failed with response code: {response.status_code}",
                extra={"endpoint": url, "purge_url": request.url, "status_code": response.status_code},
            )
        else:
            logger.info(
                "Cloudflare cache purged",
                extra={"purge_url": request.url, "purge_everything": request.url is None},
            )

        return PurgeResult.success(response.status_code, response.text)

    def close(self) -> None:
        """Close the HTTP client if this dispatcher created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "PurgeDispatcher":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
