"""
cf-cache-utils — Purge Module

Purge requests and results, the provider dispatcher and the append-only log.

Usage:
    from cf_cache_utils.purge import PurgeDispatcher, PurgeLog, PurgeRequest

    dispatcher = PurgeDispatcher(PurgeLog("./data/cloudflare-api.log"))
    result = dispatcher.purge(PurgeRequest.single_url("https://example.com/"), creds)
"""

from .dispatcher import PurgeDispatcher, encode_body
from .log import PurgeLog, redact_headers
from .models import (
    Everything,
    PurgeOutcome,
    PurgeRequest,
    PurgeResult,
    PurgeScope,
    SingleUrl,
)

__all__ = [
    "PurgeDispatcher",
    "encode_body",
    "PurgeLog",
    "redact_headers",
    "PurgeRequest",
    "PurgeResult",
    "PurgeOutcome",
    "PurgeScope",
    "Everything",
    "SingleUrl",
]
