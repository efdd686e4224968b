"""
cf-cache-utils — Observability Module

Logging setup for the runtime. Purge attempts are additionally recorded in
the append-only purge log (see ``cf_cache_utils.purge.log``).

Usage:
    from cf_cache_utils.observability import configure_logging, request_scope

    configure_logging("INFO", "json")
    with request_scope():
        ...
"""

from .monitoring import JSONFormatter, configure_logging, get_request_id, request_scope

__all__ = [
    "JSONFormatter",
    "configure_logging",
    "get_request_id",
    "request_scope",
]
