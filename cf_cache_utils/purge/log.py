"""
cf-cache-utils — Purge Log

Append-only diagnostic log with one free-form block per purge attempt:

    [2026-10-19 12:00:00] Request: https://api.cloudflare.com/client/v4/zones/<zone>/purge_cache
    Headers: {"x-auth-email":"ops@example.com","authorization":"bearer ****abcd",...}
    Body: {"files":["https://example.com/post/"]}
    Response: {"success":true,...}

Each block is written with a single append, so concurrent writers never
interleave inside a record.
"""

import json
import logging
import os
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)

_SECRET_HEADERS = ("authorization",)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy headers with bearer tokens reduced to their last four characters."""
    redacted: dict[str, str] = {}
    for name, value in headers.items():
        if name.lower() in _SECRET_HEADERS:
            scheme, _, token = value.partition(" ")
            tail = token[-4:] if len(token) > 8 else ""
            value = f"{scheme} ****{tail}" if token else value
        redacted[name] = value
    return redacted


class PurgeLog:
    """Append-only purge log file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def format_record(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: str,
        response_body: str,
        when: datetime | None = None,
    ) -> str:
        when = when or datetime.now(UTC)
        return (
            f"[{when.strftime('%Y-%m-%d %H:%M:%S')}] Request: {endpoint}\n"
            f"Headers: {json.dumps(redact_headers(headers), separators=(',', ':'))}\n"
            f"Body: {body}\n"
            f"Response: {response_body}\n\n"
        )

    def append(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        body: str,
        response_body: str,
        when: datetime | None = None,
    ) -> None:
        """
        Append one record.

        A log write failure is reported through logging and never
        interrupts the purge that produced it.
        """
        record = self.format_record(endpoint, headers, body, response_body, when)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o640)
            try:
                os.write(fd, record.encode("utf-8"))
            finally:
                os.close(fd)
        except OSError as e:
            logger.error(
                f"Failed to append purge log record to {self.path}: {e}",
                extra={"path": str(self.path), "error": str(e)},
                exc_info=True,
            )

    def read(self) -> str:
        """Return the whole log (empty if nothing was written yet)."""
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")
