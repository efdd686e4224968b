"""
cf-cache-utils — Memory Settings Backend

In-process settings store. Suitable for tests and for deployments where
credentials only ever come from environment constants.
"""

import logging
import threading

from ..interface import SettingsStore

logger = logging.getLogger(__name__)


class MemorySettingsStore(SettingsStore):
    """In-memory settings store guarded by a lock."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        with self._lock:
            self._values[name] = value

    def delete(self, name: str) -> bool:
        with self._lock:
            return self._values.pop(name, None) is not None

    def all(self) -> dict[str, str]:
        with self._lock:
            return dict(self._values)

    def clear(self) -> None:
        with self._lock:
            size = len(self._values)
            self._values.clear()
        logger.info(f"Cleared {size} settings from memory store")
