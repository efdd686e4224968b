"""
cf-cache-utils — JSON File Settings Backend

Persists settings as a single JSON object on disk. Every write replaces the
file through a temporary sibling and an atomic rename, so readers never see
a half-written document.
"""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path

from ...errors import SettingsError
from ..interface import SettingsStore

logger = logging.getLogger(__name__)


class JsonFileSettingsStore(SettingsStore):
    """
    File-backed settings store.

    Features:
    - Missing file reads as an empty store
    - Atomic replace on every write
    - Non-string values in the file are rejected on load
    """

    def __init__(self, path: str | Path):
        """
        Initialize JSON settings backend.

        Args:
            path: Location of the settings document
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(
                f"Failed to read settings file {self.path}: {e}",
                extra={"path": str(self.path), "error": str(e)},
                exc_info=True,
            )
            raise SettingsError(
                f"Failed to read settings file: {e}",
                details={"path": str(self.path), "error": str(e)},
            ) from e

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise SettingsError(
                "Settings file must contain a JSON object of strings",
                details={"path": str(self.path)},
            )
        return data

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".settings-", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(values, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            logger.error(
                f"Failed to write settings file {self.path}: {e}",
                extra={"path": str(self.path), "error": str(e)},
                exc_info=True,
            )
            raise SettingsError(
                f"Failed to write settings file: {e}",
                details={"path": str(self.path), "error": str(e)},
            ) from e

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._load().get(name)

    def set(self, name: str, value: str) -> None:
        with self._lock:
            values = self._load()
            values[name] = value
            self._write(values)

    def delete(self, name: str) -> bool:
        with self._lock:
            values = self._load()
            if name not in values:
                return False
            del values[name]
            self._write(values)
            return True

    def all(self) -> dict[str, str]:
        with self._lock:
            return self._load()

    def clear(self) -> None:
        with self._lock:
            self._write({})
        logger.info(f"Cleared settings file {self.path}")

    def update(self, values: Mapping[str, str]) -> int:
        """Store several settings with a single file write."""
        with self._lock:
            current = self._load()
            current.update(values)
            self._write(current)
        return len(values)
