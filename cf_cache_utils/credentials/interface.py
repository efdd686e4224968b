"""
cf-cache-utils — Settings Store Interface

Defines the abstract interface that all persisted-settings backends must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping


class SettingsStore(ABC):
    """
    Abstract base class for persisted settings backends.

    Holds the mutable, operator-editable settings (zone id, email, API token).
    Values are plain strings; an empty string is a stored value, distinct
    from a missing key.
    """

    @abstractmethod
    def get(self, name: str) -> str | None:
        """
        Retrieve a stored setting.

        Args:
            name: Setting name (e.g. "zone-id")

        Returns:
            Stored value, or None if the setting was never stored
        """
        pass

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """
        Store a setting, replacing any previous value.

        Args:
            name: Setting name
            value: Value to store (may be empty)
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> bool:
        """
        Delete a setting.

        Returns:
            True if the setting existed, False otherwise
        """
        pass

    @abstractmethod
    def all(self) -> dict[str, str]:
        """Return a copy of every stored setting."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored setting."""
        pass

    def update(self, values: Mapping[str, str]) -> int:
        """
        Store several settings.

        Default implementation calls set() for each item.
        Backends can override to write once.

        Returns:
            Number of settings written
        """
        count = 0
        for name, value in values.items():
            self.set(name, value)
            count += 1
        return count
