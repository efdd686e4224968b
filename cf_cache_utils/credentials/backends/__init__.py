"""Settings store backends."""

from .json_file import JsonFileSettingsStore
from .memory import MemorySettingsStore

__all__ = ["JsonFileSettingsStore", "MemorySettingsStore"]
