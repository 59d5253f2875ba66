"""Storage types accepted by the storage manager."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .config.settings import DatabaseConfig
from .strategies.base import StorageStrategy
from .strategies.preferences import PreferenceStore


@dataclass(frozen=True)
class PreferencesStorage:
    """
    Preference-store backend.

    Pass either a ready ``store`` or a ``path`` for a JSON file store. With
    neither, preferences are kept in memory.
    """

    store: Optional[PreferenceStore] = None
    path: Optional[Union[str, Path]] = None


@dataclass(frozen=True)
class DatabaseStorage:
    """Embedded-database backend with its configuration."""

    config: DatabaseConfig = field(default_factory=DatabaseConfig)


@dataclass(frozen=True)
class CustomStorage:
    """Caller-supplied strategy."""

    strategy: StorageStrategy


StorageType = Union[PreferencesStorage, DatabaseStorage, CustomStorage]

__all__ = ["PreferencesStorage", "DatabaseStorage", "CustomStorage", "StorageType"]
