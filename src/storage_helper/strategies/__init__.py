"""Storage strategies: the contract and its built-in implementations."""

from .base import DatabaseSpecificStrategy, StorageStrategy
from .database import DatabaseStrategy, StorageObject
from .preferences import (
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
    PreferencesStrategy,
)

__all__ = [
    "StorageStrategy",
    "DatabaseSpecificStrategy",
    "DatabaseStrategy",
    "StorageObject",
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "JSONFilePreferenceStore",
    "PreferencesStrategy",
]
