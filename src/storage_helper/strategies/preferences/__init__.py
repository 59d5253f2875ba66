"""Preference-store backend."""

from .store import InMemoryPreferenceStore, JSONFilePreferenceStore, PreferenceStore
from .strategy import PreferencesStrategy

__all__ = [
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "JSONFilePreferenceStore",
    "PreferencesStrategy",
]
