"""Configuration management for storage helper."""

from .settings import DatabaseConfig, LoggingConfig, PreferencesConfig, StorageSettings

__all__ = ["DatabaseConfig", "LoggingConfig", "PreferencesConfig", "StorageSettings"]
