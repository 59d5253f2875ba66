"""Storage helper settings and configuration models."""

from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    enabled: bool = Field(default=True, description="Emit diagnostic log records")
    level: str = Field(
        default="INFO",
        pattern="^(?i:DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level",
    )
    format: str = Field(
        default="console", pattern="^(console|json)$", description="Log format (console, json)"
    )


class PreferencesConfig(BaseModel):
    """Preference-store backend settings."""

    path: str = Field(
        default="~/.storage_helper/preferences.json",
        description="JSON file holding stored preferences",
    )
    in_memory: bool = Field(
        default=False, description="Keep preferences in memory instead of on disk"
    )


class DatabaseConfig(BaseModel):
    """Embedded-database backend settings."""

    url: str = Field(default="sqlite://", description="SQLAlchemy database URL")
    echo: bool = Field(default=False, description="Log emitted SQL statements")
    create_schema: bool = Field(
        default=True,
        description="Create missing tables on startup instead of requiring a migration",
    )
    engine_options: Dict[str, Any] = Field(
        default_factory=dict, description="Extra keyword arguments for create_engine"
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        return self.url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in self.url


class StorageSettings(BaseSettings):
    """Main storage settings, read from STORAGE_HELPER_* environment variables."""

    backend: str = Field(
        default="preferences",
        pattern="^(preferences|database)$",
        description="Storage backend (preferences, database)",
    )
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_HELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "StorageSettings":
        """Load settings from a YAML file. Missing sections keep their defaults."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)


__all__ = [
    "DatabaseConfig",
    "LoggingConfig",
    "PreferencesConfig",
    "StorageSettings",
]
