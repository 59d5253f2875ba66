"""Tests for storage settings."""

import pytest
import yaml
from pydantic import ValidationError

from storage_helper.config import DatabaseConfig, StorageSettings


def test_default_settings(monkeypatch):
    """Test default values when nothing is configured."""
    monkeypatch.delenv("STORAGE_HELPER_BACKEND", raising=False)
    settings = StorageSettings(_env_file=None)

    assert settings.backend == "preferences"
    assert settings.preferences.path == "~/.storage_helper/preferences.json"
    assert settings.database.url == "sqlite://"
    assert settings.database.create_schema is True
    assert settings.logging.enabled is True
    assert settings.logging.format == "console"


def test_environment_overrides(monkeypatch):
    """Test STORAGE_HELPER_* variables, including nested sections."""
    monkeypatch.setenv("STORAGE_HELPER_BACKEND", "database")
    monkeypatch.setenv("STORAGE_HELPER_DATABASE__URL", "sqlite:///app.db")
    monkeypatch.setenv("STORAGE_HELPER_LOGGING__ENABLED", "false")

    settings = StorageSettings(_env_file=None)

    assert settings.backend == "database"
    assert settings.database.url == "sqlite:///app.db"
    assert settings.logging.enabled is False


def test_yaml_settings(tmp_path):
    """Test loading settings from a YAML file."""
    config_path = tmp_path / "storage.yaml"
    config_path.write_text(
        yaml.dump(
            {
                "backend": "database",
                "database": {"url": "sqlite:///data.db", "echo": True},
            }
        )
    )

    settings = StorageSettings.from_yaml(config_path)

    assert settings.backend == "database"
    assert settings.database.echo is True
    assert settings.logging.level == "INFO"


def test_empty_yaml_keeps_defaults(tmp_path):
    config_path = tmp_path / "storage.yaml"
    config_path.write_text("")

    assert StorageSettings.from_yaml(config_path).backend == "preferences"


@pytest.mark.parametrize(
    "overrides",
    [
        {"backend": "redis"},
        {"logging": {"format": "xml"}},
        {"logging": {"level": "LOUD"}},
    ],
)
def test_invalid_settings(overrides):
    with pytest.raises(ValidationError):
        StorageSettings(_env_file=None, **overrides)


@pytest.mark.parametrize(
    "url, in_memory",
    [
        ("sqlite://", True),
        ("sqlite:///:memory:", True),
        ("sqlite:///file:db?mode=memory&uri=true", True),
        ("sqlite:///app.db", False),
        ("postgresql://user@localhost/app", False),
    ],
)
def test_database_url_classification(url, in_memory):
    config = DatabaseConfig(url=url)

    assert config.is_in_memory is in_memory
    assert config.is_sqlite is url.startswith("sqlite")
