"""
Shared pytest fixtures for storage helper tests.

Provides managers for both built-in backends and keeps the process-wide
logger in a known state between tests.
"""

import logging

import pytest
import structlog

from storage_helper import (
    DatabaseConfig,
    DatabaseStorage,
    PreferencesStorage,
    StorageLogger,
    StorageManager,
)
from storage_helper.logging import LOGGER_NAME
from tests.utils.sample_data import User


@pytest.fixture(autouse=True)
def enable_shared_logger():
    """Re-enable the shared logger after tests that toggle it."""
    yield
    StorageLogger.shared().set_logging_enabled(True)


@pytest.fixture
def storage_logger() -> StorageLogger:
    """Provide a logger that is independent of the shared instance."""
    return StorageLogger()


@pytest.fixture
def preferences_manager(storage_logger):
    """Provide a manager backed by an in-memory preference store."""
    manager = StorageManager(PreferencesStorage(), logger=storage_logger)
    yield manager
    manager.close()


@pytest.fixture
def database_manager(storage_logger):
    """Provide a manager backed by an in-memory SQLite database."""
    manager = StorageManager(
        DatabaseStorage(DatabaseConfig(url="sqlite://")), logger=storage_logger
    )
    yield manager
    manager.close()


@pytest.fixture(params=["preferences", "database"])
def manager(request, preferences_manager, database_manager):
    """Provide a manager for each built-in backend."""
    if request.param == "preferences":
        return preferences_manager
    return database_manager


@pytest.fixture
def sample_user() -> User:
    return User(id=1, name="Jane Doe", tags=["admin"])


@pytest.fixture
def restore_logging():
    """Undo structlog and stdlib handler configuration made by a test."""
    yield
    structlog.reset_defaults()
    storage_logger = logging.getLogger(LOGGER_NAME)
    storage_logger.handlers = []
    storage_logger.setLevel(logging.NOTSET)
    storage_logger.propagate = True
