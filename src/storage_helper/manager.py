"""Storage manager that dispatches to a single pluggable strategy."""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from .config.settings import StorageSettings
from .exceptions import (
    InvalidKeyError,
    ManagerInitializationError,
    StrategyNotInitializedError,
    UnsupportedStorageTypeError,
)
from .locks import ReadWriteLock
from .logging import StorageLogger, setup_logging
from .storage_type import CustomStorage, DatabaseStorage, PreferencesStorage, StorageType
from .strategies.base import DatabaseSpecificStrategy, StorageStrategy
from .strategies.database import DatabaseStrategy
from .strategies.preferences import (
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferencesStrategy,
)

T = TypeVar("T")


class StorageManager:
    """
    Unified save/fetch/delete interface over interchangeable storage backends.

    The backend is chosen once from the storage type given at construction.
    Fetches run concurrently under a shared lock; saves and deletes hold an
    exclusive lock.

    Example:
        manager = StorageManager(DatabaseStorage(DatabaseConfig(url="sqlite:///app.db")))
        manager.save(profile, "profile")
        profile = manager.fetch("profile", Profile)
    """

    def __init__(
        self,
        storage_type: StorageType,
        *,
        strict: bool = True,
        logger: Optional[StorageLogger] = None,
    ):
        """
        Initialize the manager and build its strategy.

        Args:
            storage_type: PreferencesStorage, DatabaseStorage or CustomStorage
            strict: Raise when the strategy cannot be built. When False the
                failure is logged and the manager stays uninitialized.
            logger: Logger to use instead of the process-wide one

        Raises:
            ManagerInitializationError: If the strategy cannot be built and
                ``strict`` is set. The original error is kept as ``cause``.
        """
        self.storage_type = storage_type
        self._storage_logger = logger or StorageLogger.shared()
        self.logger = self._storage_logger.bind(component="storage_manager")
        self._lock = ReadWriteLock()
        self._strategy: Optional[StorageStrategy] = None

        try:
            self._strategy = self._build_strategy(storage_type)
        except Exception as exc:
            self.logger.error(
                "Failed to initialize storage manager",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            if strict:
                raise ManagerInitializationError(
                    details={"storage_type": type(storage_type).__name__}, cause=exc
                ) from exc
        else:
            self.logger.info(
                "Storage manager initialized",
                strategy=type(self._strategy).__name__,
            )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[StorageSettings] = None,
        *,
        strict: bool = True,
        logger: Optional[StorageLogger] = None,
    ) -> StorageManager:
        """
        Build a manager from StorageSettings (environment defaults if omitted).

        Also configures structlog output from the logging section.
        """
        settings = settings or StorageSettings()
        setup_logging(log_level=settings.logging.level, log_format=settings.logging.format)
        (logger or StorageLogger.shared()).set_logging_enabled(settings.logging.enabled)

        storage_type: StorageType
        if settings.backend == "database":
            storage_type = DatabaseStorage(settings.database)
        elif settings.preferences.in_memory:
            storage_type = PreferencesStorage()
        else:
            storage_type = PreferencesStorage(path=settings.preferences.path)
        return cls(storage_type, strict=strict, logger=logger)

    def _build_strategy(self, storage_type: StorageType) -> StorageStrategy:
        if isinstance(storage_type, PreferencesStorage):
            if storage_type.store is not None:
                store = storage_type.store
            elif storage_type.path is not None:
                store = JSONFilePreferenceStore(storage_type.path)
            else:
                store = InMemoryPreferenceStore()
            return PreferencesStrategy(store, logger=self._storage_logger)

        if isinstance(storage_type, DatabaseStorage):
            return DatabaseStrategy(storage_type.config, logger=self._storage_logger)

        if isinstance(storage_type, CustomStorage):
            strategy = storage_type.strategy
            if not all(
                callable(getattr(strategy, name, None))
                for name in ("save", "fetch", "delete")
            ):
                raise UnsupportedStorageTypeError(
                    details={"strategy": type(strategy).__name__}
                )
            return strategy

        raise UnsupportedStorageTypeError(
            details={"storage_type": type(storage_type).__name__}
        )

    def _require_strategy(self) -> StorageStrategy:
        if self._strategy is None:
            self.logger.error("Storage strategy is not initialized")
            raise StrategyNotInitializedError()
        return self._strategy

    def _validate_key(self, key: Any) -> None:
        if not isinstance(key, str) or not key:
            self.logger.error("Invalid storage key", key=repr(key))
            raise InvalidKeyError(details={"key": repr(key)})

    @property
    def is_initialized(self) -> bool:
        return self._strategy is not None

    @property
    def strategy(self) -> Optional[StorageStrategy]:
        return self._strategy

    def save(self, item: Any, key: str) -> None:
        """
        Save an item under a key.

        Raises:
            InvalidKeyError: If key is not a non-empty string
            StrategyNotInitializedError: If no strategy is active
            StorageError: Any error raised by the active strategy
        """
        self._validate_key(key)
        with self._lock.write_locked():
            self._require_strategy().save(item, key)

    def fetch(self, key: str, item_type: Type[T]) -> T:
        """
        Fetch the item stored under a key, decoded as ``item_type``.

        Raises:
            InvalidKeyError: If key is not a non-empty string
            StrategyNotInitializedError: If no strategy is active
            StorageError: Any error raised by the active strategy
        """
        self._validate_key(key)
        with self._lock.read_locked():
            return self._require_strategy().fetch(key, item_type)

    def delete(self, key: str) -> None:
        """
        Delete the item stored under a key.

        Raises:
            InvalidKeyError: If key is not a non-empty string
            StrategyNotInitializedError: If no strategy is active
            StorageError: Any error raised by the active strategy
        """
        self._validate_key(key)
        with self._lock.write_locked():
            self._require_strategy().delete(key)

    @staticmethod
    def set_logging_enabled(enabled: bool) -> None:
        """Enable or disable the process-wide storage logger."""
        StorageLogger.shared().set_logging_enabled(enabled)

    def as_database_strategy(self) -> Optional[DatabaseSpecificStrategy]:
        """
        Return the active strategy if it supports bulk database operations.

        Calls made through the returned handle bypass the manager's lock.
        """
        strategy = self._strategy
        if isinstance(strategy, DatabaseSpecificStrategy):
            return strategy
        return None

    def close(self) -> None:
        """Release the active strategy. Later calls fail as uninitialized."""
        with self._lock.write_locked():
            strategy, self._strategy = self._strategy, None
            close = getattr(strategy, "close", None)
            if callable(close):
                close()
        self.logger.info("Storage manager closed")

    def __enter__(self) -> StorageManager:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"StorageManager({self._strategy!r})"


__all__ = ["StorageManager"]
