"""Storage strategy backed by a key-value preference store."""

from typing import Any, Optional, Type, TypeVar

from ...exceptions import (
    DataNotFoundError,
    DecodingFailedError,
    DeleteFailedError,
    EncodingFailedError,
    FetchFailedError,
    SaveFailedError,
)
from ...logging import StorageLogger
from ...serialization import JSONCodec, default_codec
from ..base import StorageStrategy
from .store import InMemoryPreferenceStore, PreferenceStore

T = TypeVar("T")


class PreferencesStrategy(StorageStrategy):
    """
    Stores one encoded blob per key in a preference store.

    Example:
        strategy = PreferencesStrategy(JSONFilePreferenceStore("prefs.json"))
        strategy.save({"theme": "dark"}, "settings")
        strategy.fetch("settings", dict)  # {"theme": "dark"}
    """

    def __init__(
        self,
        store: Optional[PreferenceStore] = None,
        codec: Optional[JSONCodec] = None,
        logger: Optional[StorageLogger] = None,
    ):
        self.store = store if store is not None else InMemoryPreferenceStore()
        self.codec = codec or default_codec
        self.logger = (logger or StorageLogger.shared()).bind(
            component="preferences_strategy"
        )

    def save(self, item: Any, key: str) -> None:
        """
        Save an item to the preference store.

        Raises:
            EncodingFailedError: If the item cannot be encoded
            SaveFailedError: If the store rejects the write
        """
        try:
            data = self.codec.encode(item)
            self.store.set_data(key, data)
        except EncodingFailedError as exc:
            self.logger.error("Failed to encode item", key=key, error=str(exc.cause))
            raise
        except Exception as exc:
            self.logger.error("Failed to save item", key=key, error=str(exc))
            raise SaveFailedError(details={"key": key}, cause=exc) from exc
        self.logger.info("Successfully saved item", key=key)

    def fetch(self, key: str, item_type: Type[T]) -> T:
        """
        Fetch an item from the preference store.

        Raises:
            DataNotFoundError: If no data is stored at key
            FetchFailedError: If the store cannot be read
            DecodingFailedError: If the data does not match ``item_type``
        """
        try:
            data = self.store.get_data(key)
        except Exception as exc:
            self.logger.error("Failed to read item", key=key, error=str(exc))
            raise FetchFailedError(details={"key": key}, cause=exc) from exc

        if data is None:
            self.logger.warning("No data found", key=key)
            raise DataNotFoundError(details={"key": key})

        try:
            item = self.codec.decode(data, item_type)
        except DecodingFailedError as exc:
            self.logger.error("Failed to decode item", key=key, error=str(exc.cause))
            raise
        self.logger.info("Successfully fetched item", key=key)
        return item

    def delete(self, key: str) -> None:
        """
        Delete an item from the preference store.

        Raises:
            DeleteFailedError: If the store rejects the removal
        """
        try:
            self.store.remove(key)
        except Exception as exc:
            self.logger.error("Failed to delete item", key=key, error=str(exc))
            raise DeleteFailedError(details={"key": key}, cause=exc) from exc
        self.logger.info("Deleted item", key=key)

    def __repr__(self) -> str:
        return f"PreferencesStrategy({self.store!r})"


__all__ = ["PreferencesStrategy"]
