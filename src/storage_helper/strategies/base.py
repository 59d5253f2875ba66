"""Contracts implemented by storage strategies."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Type, TypeVar

T = TypeVar("T")


class StorageStrategy(ABC):
    """Interface for storage backend implementations."""

    @abstractmethod
    def save(self, item: Any, key: str) -> None:
        """
        Save an item under a key, replacing any existing value.

        Args:
            item: Serializable value to store
            key: Key under which to store the item
        """

    @abstractmethod
    def fetch(self, key: str, item_type: Type[T]) -> T:
        """
        Fetch the item stored under a key.

        Args:
            key: Key of the item
            item_type: Type to decode the stored value into

        Returns:
            Decoded item
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the item stored under a key. Deleting an absent key succeeds."""


class DatabaseSpecificStrategy(ABC):
    """Bulk operations only available on the embedded-database backend."""

    @abstractmethod
    def delete_multiple(self, keys: Iterable[str]) -> int:
        """Delete every record whose key is in ``keys``."""

    @abstractmethod
    def delete_where(self, predicate: Any) -> int:
        """Delete every record matching a filter expression."""

    @abstractmethod
    def reset(self) -> None:
        """Delete every record."""


__all__ = ["StorageStrategy", "DatabaseSpecificStrategy"]
