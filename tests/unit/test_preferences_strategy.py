"""Tests for the preference-store strategy and its stores."""

import json
from typing import Optional

import pytest

from storage_helper import (
    DataNotFoundError,
    DecodingFailedError,
    DeleteFailedError,
    EncodingFailedError,
    FetchFailedError,
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
    PreferencesStrategy,
    SaveFailedError,
    UnexpectedStorageError,
)
from tests.utils.sample_data import Point, Unserializable, User


class FailingStore(PreferenceStore):
    """Store whose every operation fails."""

    def get_data(self, key: str) -> Optional[bytes]:
        raise UnexpectedStorageError(OSError("read failed"))

    def set_data(self, key: str, data: bytes) -> None:
        raise UnexpectedStorageError(OSError("write failed"))

    def remove(self, key: str) -> None:
        raise UnexpectedStorageError(OSError("remove failed"))


@pytest.fixture
def strategy(storage_logger):
    return PreferencesStrategy(InMemoryPreferenceStore(), logger=storage_logger)


class TestPreferencesStrategy:
    """Save, fetch and delete against a preference store."""

    def test_save_and_fetch(self, strategy, sample_user):
        strategy.save(sample_user, "user")

        assert strategy.fetch("user", User) == sample_user

    def test_saves_encoded_bytes(self, strategy):
        strategy.save(Point(x=1, y=2), "point")

        assert json.loads(strategy.store.get_data("point")) == {"x": 1, "y": 2}

    def test_fetch_missing(self, strategy):
        with pytest.raises(DataNotFoundError):
            strategy.fetch("missing", User)

    def test_fetch_wrong_type(self, strategy):
        strategy.save("text", "value")

        with pytest.raises(DecodingFailedError):
            strategy.fetch("value", Point)

    def test_encoding_failure(self, strategy):
        with pytest.raises(EncodingFailedError):
            strategy.save({"value": Unserializable()}, "bad")

        with pytest.raises(DataNotFoundError):
            strategy.fetch("bad", dict)

    def test_delete(self, strategy):
        strategy.save(1, "one")
        strategy.delete("one")

        with pytest.raises(DataNotFoundError):
            strategy.fetch("one", int)

    def test_delete_missing(self, strategy):
        strategy.delete("missing")

    def test_defaults_to_in_memory_store(self, storage_logger):
        strategy = PreferencesStrategy(logger=storage_logger)

        assert isinstance(strategy.store, InMemoryPreferenceStore)


class TestPreferencesStrategyStoreFailures:
    """Store faults are reported per operation."""

    @pytest.fixture
    def failing(self, storage_logger):
        return PreferencesStrategy(FailingStore(), logger=storage_logger)

    def test_save_failure(self, failing):
        with pytest.raises(SaveFailedError) as exc_info:
            failing.save(1, "one")

        assert isinstance(exc_info.value.cause, UnexpectedStorageError)

    def test_fetch_failure(self, failing):
        with pytest.raises(FetchFailedError):
            failing.fetch("one", int)

    def test_delete_failure(self, failing):
        with pytest.raises(DeleteFailedError):
            failing.delete("one")


class TestJSONFilePreferenceStore:
    """File-backed preference store."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = JSONFilePreferenceStore(path)
        store.set_data("key", b"\x00\x01binary")

        reopened = JSONFilePreferenceStore(path)
        assert reopened.get_data("key") == b"\x00\x01binary"

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "prefs.json"
        JSONFilePreferenceStore(path).set_data("key", b"value")

        assert path.exists()

    def test_missing_file_is_empty(self, tmp_path):
        store = JSONFilePreferenceStore(tmp_path / "prefs.json")

        assert store.get_data("key") is None

    def test_remove(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = JSONFilePreferenceStore(path)
        store.set_data("a", b"1")
        store.set_data("b", b"2")
        store.remove("a")

        assert set(json.loads(path.read_text())) == {"b"}

    def test_remove_missing_does_not_write(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = JSONFilePreferenceStore(path)
        store.remove("missing")

        assert not path.exists()

    def test_no_temp_files_left(self, tmp_path):
        store = JSONFilePreferenceStore(tmp_path / "prefs.json")
        for i in range(5):
            store.set_data(f"key-{i}", b"value")

        assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"key": "***"}'])
    def test_corrupt_file(self, tmp_path, content):
        path = tmp_path / "prefs.json"
        path.write_text(content)

        with pytest.raises(UnexpectedStorageError):
            JSONFilePreferenceStore(path)


class TestInMemoryPreferenceStore:
    """In-memory preference store."""

    def test_set_get_remove(self):
        store = InMemoryPreferenceStore()
        store.set_data("key", b"value")

        assert store.get_data("key") == b"value"
        assert len(store) == 1

        store.remove("key")
        store.remove("key")
        assert store.get_data("key") is None
