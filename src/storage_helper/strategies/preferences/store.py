"""
Key-value preference stores.

A preference store is a flat mapping from string keys to opaque byte blobs
with no transactions or query language. Two implementations are provided:

- InMemoryPreferenceStore: process-local, not durable
- JSONFilePreferenceStore: one JSON document on disk, base64 blobs per key
"""

import base64
import binascii
import errno
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from ...exceptions import (
    GeneralStorageError,
    InsufficientStorageError,
    PermissionDeniedError,
    UnexpectedStorageError,
)


class PreferenceStore(ABC):
    """Interface for flat key-value preference stores."""

    @abstractmethod
    def get_data(self, key: str) -> Optional[bytes]:
        """Return the bytes stored at key, or None."""

    @abstractmethod
    def set_data(self, key: str, data: bytes) -> None:
        """Store bytes at key, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key if present."""


class InMemoryPreferenceStore(PreferenceStore):
    """
    In-memory preference store. Not durable across restarts.

    Thread-safe via a reentrant lock.
    """

    def __init__(self) -> None:
        self._data: Dict[str, bytes] = {}
        self._lock = threading.RLock()

    def get_data(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def set_data(self, key: str, data: bytes) -> None:
        with self._lock:
            self._data[key] = bytes(data)

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        with self._lock:
            return f"InMemoryPreferenceStore({len(self._data)} entries)"


def _translate_os_error(exc: OSError) -> GeneralStorageError:
    if exc.errno in (errno.EACCES, errno.EPERM):
        return PermissionDeniedError(details={"path": exc.filename}, cause=exc)
    if exc.errno == errno.ENOSPC:
        return InsufficientStorageError(details={"path": exc.filename}, cause=exc)
    return UnexpectedStorageError(exc)


class JSONFilePreferenceStore(PreferenceStore):
    """
    File-backed preference store.

    Keeps the whole mapping in memory and rewrites the file atomically on
    every change. Suitable for small settings-style data from one process.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self._lock = threading.RLock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise _translate_os_error(exc) from exc
        self._data = self._load()

    def _load(self) -> Dict[str, bytes]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise _translate_os_error(exc) from exc

        try:
            document = json.loads(raw) if raw.strip() else {}
            return {
                key: base64.b64decode(value, validate=True)
                for key, value in document.items()
            }
        except (ValueError, AttributeError, TypeError, binascii.Error) as exc:
            raise UnexpectedStorageError(exc, details={"path": str(self.path)}) from exc

    def _write(self, data: Dict[str, bytes]) -> None:
        document = {
            key: base64.b64encode(value).decode("ascii") for key, value in data.items()
        }
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise _translate_os_error(exc) from exc

    def get_data(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def set_data(self, key: str, data: bytes) -> None:
        with self._lock:
            updated = {**self._data, key: bytes(data)}
            self._write(updated)
            self._data = updated

    def remove(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                return
            updated = {k: v for k, v in self._data.items() if k != key}
            self._write(updated)
            self._data = updated

    def __repr__(self) -> str:
        return f"JSONFilePreferenceStore({str(self.path)!r})"


__all__ = ["PreferenceStore", "InMemoryPreferenceStore", "JSONFilePreferenceStore"]
