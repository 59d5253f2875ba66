"""Readers/writer lock used by the storage manager."""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .exceptions import ConcurrencyError


class ReadWriteLock:
    """
    Writer-preferring readers/writer lock.

    Any number of threads may hold the read lock at once. The write lock is
    exclusive. Once a writer is waiting, new readers block until it is done.
    Not reentrant.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer: Optional[int] = None
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer is not None or self._waiting_writers:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            if self._readers == 0:
                raise ConcurrencyError("Read lock released without being held")
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._waiting_writers += 1
            try:
                while self._writer is not None or self._readers:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = threading.get_ident()

    def release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                raise ConcurrencyError("Write lock released by a thread that does not hold it")
            self._writer = None
            self._condition.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


__all__ = ["ReadWriteLock"]
