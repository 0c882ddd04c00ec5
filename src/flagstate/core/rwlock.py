"""Read-write lock for in-process shared state.

Many readers may hold the lock together; a writer holds it alone. Acquisition
blocks without timeout. Once a writer is waiting, new readers queue behind it
so a steady stream of readers cannot starve writers.

The lock is not reentrant: a thread holding it in either mode must not
acquire it again.

Example:
    >>> lock = ReadWriteLock()
    >>> with lock.read():
    ...     value = shared["count"]
    >>> with lock.write():
    ...     shared["count"] += 1
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from flagstate.core.errors import LockStateError


class ReadWriteLock:
    """Writer-preferring readers/writer lock built on ``threading.Condition``."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """Number of threads currently holding the read lock."""
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        """Whether a thread currently holds the write lock."""
        with self._cond:
            return self._writer

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise LockStateError("release_read() called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                # readers parked behind this writer must re-check
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise LockStateError("release_write() called without a held write lock")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def __repr__(self) -> str:
        with self._cond:
            return (
                f"ReadWriteLock(readers={self._readers}, writer={self._writer}, "
                f"writers_waiting={self._writers_waiting})"
            )


__all__ = ["ReadWriteLock"]
