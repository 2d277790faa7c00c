"""Per-key mutual exclusion for shared records.

Stock for one product and the active cart of one user are each read,
checked and written back as a whole document.  Without serialization two
concurrent operations on the same record could both pass a check and
then overwrite each other.  ``KeyedLock`` hands out one re-entrant lock
per key so operations on *different* products or users still run in
parallel.

A key's lock only lives while some thread holds or waits for it, so the
table does not grow with every product or user ever seen.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> (lock, number of threads holding or waiting for it)
        self._locks: dict[str, tuple[threading.RLock, int]] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _acquire_ref(self, key: str) -> threading.RLock:
        with self._guard:
            lock, users = self._locks.get(key) or (threading.RLock(), 0)
            self._locks[key] = (lock, users + 1)
            return lock

    def _release_ref(self, key: str) -> None:
        with self._guard:
            lock, users = self._locks[key]
            if users == 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Block until *key* is free, then hold it for the ``with`` body."""
        lock = self._acquire_ref(key)
        try:
            with lock:
                yield
        finally:
            self._release_ref(key)


# Shared by every store and handler in the process unless one is injected.
product_locks = KeyedLock()
cart_locks = KeyedLock()
