"""Per-key mutual exclusion used by background jobs."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator, Set


class KeyedLock:
    """Non-blocking mutex keyed by an arbitrary hashable value.

    ``try_acquire`` never waits: a caller that finds the key held is expected
    to skip its work instead of queueing behind the holder. The lock is
    process-local; cross-process exclusion is layered on top by the caller.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._held: Set[Hashable] = set()

    def try_acquire(self, key: Hashable) -> bool:
        with self._guard:
            if key in self._held:
                return False
            self._held.add(key)
            return True

    def release(self, key: Hashable) -> None:
        with self._guard:
            self._held.discard(key)

    def is_locked(self, key: Hashable) -> bool:
        with self._guard:
            return key in self._held

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[bool]:
        """Yield whether the key was acquired; release it on exit if so."""
        acquired = self.try_acquire(key)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(key)


__all__ = ["KeyedLock"]
