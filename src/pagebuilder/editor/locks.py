"""Per-page mutation locks."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class PageLocks:
    """
    One re-entrant lock per page id.

    Edits to the same page are serialised; different pages never block
    each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def lock_for(self, page_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(page_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[page_id] = lock
            return lock

    @contextmanager
    def hold(self, page_id: str) -> Iterator[None]:
        """Hold the page's lock for the duration of the block"""
        with self.lock_for(page_id):
            yield

    def discard(self, page_id: str) -> None:
        """Forget the lock of a page that is no longer edited"""
        with self._guard:
            self._locks.pop(page_id, None)

    def __contains__(self, page_id: object) -> bool:
        return page_id in self._locks

    def __len__(self) -> int:
        return len(self._locks)
