from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class UserLockRegistry:
    """One lock per user id, so a user's check-ins and check-outs run one at a time.

    Only covers the current process; the store's unique key on open segments
    covers several workers.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def lock_for(self, user_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        lock = self.lock_for(int(user_id))
        with lock:
            yield
