"""
Per-record locks for read-modify-write sequences
Keeps at most one update in flight per patient ID
"""
from contextlib import contextmanager
from typing import Dict, Iterator
from threading import Lock


class KeyedLocks:
    """
    Thread-safe registry handing out one lock per key

    A key's lock lives only while some caller holds or waits on it.
    """
    def __init__(self):
        self._locks: Dict[str, Lock] = {}
        self._users: Dict[str, int] = {}
        self._guard = Lock()

    def _acquire_entry(self, key: str) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = Lock()
                self._locks[key] = lock
            self._users[key] = self._users.get(key, 0) + 1
            return lock

    def _release_entry(self, key: str):
        with self._guard:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the key's lock for the duration of the block"""
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
