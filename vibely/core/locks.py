"""
Per-pair serialization for friendship mutations.

Every operation that reads and then writes state shared by two users (the
duplicate check before a send, the two friend-set writes of an accept or a
removal) runs while holding the lock for that unordered pair.
"""
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, Tuple


def pair_of(a: Hashable, b: Hashable) -> Tuple[str, str]:
    """Canonical (min, max) ordering of an unordered pair"""
    low, high = sorted((str(a), str(b)))
    return low, high


class PairLockRegistry:
    """Hands out one re-entrant lock per unordered pair of ids"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[str, str], threading.RLock] = defaultdict(threading.RLock)
        self._holders: Dict[Tuple[str, str], int] = defaultdict(int)

    def _checkout(self, key: Tuple[str, str]) -> threading.RLock:
        with self._guard:
            self._holders[key] += 1
            return self._locks[key]

    def _release(self, key: Tuple[str, str]) -> None:
        with self._guard:
            self._holders[key] -= 1
            if self._holders[key] <= 0:
                # Nobody is waiting on it any more
                del self._holders[key]
                self._locks.pop(key, None)

    @contextmanager
    def hold(self, a: Hashable, b: Hashable) -> Iterator[Tuple[str, str]]:
        """Hold the lock for {a, b} for the duration of the block"""
        key = pair_of(a, b)
        lock = self._checkout(key)
        lock.acquire()
        try:
            yield key
        finally:
            lock.release()
            self._release(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
