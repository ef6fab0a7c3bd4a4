"""Lock-per-key table."""

import threading
import typing as t


class KeyedLocks:
    """Hand out one dedicated ``threading.Lock`` per hashable key.

    Locks are created on first use under a short-lived guard lock, so two
    threads asking for the same key always get the same lock object, whatever
    the identity of the key objects they hold. Threads working on different
    keys never contend beyond that guard. The table is never pruned.

    Example:
        >>> locks = KeyedLocks()
        >>> with locks("mod::f()"):
        ...     pass
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[t.Hashable, threading.Lock] = {}

    def lock(self, key: t.Hashable) -> threading.Lock:
        """Return the lock dedicated to ``key``, creating it if needed."""
        if (lock := self._locks.get(key)) is not None:
            return lock
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    def __call__(self, key: t.Hashable) -> threading.Lock:
        return self.lock(key)

    def __len__(self) -> int:
        return len(self._locks)
