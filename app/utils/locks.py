"""Per-key asyncio locks."""
import asyncio
from contextlib import asynccontextmanager
from typing import Hashable


class KeyedLocks:
    """
    One asyncio.Lock per key.

    Serializes read-modify-write sequences on the same entity while letting
    different entities proceed concurrently. A key's lock is discarded once
    no task holds or waits for it.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._holders: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable):
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
            self._holders[key] = 0
        # Waiters count as holders
        self._holders[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._locks[key]
                del self._holders[key]

    def locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
