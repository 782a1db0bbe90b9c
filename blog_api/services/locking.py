"""
Blog API — Per-Key Async Lock
===============================

What:  Serializes coroutines that share a key, lets different keys proceed.
Who:   Used by the post stores around upsert/remove so that at most one
       mutation per post id is in flight.

Lock entries are created on first use and dropped once no coroutine holds
or waits on them, so the table stays proportional to the number of ids
being written right now.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class KeyedLock:
    """
    Mapping of key → asyncio.Lock with reference counting.

    Usage:
        locks = KeyedLock()
        async with locks.hold(post_id):
            ...  # no other holder of post_id runs here

    Not thread-safe; intended for a single event loop.
    """

    def __init__(self) -> None:
        self._entries: Dict[Hashable, _Entry] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    def locked(self, key: Hashable) -> bool:
        """True while some coroutine holds the lock for `key`."""
        entry = self._entries.get(key)
        return entry is not None and entry.lock.locked()

    def __len__(self) -> int:
        return len(self._entries)
