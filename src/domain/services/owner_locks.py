"""Per-owner serialization of multi-row profile mutations."""

import asyncio
import weakref
from uuid import UUID


class OwnerLocks:
    """Hands out one ``asyncio.Lock`` per owner.

    Locks are held weakly and disappear once no coroutine is using them.
    This only serializes callers inside one process; the database row
    locks and the single-default index cover the rest.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[UUID, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def for_owner(self, user_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock
