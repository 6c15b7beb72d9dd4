"""Per-entity serialization and single-commit units of work.

Every lifecycle mutation runs inside ``locked_transaction``: the keyed lock
serializes callers touching the same property (or contract) inside this
process, and the session is committed exactly once on success or rolled back
on any error, so a failed operation leaves no partial state behind.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import Hashable
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession


class KeyedLocks:
    """Registry of asyncio locks keyed by entity id.

    A lock only lives while some task holds or waits on it, so the registry
    does not grow with the number of properties ever seen.
    """

    def __init__(self):
        self._locks: weakref.WeakValueDictionary[Hashable, asyncio.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def is_locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, key: Hashable):
        lock = self.lock_for(key)
        async with lock:
            yield


# Request creation, status transitions and deletion are scoped to a property.
property_locks = KeyedLocks()

# Key delivery and payment recording are scoped to a single contract.
contract_locks = KeyedLocks()


@asynccontextmanager
async def locked_transaction(db: AsyncSession, locks: KeyedLocks, key: Hashable):
    """Hold ``locks[key]`` for the body, then commit; roll back if the body raises."""
    async with locks.hold(key):
        try:
            yield
            await db.commit()
        except BaseException:
            await db.rollback()
            raise
