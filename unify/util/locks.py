"""Per-account in-process locks.

Identity mutations and merges serialize on the accounts they touch, never
globally. The lock is re-entrant for the task that holds it so a merge can
call identity and account operations on accounts it already holds.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from unify.domain.value import AccountId


class AccountLocks:
    """Hands out one asyncio lock per account ID.

    A lock exists only while some task holds or waits for it.
    """

    def __init__(self) -> None:
        self._locks: dict[AccountId, asyncio.Lock] = {}
        self._owners: dict[AccountId, asyncio.Task] = {}
        self._users: dict[AccountId, int] = {}

    @asynccontextmanager
    async def hold(self, *account_ids: AccountId) -> AsyncIterator[None]:
        """Hold the locks of all given accounts.

        Locks are taken in a stable order so two tasks locking the same pair
        cannot deadlock.
        """
        task = asyncio.current_task()
        acquired: list[AccountId] = []
        try:
            for account_id in sorted(set(account_ids), key=str):
                if self._owners.get(account_id) is task:
                    continue
                lock = self._locks.setdefault(account_id, asyncio.Lock())
                self._users[account_id] = self._users.get(account_id, 0) + 1
                try:
                    await lock.acquire()
                except BaseException:
                    self._forget(account_id)
                    raise
                self._owners[account_id] = task
                acquired.append(account_id)
            yield
        finally:
            for account_id in reversed(acquired):
                del self._owners[account_id]
                self._locks[account_id].release()
                self._forget(account_id)

    def is_held(self, account_id: AccountId) -> bool:
        lock = self._locks.get(account_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)

    def _forget(self, account_id: AccountId) -> None:
        # Drop the lock once no task holds or waits for it
        self._users[account_id] -= 1
        if not self._users[account_id]:
            del self._users[account_id]
            del self._locks[account_id]
