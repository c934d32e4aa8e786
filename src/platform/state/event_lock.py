"""
Per-event lock registry

Serializes the read-check-write sections of booking operations that touch the
same event (seat collision check, capacity check, counter update) inside this
process. Cross-process safety comes from the conditional counter UPDATE in the
event repository.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

import anyio

from src.platform.logging.loguru_io import Logger


class EventLockRegistry:
    def __init__(self) -> None:
        self._locks: Dict[str, anyio.Lock] = {}
        self._holders: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, *, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = anyio.Lock()
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                Logger.base.debug(f'🔒 [LOCK] Acquired event lock: {key}')
                yield
        finally:
            self._holders[key] -= 1
            if not self._holders[key]:
                # Last holder gone, drop the lock
                del self._holders[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
