"""
Distributed Lock using Kvrocks (Redis)

SET NX EX acquisition with polling, owner-checked release via Lua.
"""

from typing import Optional
from uuid import uuid4

import anyio

from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client


# Only delete the key if we still own it (it may have expired and been re-acquired)
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class DistributedLock:
    """One lock key per instance; not reentrant."""

    def __init__(self, *, key: str, ttl: int = 10, retry_interval: float = 0.05) -> None:
        self.key = key
        self.ttl = ttl
        self.retry_interval = retry_interval
        self.lock_value: Optional[str] = None

    async def try_acquire(self) -> bool:
        client = kvrocks_client.get_client()
        value = str(uuid4())
        if await client.set(self.key, value, nx=True, ex=self.ttl):
            self.lock_value = value
            Logger.base.debug(f'🔒 [LOCK] Acquired lock: {self.key} (ttl={self.ttl}s)')
            return True
        return False

    async def acquire(self, *, wait: float) -> bool:
        """
        Poll until the lock is ours or `wait` seconds pass.

        Returns:
            True if acquired, False on timeout
        """
        with anyio.move_on_after(wait):
            while not await self.try_acquire():
                await anyio.sleep(self.retry_interval)
            return True
        Logger.base.warning(f'⏳ [LOCK] Gave up on {self.key} after {wait}s')
        return False

    async def release(self) -> bool:
        if not self.lock_value:
            Logger.base.warning(f'⚠️ [LOCK] No lock value to release: {self.key}')
            return False

        client = kvrocks_client.get_client()
        try:
            result = await client.eval(_RELEASE_SCRIPT, 1, self.key, self.lock_value)  # type: ignore
        finally:
            self.lock_value = None

        if result:
            Logger.base.debug(f'🔓 [LOCK] Released lock: {self.key}')
            return True
        Logger.base.warning(f'⚠️ [LOCK] Lock {self.key} expired before release (ttl={self.ttl}s)')
        return False
