from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
import time

import anyio

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.interface.i_seat_lock import ISeatLock


class InMemorySeatLock(ISeatLock):
    """
    Single-process seat exclusion (SEAT_LOCK_BACKEND=memory, local runs and tests)

    Locks live only while held or waited on; a key released with nobody queued
    is dropped. Re-acquiring a key the current task already holds is a conflict,
    same as a second SET NX against Kvrocks.
    """

    def __init__(self, *, wait_seconds: float) -> None:
        self.wait_seconds = wait_seconds
        self._locks: dict[str, anyio.Lock] = {}

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        started = time.perf_counter()
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                lock = self._locks.setdefault(key, anyio.Lock())
                if lock.statistics().owner == anyio.get_current_task():
                    Logger.base.warning(f'⏳ [LOCK] {key} is already held by this task')
                    raise ConflictError('Seat is busy, please retry')

                with anyio.move_on_after(self.wait_seconds) as scope:
                    await lock.acquire()
                if scope.cancelled_caught:
                    Logger.base.warning(f'⏳ [LOCK] Gave up on {key} after {self.wait_seconds}s')
                    raise ConflictError('Seat is busy, please retry')
                stack.callback(self._release, key, lock)
            metrics.record_lock_wait(backend='memory', duration=time.perf_counter() - started)
            yield

    def _release(self, key: str, lock: anyio.Lock) -> None:
        lock.release()
        stats = lock.statistics()
        if not stats.locked and not stats.tasks_waiting and self._locks.get(key) is lock:
            del self._locks[key]
