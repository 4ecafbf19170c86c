from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
import time

from src.platform.exception.exceptions import ConflictError
from src.platform.metrics.seating_metrics import metrics
from src.platform.state.distributed_lock import DistributedLock
from src.platform.state.kvrocks_client import build_key
from src.service.seating.app.interface.i_seat_lock import ISeatLock


class KvrocksSeatLock(ISeatLock):
    """Cross-process seat exclusion (several API workers plus the scheduler)"""

    def __init__(self, *, ttl_seconds: int, wait_seconds: float) -> None:
        self.ttl_seconds = ttl_seconds
        self.wait_seconds = wait_seconds

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        started = time.perf_counter()
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                lock = DistributedLock(key=build_key('lock', key), ttl=self.ttl_seconds)
                if not await lock.acquire(wait=self.wait_seconds):
                    raise ConflictError('Seat is busy, please retry')
                stack.push_async_callback(lock.release)
            metrics.record_lock_wait(backend='kvrocks', duration=time.perf_counter() - started)
            yield
