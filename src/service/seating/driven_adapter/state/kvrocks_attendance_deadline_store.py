from datetime import datetime, timezone
from typing import List, Optional

from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import build_key, kvrocks_client
from src.service.seating.app.interface.i_attendance_deadline_store import (
    IAttendanceDeadlineStore,
)


class KvrocksAttendanceDeadlineStore(IAttendanceDeadlineStore):
    """
    Sorted set `attendance:deadline`: member = booking id, score = deadline epoch seconds.

    Kvrocks persists to disk, so deadlines survive a restart of both the API
    and the store itself.
    """

    def __init__(self, *, key: Optional[str] = None) -> None:
        self.key = key or build_key('attendance', 'deadline')

    @Logger.io
    async def put(self, *, booking_id: UUID, due_at: datetime) -> None:
        client = kvrocks_client.get_client()
        await client.zadd(self.key, {str(booking_id): due_at.timestamp()})

    @Logger.io
    async def remove(self, *, booking_id: UUID) -> None:
        client = kvrocks_client.get_client()
        await client.zrem(self.key, str(booking_id))

    async def due(self, *, now: datetime, limit: int) -> List[UUID]:
        client = kvrocks_client.get_client()
        members = await client.zrangebyscore(self.key, '-inf', now.timestamp(), start=0, num=limit)
        return [UUID(m.decode() if isinstance(m, bytes) else m) for m in members]

    async def get(self, *, booking_id: UUID) -> Optional[datetime]:
        client = kvrocks_client.get_client()
        score = await client.zscore(self.key, str(booking_id))
        if score is None:
            return None
        return datetime.fromtimestamp(score, tz=timezone.utc)
