from unittest.mock import AsyncMock, patch

import pytest
import uuid_utils

from src.platform.state.kvrocks_client import kvrocks_client
from src.service.seating.driven_adapter.state.kvrocks_attendance_deadline_store import (
    KvrocksAttendanceDeadlineStore,
)
from test.service.seating.fakes import at


@pytest.fixture
def client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def store(client: AsyncMock):
    with patch.object(kvrocks_client, 'get_client', return_value=client):
        yield KvrocksAttendanceDeadlineStore(key='test_attendance:deadline')


class TestKvrocksAttendanceDeadlineStore:
    @pytest.mark.asyncio
    async def test_put_scores_by_epoch_seconds(
        self, store: KvrocksAttendanceDeadlineStore, client: AsyncMock
    ) -> None:
        booking_id = uuid_utils.uuid7()
        await store.put(booking_id=booking_id, due_at=at(10, 20))
        client.zadd.assert_awaited_once_with(
            'test_attendance:deadline', {str(booking_id): at(10, 20).timestamp()}
        )

    @pytest.mark.asyncio
    async def test_due_reads_up_to_now_and_decodes(
        self, store: KvrocksAttendanceDeadlineStore, client: AsyncMock
    ) -> None:
        first, second = uuid_utils.uuid7(), uuid_utils.uuid7()
        client.zrangebyscore.return_value = [str(first).encode(), str(second)]

        due = await store.due(now=at(10, 30), limit=50)

        assert [str(d) for d in due] == [str(first), str(second)]
        client.zrangebyscore.assert_awaited_once_with(
            'test_attendance:deadline', '-inf', at(10, 30).timestamp(), start=0, num=50
        )

    @pytest.mark.asyncio
    async def test_get_missing_and_present(
        self, store: KvrocksAttendanceDeadlineStore, client: AsyncMock
    ) -> None:
        booking_id = uuid_utils.uuid7()
        client.zscore.return_value = None
        assert await store.get(booking_id=booking_id) is None

        client.zscore.return_value = at(10, 20).timestamp()
        assert await store.get(booking_id=booking_id) == at(10, 20)

    @pytest.mark.asyncio
    async def test_remove(self, store: KvrocksAttendanceDeadlineStore, client: AsyncMock) -> None:
        booking_id = uuid_utils.uuid7()
        await store.remove(booking_id=booking_id)
        client.zrem.assert_awaited_once_with('test_attendance:deadline', str(booking_id))
