from collections.abc import Iterator
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from src.service.seating.driven_adapter.state.in_memory_seat_lock import InMemorySeatLock
from test.service.seating.fakes import (
    FixedClock,
    InMemoryBookingRepo,
    InMemorySeatRepo,
    InMemoryUserLocationRepo,
)
from test.test_main import app


@pytest.fixture
def attendance_scheduler() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(
    seat_repo: InMemorySeatRepo,
    booking_repo: InMemoryBookingRepo,
    user_location_repo: InMemoryUserLocationRepo,
    clock: FixedClock,
    attendance_scheduler: AsyncMock,
) -> Iterator[TestClient]:
    container.seat_repo.override(seat_repo)
    container.booking_repo.override(booking_repo)
    container.user_location_repo.override(user_location_repo)
    container.clock.override(clock)
    container.seat_lock.override(InMemorySeatLock(wait_seconds=1.0))
    container.attendance_scheduler.override(attendance_scheduler)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.reset_override()
