"""
Test Configuration and Fixtures

Unit tests run without PostgreSQL or Kvrocks: ports are replaced with the
in-memory fakes from test/service/seating/fakes.py or AsyncMock.
"""

# =============================================================================
# Environment setup MUST happen before any application import, settings and
# the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'seat_scheduling_test_db'
        os.environ['KVROCKS_KEY_PREFIX'] = 'test_'
    else:
        os.environ['POSTGRES_DB'] = f'seat_scheduling_test_db_{worker_id}'
        os.environ['KVROCKS_KEY_PREFIX'] = f'test_{worker_id}_'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Single-process lock, no Kvrocks needed
    os.environ['SEAT_LOCK_BACKEND'] = 'memory'


_early_setup_test_environment()

import pytest  # noqa: E402

from test.service.seating.fakes import (  # noqa: E402
    FixedClock,
    InMemoryAttendanceDeadlineStore,
    InMemoryBookingRepo,
    InMemorySeatRepo,
    InMemoryUserLocationRepo,
    at,
)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(at(8, 0))


@pytest.fixture
def booking_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def seat_repo(booking_repo: InMemoryBookingRepo) -> InMemorySeatRepo:
    repo = InMemorySeatRepo(booking_repo=booking_repo)
    repo.add_seat(seat_id=1, location='Main Library', seat_number=1)
    repo.add_seat(seat_id=2, location='Main Library', seat_number=2)
    repo.add_seat(seat_id=3, location='Reading Hall 1', seat_number=1)
    return repo


@pytest.fixture
def user_location_repo() -> InMemoryUserLocationRepo:
    return InMemoryUserLocationRepo()


@pytest.fixture
def deadline_store() -> InMemoryAttendanceDeadlineStore:
    return InMemoryAttendanceDeadlineStore()
