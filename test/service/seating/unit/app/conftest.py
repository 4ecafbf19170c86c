from unittest.mock import AsyncMock

import pytest

from src.service.seating.domain.attendance_geofence_checker import AttendanceGeofenceChecker
from src.service.seating.domain.booking_conflict_resolver import BookingConflictResolver
from src.service.seating.domain.break_manager import BreakManager
from src.service.seating.driven_adapter.state.in_memory_seat_lock import InMemorySeatLock
from test.service.seating.fakes import VENUE


@pytest.fixture
def seat_lock() -> InMemorySeatLock:
    return InMemorySeatLock(wait_seconds=1.0)


@pytest.fixture
def attendance_scheduler() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def conflict_resolver() -> BookingConflictResolver:
    return BookingConflictResolver(min_booking_minutes=30)


@pytest.fixture
def break_manager() -> BreakManager:
    return BreakManager(min_break_minutes=30)


@pytest.fixture
def geofence_checker() -> AttendanceGeofenceChecker:
    return AttendanceGeofenceChecker(venue=VENUE, radius_meters=100.0)
