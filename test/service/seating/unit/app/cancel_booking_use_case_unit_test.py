from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, ValidationError
from src.service.seating.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.seating.domain.entity.booking_entity import (
    USER_CANCELLATION_REASON,
    AttendanceState,
    BookingStatus,
)
from src.service.seating.driven_adapter.state.in_memory_seat_lock import InMemorySeatLock
from test.service.seating.fakes import (
    FixedClock,
    InMemoryBookingRepo,
    InMemorySeatRepo,
    at,
    make_booking,
)


class TestCancelBooking:
    @pytest.fixture
    def use_case(
        self,
        booking_repo: InMemoryBookingRepo,
        seat_lock: InMemorySeatLock,
        attendance_scheduler: AsyncMock,
        clock: FixedClock,
    ) -> CancelBookingUseCase:
        return CancelBookingUseCase(
            booking_repo=booking_repo,
            seat_lock=seat_lock,
            attendance_scheduler=attendance_scheduler,
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_cancel_releases_seat_and_drops_deadline(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: InMemoryBookingRepo,
        seat_repo: InMemorySeatRepo,
        attendance_scheduler: AsyncMock,
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))

        cancelled = await use_case.execute(booking_id=booking.id, user_id=1)

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancellation_reason == USER_CANCELLATION_REASON
        assert cancelled.attendance_state == AttendanceState.CANCELLED
        seat = await seat_repo.get_by_id(seat_id=1)
        assert seat is not None and seat.entries == []
        attendance_scheduler.cancel.assert_awaited_once_with(booking_id=booking.id)

    @pytest.mark.asyncio
    async def test_cancel_twice_is_noop(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: InMemoryBookingRepo,
        attendance_scheduler: AsyncMock,
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))
        first = await use_case.execute(booking_id=booking.id, user_id=1)
        second = await use_case.execute(booking_id=booking.id, user_id=1)

        assert second == first
        assert attendance_scheduler.cancel.await_count == 1

    @pytest.mark.asyncio
    async def test_other_member_cannot_cancel(
        self, use_case: CancelBookingUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11), user_id=1))
        with pytest.raises(ForbiddenError, match='Only the booking holder can cancel'):
            await use_case.execute(booking_id=booking.id, user_id=2)
        assert booking_repo.rows[str(booking.id)].status == BookingStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_completed_booking_cannot_be_cancelled(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: InMemoryBookingRepo,
        clock: FixedClock,
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))
        clock.set(at(11, 30))
        with pytest.raises(ValidationError, match='completed'):
            await use_case.execute(booking_id=booking.id, user_id=1)
