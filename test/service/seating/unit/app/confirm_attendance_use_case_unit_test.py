"""
Geofence on attendance confirmation (venue radius 100 m)
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, PresenceError, ValidationError
from src.service.seating.app.command.confirm_attendance_use_case import ConfirmAttendanceUseCase
from src.service.seating.domain.attendance_geofence_checker import AttendanceGeofenceChecker
from src.service.seating.domain.entity.booking_entity import AttendanceState, BookingStatus
from src.service.seating.domain.value_object.geo_point import UserLocation
from src.service.seating.driven_adapter.state.in_memory_seat_lock import InMemorySeatLock
from test.service.seating.fakes import (
    FixedClock,
    InMemoryBookingRepo,
    InMemoryUserLocationRepo,
    at,
    make_booking,
    north_of_venue,
)


class TestConfirmAttendance:
    @pytest.fixture
    def use_case(
        self,
        booking_repo: InMemoryBookingRepo,
        user_location_repo: InMemoryUserLocationRepo,
        seat_lock: InMemorySeatLock,
        attendance_scheduler: AsyncMock,
        geofence_checker: AttendanceGeofenceChecker,
        clock: FixedClock,
    ) -> ConfirmAttendanceUseCase:
        clock.set(at(10, 5))
        return ConfirmAttendanceUseCase(
            booking_repo=booking_repo,
            user_location_repo=user_location_repo,
            seat_lock=seat_lock,
            attendance_scheduler=attendance_scheduler,
            geofence_checker=geofence_checker,
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_too_far_keeps_booking_pending(
        self,
        use_case: ConfirmAttendanceUseCase,
        booking_repo: InMemoryBookingRepo,
        user_location_repo: InMemoryUserLocationRepo,
        attendance_scheduler: AsyncMock,
    ) -> None:
        """
        Given a member 150 m from the venue
        When they confirm attendance
        Then PresenceError, the booking stays pending and the position is stored
        """
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))
        point = north_of_venue(150)

        with pytest.raises(PresenceError, match='not within required distance'):
            await use_case.execute(booking_id=booking.id, user_id=1, point=point)

        stored = booking_repo.rows[str(booking.id)]
        assert stored.attendance_state == AttendanceState.PENDING
        assert stored.status == BookingStatus.ACTIVE
        location = await user_location_repo.get(user_id=1)
        assert location is not None and location.point == point
        attendance_scheduler.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirmed_after_moving_closer(
        self,
        use_case: ConfirmAttendanceUseCase,
        booking_repo: InMemoryBookingRepo,
        attendance_scheduler: AsyncMock,
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))
        with pytest.raises(PresenceError):
            await use_case.execute(booking_id=booking.id, user_id=1, point=north_of_venue(150))

        confirmed = await use_case.execute(
            booking_id=booking.id, user_id=1, point=north_of_venue(80)
        )

        assert confirmed.attendance_confirmed is True
        assert confirmed.attendance_confirmed_at == at(10, 5)
        attendance_scheduler.cancel.assert_awaited_once_with(booking_id=booking.id)

    @pytest.mark.asyncio
    async def test_uses_last_reported_location(
        self,
        use_case: ConfirmAttendanceUseCase,
        booking_repo: InMemoryBookingRepo,
        user_location_repo: InMemoryUserLocationRepo,
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))
        await user_location_repo.upsert(
            location=UserLocation(user_id=1, point=north_of_venue(10), reported_at=at(10))
        )

        confirmed = await use_case.execute(booking_id=booking.id, user_id=1)
        assert confirmed.attendance_state == AttendanceState.CONFIRMED

    @pytest.mark.asyncio
    async def test_no_known_location(
        self, use_case: ConfirmAttendanceUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11)))
        with pytest.raises(PresenceError, match='User location not available'):
            await use_case.execute(booking_id=booking.id, user_id=1)

    @pytest.mark.asyncio
    async def test_confirm_twice_returns_confirmed_booking(
        self,
        use_case: ConfirmAttendanceUseCase,
        booking_repo: InMemoryBookingRepo,
        attendance_scheduler: AsyncMock,
    ) -> None:
        booking = booking_repo.add(
            make_booking(start=at(10), end=at(11), attendance_confirmed=True)
        )
        result = await use_case.execute(booking_id=booking.id, user_id=1)
        assert result.attendance_confirmed is True
        attendance_scheduler.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_booking_cannot_be_confirmed(
        self, use_case: ConfirmAttendanceUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking = booking_repo.add(
            make_booking(start=at(10), end=at(11), status=BookingStatus.CANCELLED)
        )
        with pytest.raises(ValidationError, match='cancelled'):
            await use_case.execute(booking_id=booking.id, user_id=1, point=north_of_venue(10))

    @pytest.mark.asyncio
    async def test_other_member_forbidden(
        self, use_case: ConfirmAttendanceUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11), user_id=1))
        with pytest.raises(ForbiddenError):
            await use_case.execute(booking_id=booking.id, user_id=2, point=north_of_venue(10))
