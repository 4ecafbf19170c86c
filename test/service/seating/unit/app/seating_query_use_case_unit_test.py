import pytest
import uuid_utils

from src.platform.exception.exceptions import ForbiddenError, NotFoundError, ValidationError
from src.service.seating.app.query.get_availability_use_case import GetAvailabilityUseCase
from src.service.seating.app.query.get_booking_use_case import GetBookingUseCase
from src.service.seating.app.query.list_available_seats_use_case import (
    ListAvailableSeatsUseCase,
)
from src.service.seating.app.query.list_my_bookings_use_case import ListMyBookingsUseCase
from src.service.seating.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.seating.domain.availability_computer import AvailabilityComputer
from src.service.seating.domain.booking_conflict_resolver import BookingConflictResolver
from src.service.seating.domain.enum.availability_status import AvailabilityStatus
from src.service.seating.domain.value_object.availability import FreeSlot
from test.service.seating.fakes import (
    FixedClock,
    InMemoryBookingRepo,
    InMemorySeatRepo,
    at,
    make_booking,
)


class TestGetAvailability:
    @pytest.fixture
    def use_case(self, seat_repo: InMemorySeatRepo, clock: FixedClock) -> GetAvailabilityUseCase:
        return GetAvailabilityUseCase(
            seat_repo=seat_repo,
            availability_computer=AvailabilityComputer(min_slot_minutes=30),
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_free_slots_around_booking_with_break(
        self, use_case: GetAvailabilityUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking_repo.add(make_booking(start=at(10), end=at(12), breaks=[(at(11), at(11, 40))]))

        availability = await use_case.execute(seat_id=1, query_start=at(9), query_end=at(14))

        assert availability.status == AvailabilityStatus.LIMITED
        assert availability.free_slots == [
            FreeSlot(start=at(9), end=at(10)),
            FreeSlot(start=at(12), end=at(14)),
        ]
        [window] = availability.break_windows
        assert (window.start, window.end) == (at(11), at(11, 40))
        assert window.free_slots == [FreeSlot(start=at(11), end=at(11, 40))]

    @pytest.mark.asyncio
    async def test_empty_seat_is_available(self, use_case: GetAvailabilityUseCase) -> None:
        availability = await use_case.execute(seat_id=2, query_start=at(9), query_end=at(14))
        assert availability.status == AvailabilityStatus.AVAILABLE
        assert availability.free_slots == [FreeSlot(start=at(9), end=at(14))]

    @pytest.mark.asyncio
    async def test_inverted_window(self, use_case: GetAvailabilityUseCase) -> None:
        with pytest.raises(ValidationError, match='Query end must be after query start'):
            await use_case.execute(seat_id=1, query_start=at(14), query_end=at(9))

    @pytest.mark.asyncio
    async def test_unknown_seat(self, use_case: GetAvailabilityUseCase) -> None:
        with pytest.raises(NotFoundError, match='Seat not found'):
            await use_case.execute(seat_id=404)


class TestSeatListing:
    @pytest.mark.asyncio
    async def test_filter_by_location(self, seat_repo: InMemorySeatRepo) -> None:
        use_case = ListSeatsUseCase(seat_repo=seat_repo)

        seats = await use_case.list_seats(location='Main Library')
        assert [s.seat_number for s in seats] == [1, 2]
        assert len(await use_case.list_seats()) == 3

    @pytest.mark.asyncio
    async def test_get_seat_projects_bookings(
        self, seat_repo: InMemorySeatRepo, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11), seat_id=3))
        seat = await ListSeatsUseCase(seat_repo=seat_repo).get_seat(seat_id=3)
        assert [e.booking_id for e in seat.entries] == [booking.id]

        with pytest.raises(NotFoundError):
            await ListSeatsUseCase(seat_repo=seat_repo).get_seat(seat_id=99)


class TestBookingQueries:
    @pytest.mark.asyncio
    async def test_get_booking_is_owner_only(self, booking_repo: InMemoryBookingRepo) -> None:
        booking = booking_repo.add(make_booking(start=at(10), end=at(11), user_id=1))
        use_case = GetBookingUseCase(booking_repo=booking_repo)

        assert await use_case.execute(booking_id=booking.id, user_id=1) == booking
        with pytest.raises(ForbiddenError, match='Not authorized to view this booking'):
            await use_case.execute(booking_id=booking.id, user_id=2)
        with pytest.raises(NotFoundError):
            await use_case.execute(booking_id=uuid_utils.uuid7(), user_id=1)

    @pytest.mark.asyncio
    async def test_list_my_bookings_newest_first(self, booking_repo: InMemoryBookingRepo) -> None:
        older = booking_repo.add(make_booking(start=at(9, day=9), end=at(10, day=9)))
        newer = booking_repo.add(make_booking(start=at(9), end=at(10)))
        booking_repo.add(make_booking(start=at(9), end=at(10), user_id=2, seat_id=2))

        bookings = await ListMyBookingsUseCase(booking_repo=booking_repo).execute(user_id=1)
        assert [b.id for b in bookings] == [newer.id, older.id]


class TestListAvailableSeats:
    @pytest.fixture
    def use_case(
        self, seat_repo: InMemorySeatRepo, clock: FixedClock
    ) -> ListAvailableSeatsUseCase:
        return ListAvailableSeatsUseCase(
            seat_repo=seat_repo,
            conflict_resolver=BookingConflictResolver(min_booking_minutes=30),
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_booked_seats_left_out(
        self, use_case: ListAvailableSeatsUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking_repo.add(make_booking(start=at(10), end=at(11), seat_id=1))
        booking_repo.add(make_booking(start=at(11), end=at(12), user_id=2, seat_id=2))

        seats = await use_case.execute(start=at(10, 30), end=at(11, 30))

        assert [s.id for s in seats] == [3]

    @pytest.mark.asyncio
    async def test_break_window_counts_as_free(
        self, use_case: ListAvailableSeatsUseCase, booking_repo: InMemoryBookingRepo
    ) -> None:
        booking_repo.add(
            make_booking(start=at(9), end=at(12), seat_id=1, breaks=[(at(10), at(10, 40))])
        )

        inside = await use_case.execute(
            start=at(10, 5), end=at(10, 35), location='Main Library'
        )
        spilling = await use_case.execute(
            start=at(10, 5), end=at(10, 45), location='Main Library'
        )

        assert [s.id for s in inside] == [1, 2]
        assert [s.id for s in spilling] == [2]

    @pytest.mark.asyncio
    async def test_invalid_window_rejected(self, use_case: ListAvailableSeatsUseCase) -> None:
        with pytest.raises(ValidationError, match='at least 30 minutes'):
            await use_case.execute(start=at(10), end=at(10, 15))
        with pytest.raises(ValidationError, match='in the past'):
            await use_case.execute(start=at(7), end=at(9))
