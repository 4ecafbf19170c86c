from src.service.seating.domain.availability_computer import AvailabilityComputer
from src.service.seating.domain.entity.booking_entity import BookingStatus
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.domain.enum.availability_status import AvailabilityStatus
from src.service.seating.domain.value_object.availability import FreeSlot
from test.service.seating.fakes import at, make_booking


def _seat(*bookings) -> Seat:
    return Seat.project(id=1, location='Main Library', seat_number=1, bookings=bookings)


class TestFreeSlots:
    def setup_method(self) -> None:
        self.computer = AvailabilityComputer(min_slot_minutes=30)

    def test_empty_seat_returns_single_window_slot(self) -> None:
        """
        Given a seat with no bookings
        When availability is asked for 09:00-18:00 at 08:00
        Then exactly one slot spans the whole window
        """
        slots = self.computer.free_slots([], query_start=at(9), query_end=at(18), now=at(8))
        assert slots == [FreeSlot(start=at(9), end=at(18))]

    def test_empty_seat_unbounded_window(self) -> None:
        slots = self.computer.free_slots([], query_start=None, query_end=None, now=at(8))
        assert slots == [FreeSlot(start=at(8), end=None)]

    def test_gaps_between_bookings(self) -> None:
        seat = _seat(
            make_booking(start=at(10), end=at(11), user_id=1),
            make_booking(start=at(12), end=at(13), user_id=2),
        )
        slots = self.computer.free_slots(
            seat.entries, query_start=at(9), query_end=at(18), now=at(8)
        )
        assert slots == [
            FreeSlot(start=at(9), end=at(10)),
            FreeSlot(start=at(11), end=at(12)),
            FreeSlot(start=at(13), end=at(18)),
        ]

    def test_short_gaps_are_dropped(self) -> None:
        """Given bookings 10:00-11:00 and 11:20-12:00 Then the 20-minute gap is not offered"""
        seat = _seat(
            make_booking(start=at(10), end=at(11), user_id=1),
            make_booking(start=at(11, 20), end=at(12), user_id=2),
        )
        slots = self.computer.free_slots(
            seat.entries, query_start=at(10), query_end=at(12), now=at(8)
        )
        assert slots == []

    def test_window_never_starts_in_the_past(self) -> None:
        slots = self.computer.free_slots([], query_start=at(9), query_end=at(18), now=at(10))
        assert slots == [FreeSlot(start=at(10), end=at(18))]

    def test_ended_bookings_do_not_block(self) -> None:
        seat = _seat(make_booking(start=at(9), end=at(10)))
        slots = self.computer.free_slots(
            seat.entries, query_start=at(9), query_end=at(12), now=at(10, 30)
        )
        assert slots == [FreeSlot(start=at(10, 30), end=at(12))]

    def test_unbounded_window_gets_open_trailing_slot(self) -> None:
        seat = _seat(make_booking(start=at(10), end=at(11)))
        slots = self.computer.free_slots(seat.entries, query_start=None, query_end=None, now=at(9))
        assert slots == [FreeSlot(start=at(9), end=at(10)), FreeSlot(start=at(11), end=None)]

    def test_booking_past_query_end_is_clamped(self) -> None:
        seat = _seat(make_booking(start=at(11), end=at(14)))
        slots = self.computer.free_slots(
            seat.entries, query_start=at(9), query_end=at(12), now=at(8)
        )
        assert slots == [FreeSlot(start=at(9), end=at(11))]

    def test_inverted_window_returns_nothing(self) -> None:
        assert self.computer.free_slots([], query_start=at(9), query_end=at(9), now=at(8)) == []


class TestCompute:
    def setup_method(self) -> None:
        self.computer = AvailabilityComputer(min_slot_minutes=30)

    def test_status_available_limited_booked(self) -> None:
        empty = self.computer.compute(_seat(), query_start=at(9), query_end=at(12), now=at(8))
        assert empty.status == AvailabilityStatus.AVAILABLE

        partial = self.computer.compute(
            _seat(make_booking(start=at(10), end=at(11))),
            query_start=at(9),
            query_end=at(12),
            now=at(8),
        )
        assert partial.status == AvailabilityStatus.LIMITED

        full = self.computer.compute(
            _seat(make_booking(start=at(9), end=at(12))),
            query_start=at(9),
            query_end=at(12),
            now=at(8),
        )
        assert full.status == AvailabilityStatus.BOOKED
        assert full.free_slots == []

    def test_break_window_lists_unclaimed_part(self) -> None:
        """
        Given a holder 09:00-12:00 with a break 10:00-11:00
        And another member already booked 10:00-10:30 inside the break
        Then the break window offers only 10:30-11:00
        """
        holder = make_booking(start=at(9), end=at(12), user_id=1, breaks=[(at(10), at(11))])
        guest = make_booking(start=at(10), end=at(10, 30), user_id=2)

        result = self.computer.compute(
            _seat(holder, guest), query_start=at(9), query_end=at(12), now=at(8)
        )

        assert result.status == AvailabilityStatus.BOOKED
        assert len(result.break_windows) == 1
        window = result.break_windows[0]
        assert window.booking_id == holder.id
        assert (window.start, window.end) == (at(10), at(11))
        assert window.free_slots == [FreeSlot(start=at(10, 30), end=at(11))]

    def test_cancelled_booking_frees_the_seat(self) -> None:
        cancelled = make_booking(start=at(10), end=at(11), status=BookingStatus.CANCELLED)
        result = self.computer.compute(
            _seat(cancelled), query_start=at(9), query_end=at(12), now=at(8)
        )
        assert result.status == AvailabilityStatus.AVAILABLE
