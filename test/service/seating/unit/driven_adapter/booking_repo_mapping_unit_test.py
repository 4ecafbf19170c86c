import uuid

import uuid_utils

from src.service.seating.domain.entity.booking_entity import BookingStatus, Break
from src.service.seating.driven_adapter.model.booking_model import BookingBreakModel, BookingModel
from src.service.seating.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from test.service.seating.fakes import at, make_booking


def test_row_maps_to_booking_with_breaks() -> None:
    booking_id = uuid_utils.uuid7()
    row = BookingModel(
        id=uuid.UUID(str(booking_id)),
        user_id=4,
        user_name='Dana',
        user_email='dana@example.com',
        seat_id=2,
        location='Main Library',
        seat_number=2,
        start_time=at(9),
        end_time=at(12),
        status='on_break',
        attendance_confirmed=True,
        attendance_confirmed_at=at(9, 5),
        cancellation_reason=None,
        created_at=at(8),
        updated_at=at(9, 5),
    )
    row.breaks = [BookingBreakModel(start_time=at(10), end_time=at(10, 40))]

    booking = BookingRepoImpl._to_entity(row)

    assert isinstance(booking.id, uuid_utils.UUID)
    assert str(booking.id) == str(booking_id)
    assert booking.status == BookingStatus.ON_BREAK
    assert booking.breaks == [Break(start=at(10), end=at(10, 40))]
    assert booking.attendance_confirmed_at == at(9, 5)


def test_breaks_map_to_rows() -> None:
    booking = make_booking(start=at(9), end=at(12), breaks=[(at(10), at(10, 30)), (at(11), at(11, 30))])
    rows = BookingRepoImpl._to_break_models(booking)
    assert [(r.start_time, r.end_time) for r in rows] == [(at(10), at(10, 30)), (at(11), at(11, 30))]
