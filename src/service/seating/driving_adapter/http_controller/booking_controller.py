from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.config.di import container
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.seating.app.command.add_break_use_case import AddBreakUseCase
from src.service.seating.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.seating.app.command.confirm_attendance_use_case import ConfirmAttendanceUseCase
from src.service.seating.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.seating.app.query.get_booking_use_case import GetBookingUseCase
from src.service.seating.app.query.list_my_bookings_use_case import ListMyBookingsUseCase
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.value_object.geo_point import GeoPoint
from src.service.seating.domain.value_object.member import Member
from src.service.seating.driving_adapter.http_controller.auth.current_member import (
    get_current_member,
)
from src.service.seating.driving_adapter.http_controller.schema.booking_schema import (
    AttendanceRequest,
    BookingCreateRequest,
    BookingResponse,
    BreakCreateRequest,
    BreakResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def to_booking_response(booking: Booking) -> BookingResponse:
    """Status is reported lazily: a live booking past its end shows as completed"""
    now = container.clock().now()
    return BookingResponse(
        id=booking.id,
        user_id=booking.user_id,
        seat_id=booking.seat_id,
        location=booking.location,
        seat_number=booking.seat_number,
        start=booking.start,
        end=booking.end,
        status=booking.effective_status(now).value,
        attendance=booking.attendance_state.value,
        attendance_confirmed_at=booking.attendance_confirmed_at,
        breaks=[BreakResponse(start=b.start, end=b.end) for b in booking.breaks],
        cancellation_reason=booking.cancellation_reason,
        created_at=booking.created_at,
    )


@router.get('/my_booking', response_model=List[BookingResponse])
@Logger.io
async def list_my_bookings(
    current_member: Member = Depends(get_current_member),
    use_case: ListMyBookingsUseCase = Depends(ListMyBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.execute(user_id=current_member.id)
    return [to_booking_response(b) for b in bookings]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_member: Member = Depends(get_current_member),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('seat.id', request.seat_id)
        span.set_attribute('user.id', current_member.id)

        booking = await use_case.execute(
            seat_id=request.seat_id,
            member=current_member,
            start=request.start,
            end=request.end,
        )
        span.set_attribute('booking.id', str(booking.id))
        return to_booking_response(booking)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    current_member: Member = Depends(get_current_member),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id, user_id=current_member.id)
    return to_booking_response(booking)


@router.post('/{booking_id}/break', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_break(
    booking_id: UtilsUUID7,
    request: BreakCreateRequest,
    current_member: Member = Depends(get_current_member),
    use_case: AddBreakUseCase = Depends(AddBreakUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id,
        user_id=current_member.id,
        start=request.start,
        end=request.end,
    )
    return to_booking_response(booking)


@router.delete('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    current_member: Member = Depends(get_current_member),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id, user_id=current_member.id)
    return to_booking_response(booking)


@router.post('/{booking_id}/attendance', status_code=status.HTTP_200_OK)
@Logger.io
async def confirm_attendance(
    booking_id: UtilsUUID7,
    request: AttendanceRequest = AttendanceRequest(),
    current_member: Member = Depends(get_current_member),
    use_case: ConfirmAttendanceUseCase = Depends(ConfirmAttendanceUseCase.depends),
) -> BookingResponse:
    if (request.latitude is None) != (request.longitude is None):
        raise ValidationError('latitude and longitude must be sent together')

    point = None
    if request.latitude is not None and request.longitude is not None:
        point = GeoPoint(latitude=request.latitude, longitude=request.longitude)

    booking = await use_case.execute(
        booking_id=booking_id, user_id=current_member.id, point=point
    )
    return to_booking_response(booking)
