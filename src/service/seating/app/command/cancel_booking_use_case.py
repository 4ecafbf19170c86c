from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.interface.i_attendance_scheduler import IAttendanceScheduler
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_lock import ISeatLock, seat_lock_key
from src.service.seating.domain.entity.booking_entity import (
    USER_CANCELLATION_REASON,
    Booking,
    BookingStatus,
)


class CancelBookingUseCase:
    """
    Member-initiated cancellation.

    Idempotent: cancelling an already cancelled booking returns it unchanged.
    The seat is released by the status change itself (cancelled bookings drop
    out of the seat projection); the pending attendance deadline is removed.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        seat_lock: ISeatLock,
        attendance_scheduler: IAttendanceScheduler,
        clock: IClock,
    ) -> None:
        self.booking_repo = booking_repo
        self.seat_lock = seat_lock
        self.attendance_scheduler = attendance_scheduler
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        seat_lock: ISeatLock = Depends(Provide[Container.seat_lock]),
        attendance_scheduler: IAttendanceScheduler = Depends(
            Provide[Container.attendance_scheduler]
        ),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            booking_repo=booking_repo,
            seat_lock=seat_lock,
            attendance_scheduler=attendance_scheduler,
            clock=clock,
        )

    @Logger.io
    async def execute(self, *, booking_id: UUID, user_id: int) -> Booking:
        with (
            metrics.track_booking_operation('cancel_booking'),
            self.tracer.start_as_current_span(
                'use_case.cancel_booking',
                attributes={'booking.id': str(booking_id), 'user.id': user_id},
            ),
        ):
            booking = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')
            if booking.user_id != user_id:
                raise ForbiddenError('Only the booking holder can cancel this booking')
            if booking.status == BookingStatus.CANCELLED:
                return booking

            async with self.seat_lock.hold(seat_lock_key(booking.seat_id)):
                booking = await self.booking_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                if booking.status == BookingStatus.CANCELLED:
                    return booking

                cancelled = booking.cancel(reason=USER_CANCELLATION_REASON, now=self.clock.now())
                cancelled = await self.booking_repo.update(booking=cancelled)

            await self.attendance_scheduler.cancel(booking_id=booking_id)
            Logger.base.info(f'🚫 [BOOKING] {booking_id} cancelled by user {user_id}')
            return cancelled
