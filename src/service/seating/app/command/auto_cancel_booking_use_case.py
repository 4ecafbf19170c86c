from typing import Optional

from opentelemetry import trace
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_lock import ISeatLock, seat_lock_key
from src.service.seating.domain.entity.booking_entity import (
    AttendanceState,
    Booking,
    auto_cancel_reason,
)


class AutoCancelBookingUseCase:
    """
    Evaluate one expired attendance deadline.

    Runs under the same seat lock as member operations and always reloads the
    booking, so a confirmation or cancellation that raced the deadline wins.
    Outcomes:
    - booking gone → None
    - already confirmed / cancelled / completed → returned unchanged
    - still pending → cancelled with the auto-cancel reason, even when the
      evaluation runs after the booking end (a delayed retry or a restart)
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        seat_lock: ISeatLock,
        clock: IClock,
        grace_minutes: int,
    ) -> None:
        self.booking_repo = booking_repo
        self.seat_lock = seat_lock
        self.clock = clock
        self.grace_minutes = grace_minutes
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self, *, booking_id: UUID) -> Optional[Booking]:
        with self.tracer.start_as_current_span(
            'use_case.auto_cancel_booking', attributes={'booking.id': str(booking_id)}
        ):
            booking = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not booking:
                Logger.base.warning(f'⚠️ [AUTO-CANCEL] Booking {booking_id} no longer exists')
                return None

            async with self.seat_lock.hold(seat_lock_key(booking.seat_id)):
                booking = await self.booking_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    return None

                now = self.clock.now()
                if booking.attendance_state != AttendanceState.PENDING or not booking.is_live:
                    return booking

                cancelled = booking.auto_cancel(
                    reason=auto_cancel_reason(self.grace_minutes), now=now
                )
                cancelled = await self.booking_repo.update(booking=cancelled)

            Logger.base.info(
                f'⏰ [AUTO-CANCEL] {booking_id} cancelled, no attendance within '
                f'{self.grace_minutes} minutes of {booking.start.isoformat()}'
            )
            return cancelled
