from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_lock import ISeatLock, seat_lock_key
from src.service.seating.domain.entity.booking_entity import auto_cancel_reason


class CompleteExpiredBookingsUseCase:
    """
    Persist the lazy `completed` status of live bookings whose end has passed.

    Reads already treat such bookings as completed; this sweep only keeps the
    stored status in step (run it from cron via script/complete_expired_bookings.py).
    An ended booking whose attendance was never confirmed is a no-show and is
    cancelled with the auto-cancel reason instead, in case its deadline
    evaluation has not run yet.
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

    @Logger.io
    async def execute(self) -> int:
        completed = 0
        no_shows = 0
        for booking in await self.booking_repo.list_live_ended_before(now=self.clock.now()):
            async with self.seat_lock.hold(seat_lock_key(booking.seat_id)):
                current = await self.booking_repo.get_by_id(booking_id=booking.id)
                now = self.clock.now()
                if current is None or not current.is_live or current.end > now:
                    continue
                if not current.attendance_confirmed:
                    cancelled = current.auto_cancel(
                        reason=auto_cancel_reason(self.grace_minutes), now=now
                    )
                    await self.booking_repo.update(booking=cancelled)
                    no_shows += 1
                    continue
                await self.booking_repo.update(booking=current.complete(now=now))
                completed += 1

        Logger.base.info(
            f'✅ [BOOKING] Marked {completed} expired bookings as completed, '
            f'cancelled {no_shows} no-shows'
        )
        return completed
