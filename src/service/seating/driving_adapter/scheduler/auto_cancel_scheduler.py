from datetime import datetime, timedelta
from typing import Optional

import anyio
from anyio.abc import TaskGroup
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.command.auto_cancel_booking_use_case import AutoCancelBookingUseCase
from src.service.seating.app.interface.i_attendance_deadline_store import (
    IAttendanceDeadlineStore,
)
from src.service.seating.app.interface.i_attendance_scheduler import IAttendanceScheduler
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock


class AutoCancelScheduler(IAttendanceScheduler):
    """
    Durable attendance-deadline worker.

    - schedule(): write the deadline to the store and wake the worker
    - worker loop: poll the store for due deadlines, evaluate each one
      concurrently through AutoCancelBookingUseCase
    - failed evaluations go back into the store with exponential backoff,
      they are never dropped
    - recover(): on startup, rebuild deadlines from live unconfirmed bookings
      (covers bookings whose deadline write was lost)

    Deadlines already in the past are due on the next pass, which schedule()
    triggers immediately; nothing is evaluated inline in the caller, which is
    still holding the seat lock.
    """

    def __init__(
        self,
        *,
        deadline_store: IAttendanceDeadlineStore,
        auto_cancel_use_case: AutoCancelBookingUseCase,
        booking_repo: IBookingRepo,
        clock: IClock,
        grace_minutes: int,
        poll_interval: float = 5.0,
        batch_size: int = 100,
        retry_base_seconds: float = 2.0,
        retry_max_seconds: float = 300.0,
    ) -> None:
        self.deadline_store = deadline_store
        self.auto_cancel_use_case = auto_cancel_use_case
        self.booking_repo = booking_repo
        self.clock = clock
        self.grace_minutes = grace_minutes
        self.poll_interval = poll_interval
        self.batch_size = batch_size
        self.retry_base_seconds = retry_base_seconds
        self.retry_max_seconds = retry_max_seconds
        self._attempts: dict[str, int] = {}
        self._wakeup = anyio.Event()
        self._cancel_scope: Optional[anyio.CancelScope] = None

    @Logger.io
    async def schedule(self, *, booking_id: UUID, deadline: datetime) -> None:
        await self.deadline_store.put(booking_id=booking_id, due_at=deadline)
        if deadline <= self.clock.now():
            self._wakeup.set()

    @Logger.io
    async def cancel(self, *, booking_id: UUID) -> None:
        await self.deadline_store.remove(booking_id=booking_id)
        self._attempts.pop(str(booking_id), None)

    @Logger.io
    async def recover(self) -> int:
        recovered = 0
        # Ended but unconfirmed bookings are still no-shows: their deadline stays due
        for booking in await self.booking_repo.list_pending_attendance():
            if not booking.is_live or booking.attendance_confirmed:
                continue
            await self.deadline_store.put(
                booking_id=booking.id,
                due_at=booking.attendance_deadline(grace_minutes=self.grace_minutes),
            )
            recovered += 1
        Logger.base.info(f'♻️ [AUTO-CANCEL] Recovered {recovered} pending attendance deadlines')
        return recovered

    async def start(self, *, task_group: TaskGroup) -> None:
        await self.recover()
        task_group.start_soon(self._run_loop)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(f'⏰ [AUTO-CANCEL] Scheduler started (poll every {self.poll_interval}s)')

    def stop(self) -> None:
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()
            Logger.base.info('🛑 [AUTO-CANCEL] Scheduler stopped')

    async def _run_loop(self) -> None:
        with anyio.CancelScope() as scope:
            self._cancel_scope = scope
            while True:
                try:
                    await self.run_once()
                except Exception as e:
                    # Store unreachable: keep the loop alive, deadlines are still in the store
                    Logger.base.error(f'❌ [AUTO-CANCEL] Poll failed: {e}')

                with anyio.move_on_after(self.poll_interval):
                    await self._wakeup.wait()
                self._wakeup = anyio.Event()

    async def run_once(self) -> int:
        """
        Evaluate every deadline due right now.

        Returns:
            Number of deadlines picked up
        """
        due = await self.deadline_store.due(now=self.clock.now(), limit=self.batch_size)
        metrics.pending_deadlines.set(len(due))
        if not due:
            return 0

        async with anyio.create_task_group() as tg:
            for booking_id in due:
                tg.start_soon(self._evaluate, booking_id)  # pyrefly: ignore[bad-argument-type]
        return len(due)

    async def _evaluate(self, booking_id: UUID) -> None:
        try:
            booking = await self.auto_cancel_use_case.execute(booking_id=booking_id)
        except Exception as e:
            await self._retry_later(booking_id, e)
            return

        await self.deadline_store.remove(booking_id=booking_id)
        self._attempts.pop(str(booking_id), None)
        if booking is None:
            metrics.record_auto_cancel(result='missing')
        elif booking.cancellation_reason and not booking.attendance_confirmed:
            metrics.record_auto_cancel(result='cancelled')
        else:
            metrics.record_auto_cancel(result='skipped')

    async def _retry_later(self, booking_id: UUID, error: Exception) -> None:
        attempt = self._attempts.get(str(booking_id), 0) + 1
        self._attempts[str(booking_id)] = attempt
        delay = min(self.retry_base_seconds * 2 ** (attempt - 1), self.retry_max_seconds)
        Logger.base.warning(
            f'🔁 [AUTO-CANCEL] {booking_id} evaluation failed (attempt {attempt}), '
            f'retrying in {delay:.0f}s: {type(error).__name__}: {error}'
        )
        metrics.record_auto_cancel(result='retry')
        await self.deadline_store.put(
            booking_id=booking_id, due_at=self.clock.now() + timedelta(seconds=delay)
        )
