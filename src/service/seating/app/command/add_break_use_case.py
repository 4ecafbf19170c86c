from datetime import datetime
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConsistencyError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_lock import ISeatLock, seat_lock_key
from src.service.seating.app.interface.i_seat_repo import ISeatRepo
from src.service.seating.domain.break_manager import BreakManager
from src.service.seating.domain.entity.booking_entity import Booking


class AddBreakUseCase:
    """
    Let a holder step away for part of their booking.

    The booking stays live (status on_break) and keeps its seat; the break
    window shows up on the seat as an `on_break` entry that others may book into.
    """

    def __init__(
        self,
        *,
        seat_repo: ISeatRepo,
        booking_repo: IBookingRepo,
        seat_lock: ISeatLock,
        break_manager: BreakManager,
        clock: IClock,
    ) -> None:
        self.seat_repo = seat_repo
        self.booking_repo = booking_repo
        self.seat_lock = seat_lock
        self.break_manager = break_manager
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_repo: ISeatRepo = Depends(Provide[Container.seat_repo]),
        booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo]),
        seat_lock: ISeatLock = Depends(Provide[Container.seat_lock]),
        break_manager: BreakManager = Depends(Provide[Container.break_manager]),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            seat_repo=seat_repo,
            booking_repo=booking_repo,
            seat_lock=seat_lock,
            break_manager=break_manager,
            clock=clock,
        )

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, user_id: int, start: datetime, end: datetime
    ) -> Booking:
        with (
            metrics.track_booking_operation('add_break'),
            self.tracer.start_as_current_span(
                'use_case.add_break',
                attributes={'booking.id': str(booking_id), 'user.id': user_id},
            ),
        ):
            booking = await self.booking_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')

            async with self.seat_lock.hold(seat_lock_key(booking.seat_id)):
                booking = await self.booking_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                seat = await self.seat_repo.get_by_id(seat_id=booking.seat_id)
                if not seat:
                    raise ConsistencyError(
                        f'Booking {booking_id} points at missing seat {booking.seat_id}'
                    )

                updated = self.break_manager.add_break(
                    booking=booking,
                    seat=seat,
                    requester_id=user_id,
                    start=start,
                    end=end,
                    now=self.clock.now(),
                )
                updated = await self.booking_repo.update(booking=updated)

            Logger.base.info(
                f'☕ [BREAK] {booking_id} on seat {booking.seat_id}: '
                f'{start.isoformat()} to {end.isoformat()}'
            )
            return updated
