from datetime import datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_repo import ISeatRepo
from src.service.seating.domain.booking_conflict_resolver import BookingConflictResolver
from src.service.seating.domain.entity.seat_entity import Seat


class ListAvailableSeatsUseCase:
    """
    Seats a new booking for [start, end) would be admitted on right now.

    Applies the window rules and the per-seat rules of BookingConflictResolver
    (including break windows); the one-live-booking-per-member rule depends on
    who asks and is left to CreateBooking.
    """

    def __init__(
        self,
        *,
        seat_repo: ISeatRepo,
        conflict_resolver: BookingConflictResolver,
        clock: IClock,
    ) -> None:
        self.seat_repo = seat_repo
        self.conflict_resolver = conflict_resolver
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_repo: ISeatRepo = Depends(Provide[Container.seat_repo]),
        conflict_resolver: BookingConflictResolver = Depends(
            Provide[Container.booking_conflict_resolver]
        ),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(seat_repo=seat_repo, conflict_resolver=conflict_resolver, clock=clock)

    @Logger.io
    async def execute(
        self, *, start: datetime, end: datetime, location: Optional[str] = None
    ) -> List[Seat]:
        now = self.clock.now()
        self.conflict_resolver.validate_window(start=start, end=end, now=now)

        with self.tracer.start_as_current_span(
            'use_case.list_available_seats',
            attributes={'seat.location': location or '*'},
        ):
            seats = await self.seat_repo.list_seats(location=location)
            return [
                seat
                for seat in seats
                if self.conflict_resolver.is_seat_bookable(seat=seat, start=start, end=end, now=now)
            ]
