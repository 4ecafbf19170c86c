from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_repo import ISeatRepo
from src.service.seating.domain.availability_computer import AvailabilityComputer
from src.service.seating.domain.value_object.availability import SeatAvailability


class GetAvailabilityUseCase:
    """Free slots, overall status and open break windows of one seat"""

    def __init__(
        self,
        *,
        seat_repo: ISeatRepo,
        availability_computer: AvailabilityComputer,
        clock: IClock,
    ) -> None:
        self.seat_repo = seat_repo
        self.availability_computer = availability_computer
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_repo: ISeatRepo = Depends(Provide[Container.seat_repo]),
        availability_computer: AvailabilityComputer = Depends(
            Provide[Container.availability_computer]
        ),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(seat_repo=seat_repo, availability_computer=availability_computer, clock=clock)

    @Logger.io
    async def execute(
        self,
        *,
        seat_id: int,
        query_start: Optional[datetime] = None,
        query_end: Optional[datetime] = None,
    ) -> SeatAvailability:
        if query_start and query_end and query_start >= query_end:
            raise ValidationError('Query end must be after query start')

        with self.tracer.start_as_current_span(
            'use_case.get_availability', attributes={'seat.id': seat_id}
        ):
            seat = await self.seat_repo.get_by_id(seat_id=seat_id)
            if not seat:
                raise NotFoundError('Seat not found')

            return self.availability_computer.compute(
                seat, query_start=query_start, query_end=query_end, now=self.clock.now()
            )
