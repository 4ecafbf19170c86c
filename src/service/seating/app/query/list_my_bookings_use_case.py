from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_booking_repo import IBookingRepo
from src.service.seating.domain.entity.booking_entity import Booking


class ListMyBookingsUseCase:
    def __init__(self, *, booking_repo: IBookingRepo) -> None:
        self.booking_repo = booking_repo

    @classmethod
    @inject
    def depends(cls, booking_repo: IBookingRepo = Depends(Provide[Container.booking_repo])) -> Self:
        return cls(booking_repo=booking_repo)

    @Logger.io
    async def execute(self, *, user_id: int) -> List[Booking]:
        return await self.booking_repo.list_by_user(user_id=user_id)
