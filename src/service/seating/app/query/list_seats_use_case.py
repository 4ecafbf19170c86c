from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_repo import ISeatRepo
from src.service.seating.domain.entity.seat_entity import Seat


class ListSeatsUseCase:
    def __init__(self, *, seat_repo: ISeatRepo) -> None:
        self.seat_repo = seat_repo

    @classmethod
    @inject
    def depends(cls, seat_repo: ISeatRepo = Depends(Provide[Container.seat_repo])) -> Self:
        return cls(seat_repo=seat_repo)

    @Logger.io
    async def list_seats(self, *, location: Optional[str] = None) -> List[Seat]:
        return await self.seat_repo.list_seats(location=location)

    @Logger.io
    async def get_seat(self, *, seat_id: int) -> Seat:
        seat = await self.seat_repo.get_by_id(seat_id=seat_id)
        if not seat:
            raise NotFoundError('Seat not found')
        return seat
