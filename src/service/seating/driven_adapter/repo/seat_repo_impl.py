from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_repo import ISeatRepo
from src.service.seating.domain.entity.booking_entity import LIVE_STATUSES, Booking
from src.service.seating.domain.entity.seat_entity import Seat
from src.service.seating.driven_adapter.model.booking_model import BookingModel
from src.service.seating.driven_adapter.model.seat_model import SeatModel
from src.service.seating.driven_adapter.repo.booking_repo_impl import BookingRepoImpl


class SeatRepoImpl(ISeatRepo):
    """Seats are read together with their live bookings and projected into entries"""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    async def _live_bookings(
        session: AsyncSession, seat_ids: Sequence[int]
    ) -> dict[int, List[Booking]]:
        result = await session.execute(
            select(BookingModel).where(
                BookingModel.seat_id.in_(seat_ids),
                BookingModel.status.in_([s.value for s in LIVE_STATUSES]),
            )
        )
        grouped: dict[int, List[Booking]] = defaultdict(list)
        for db_booking in result.scalars().all():
            grouped[db_booking.seat_id].append(BookingRepoImpl._to_entity(db_booking))
        return grouped

    @staticmethod
    def _to_entity(db_seat: SeatModel, bookings: List[Booking]) -> Seat:
        return Seat.project(
            id=db_seat.id,
            location=db_seat.location,
            seat_number=db_seat.seat_number,
            bookings=bookings,
            created_at=db_seat.created_at,
        )

    @Logger.io
    async def get_by_id(self, *, seat_id: int) -> Optional[Seat]:
        async with self._get_session() as session:
            db_seat = await session.get(SeatModel, seat_id)
            if not db_seat:
                return None
            bookings = await self._live_bookings(session, [seat_id])
            return self._to_entity(db_seat, bookings.get(seat_id, []))

    @Logger.io
    async def list_seats(self, *, location: Optional[str] = None) -> List[Seat]:
        async with self._get_session() as session:
            stmt = select(SeatModel).order_by(SeatModel.location, SeatModel.seat_number)
            if location:
                stmt = stmt.where(SeatModel.location == location)
            db_seats = (await session.execute(stmt)).scalars().all()
            if not db_seats:
                return []

            bookings = await self._live_bookings(session, [s.id for s in db_seats])
            return [self._to_entity(s, bookings.get(s.id, [])) for s in db_seats]

    @Logger.io
    async def ensure_seats(self, *, location: str, seat_numbers: List[int]) -> int:
        if not seat_numbers:
            return 0
        async with self._get_session() as session:
            stmt = (
                insert(SeatModel)
                .values([{'location': location, 'seat_number': n} for n in seat_numbers])
                .on_conflict_do_nothing(index_elements=['location', 'seat_number'])
                .returning(SeatModel.id)
            )
            created = len((await session.execute(stmt)).scalars().all())
            await session.commit()
            return created
